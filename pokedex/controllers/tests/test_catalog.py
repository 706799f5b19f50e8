"""Tests for :mod:`pokedex.controllers.catalog`."""

from unittest import TestCase, mock
from http import HTTPStatus

from .. import catalog
from ...services.catalog import CatalogUnavailable, UnknownPokemon

PAGE = {'count': 1302, 'next': None, 'previous': None, 'results': []}


class TestListPokemon(TestCase):
    """Tests for :func:`.catalog.list_pokemon`."""

    @mock.patch(f'{catalog.__name__}.catalog.current_client')
    def test_defaults(self, current_client):
        """Without parameters the first twenty are fetched."""
        current_client.return_value.list_pokemon.return_value = PAGE
        data, code, headers = catalog.list_pokemon({})
        self.assertEqual(code, HTTPStatus.OK)
        self.assertEqual(data, PAGE)
        current_client.return_value.list_pokemon.assert_called_once_with(20, 0)

    @mock.patch(f'{catalog.__name__}.catalog.current_client')
    def test_paging(self, current_client):
        """Limit and offset are passed through."""
        current_client.return_value.list_pokemon.return_value = PAGE
        _, code, _ = catalog.list_pokemon({'limit': '5', 'offset': '10'})
        self.assertEqual(code, HTTPStatus.OK)
        current_client.return_value.list_pokemon.assert_called_once_with(5, 10)

    @mock.patch(f'{catalog.__name__}.catalog.current_client')
    def test_bad_limit(self, current_client):
        """Limits must be positive integers."""
        for limit in ('0', '-1', 'ten', '1.5'):
            data, code, _ = catalog.list_pokemon({'limit': limit})
            self.assertEqual(code, HTTPStatus.BAD_REQUEST)
            self.assertEqual(data['error'], 'Invalid limit parameter. '
                                            'Must be a positive number.')
        self.assertEqual(current_client.call_count, 0)

    @mock.patch(f'{catalog.__name__}.catalog.current_client')
    def test_bad_offset(self, current_client):
        """Offsets must be non-negative integers."""
        for offset in ('-1', 'x'):
            data, code, _ = catalog.list_pokemon({'offset': offset})
            self.assertEqual(code, HTTPStatus.BAD_REQUEST)
            self.assertEqual(data['error'], 'Invalid offset parameter. '
                                            'Must be a non-negative number.')
        self.assertEqual(current_client.call_count, 0)

    @mock.patch(f'{catalog.__name__}.catalog.current_client')
    def test_unavailable(self, current_client):
        """Catalog failures are a 500."""
        current_client.return_value.list_pokemon.side_effect = \
            CatalogUnavailable('down')
        data, code, _ = catalog.list_pokemon({})
        self.assertEqual(code, HTTPStatus.INTERNAL_SERVER_ERROR)
        self.assertEqual(data, {'error': 'Failed to fetch Pokemon list'})


class TestGetPokemon(TestCase):
    """Tests for :func:`.catalog.get_pokemon`."""

    @mock.patch(f'{catalog.__name__}.catalog.current_client')
    def test_found(self, current_client):
        current_client.return_value.get_pokemon.return_value = {'id': 25}
        data, code, _ = catalog.get_pokemon('25')
        self.assertEqual(code, HTTPStatus.OK)
        self.assertEqual(data, {'id': 25})

    @mock.patch(f'{catalog.__name__}.catalog.current_client')
    def test_not_found(self, current_client):
        current_client.return_value.get_pokemon.side_effect = \
            UnknownPokemon('missingno')
        data, code, _ = catalog.get_pokemon('missingno')
        self.assertEqual(code, HTTPStatus.NOT_FOUND)
        self.assertEqual(data, {'error': 'Pokemon not found'})

    @mock.patch(f'{catalog.__name__}.catalog.current_client')
    def test_unavailable(self, current_client):
        current_client.return_value.get_pokemon.side_effect = \
            CatalogUnavailable('down')
        data, code, _ = catalog.get_pokemon('25')
        self.assertEqual(code, HTTPStatus.INTERNAL_SERVER_ERROR)
        self.assertEqual(data, {'error': 'Failed to fetch Pokemon detail'})
