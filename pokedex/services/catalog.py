"""
Service integration for the external Pokémon catalog.

The catalog is a public, read-only, paginated HTTP API (PokeAPI or anything
shaped like it). This module only fetches; it does no formatting.
"""

import logging
from typing import Any, Dict, Optional

import requests
from flask import Flask, current_app

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'pokedex.catalog'


class CatalogUnavailable(RuntimeError):
    """The catalog could not be reached, or answered with an error."""


class UnknownPokemon(RuntimeError):
    """The catalog has no such Pokémon."""


class CatalogClient(object):
    """Fetches list and detail data from the catalog API."""

    def __init__(self, base_url: str, timeout: float = 10.0,
                 session: Optional[requests.Session] = None) -> None:
        self._base_url = base_url.rstrip('/')
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()

    def _get(self, path: str, **params: Any) -> requests.Response:
        url = f'{self._base_url}{path}'
        try:
            return self._session.get(url, params=params or None,
                                     timeout=self._timeout)
        except requests.exceptions.RequestException as e:
            logger.error('Catalog request to %s failed: %s', url, e)
            raise CatalogUnavailable(f'Could not reach catalog: {e}') from e

    def _json(self, response: requests.Response) -> Dict[str, Any]:
        if response.status_code != 200:
            logger.error('Catalog answered %i', response.status_code)
            raise CatalogUnavailable(f'Catalog answered {response.status_code}')
        try:
            data: Dict[str, Any] = response.json()
        except ValueError as e:
            raise CatalogUnavailable('Catalog answered with non-JSON') from e
        return data

    def list_pokemon(self, limit: int, offset: int) -> Dict[str, Any]:
        """Get one page of the catalog, as ``{count, next, previous, results}``."""
        return self._json(self._get('/pokemon', limit=limit, offset=offset))

    def get_pokemon(self, pokemon_id: str) -> Dict[str, Any]:
        """Get the detail record for one Pokémon, by id or name."""
        response = self._get(f'/pokemon/{pokemon_id}')
        if response.status_code == 404:
            raise UnknownPokemon(f'No such Pokemon: {pokemon_id}')
        return self._json(response)


def init_app(app: Flask) -> None:
    """Attach a :class:`.CatalogClient` configured from ``app.config``."""
    app.extensions[EXTENSION_KEY] = CatalogClient(
        app.config.get('CATALOG_URL', 'https://pokeapi.co/api/v2'),
        timeout=float(app.config.get('CATALOG_TIMEOUT', 10))
    )


def current_client() -> CatalogClient:
    """Get the :class:`.CatalogClient` for the current app."""
    client: CatalogClient = current_app.extensions[EXTENSION_KEY]
    return client
