"""
Controllers for the protected catalog endpoints.

Both services expose the same catalog API; these controllers hold the request
validation and error mapping so that the routes only translate the
``(data, status, headers)`` tuple into a response.
"""

import logging
from typing import Tuple, Optional, Mapping
from http import HTTPStatus

from ..services import catalog

logger = logging.getLogger(__name__)

ResponseData = Tuple[dict, int, dict]

DEFAULT_LIMIT = 20
DEFAULT_OFFSET = 0


def _parse_int(value: Optional[str], default: int, minimum: int) \
        -> Optional[int]:
    if value is None or value == '':
        return default
    try:
        parsed = int(value)
    except ValueError:
        return None
    return parsed if parsed >= minimum else None


def list_pokemon(params: Mapping[str, str]) -> ResponseData:
    """
    Get one page of the catalog.

    Parameters
    ----------
    params : Mapping
        Request query parameters; ``limit`` and ``offset`` are read.

    Returns
    -------
    dict
        The catalog page, or an ``error`` message.
    int
        Status code.
    dict
        Headers to add to the response.

    """
    limit = _parse_int(params.get('limit'), DEFAULT_LIMIT, 1)
    if limit is None:
        return ({'error': 'Invalid limit parameter. Must be a positive number.'},
                HTTPStatus.BAD_REQUEST, {})
    offset = _parse_int(params.get('offset'), DEFAULT_OFFSET, 0)
    if offset is None:
        return ({'error': 'Invalid offset parameter. '
                          'Must be a non-negative number.'},
                HTTPStatus.BAD_REQUEST, {})

    try:
        data = catalog.current_client().list_pokemon(limit, offset)
    except catalog.CatalogUnavailable as e:
        logger.error('Error fetching Pokemon list: %s', e)
        return {'error': 'Failed to fetch Pokemon list'}, \
            HTTPStatus.INTERNAL_SERVER_ERROR, {}
    return data, HTTPStatus.OK, {}


def get_pokemon(pokemon_id: str) -> ResponseData:
    """Get the detail record for one Pokémon."""
    try:
        data = catalog.current_client().get_pokemon(pokemon_id)
    except catalog.UnknownPokemon:
        return {'error': 'Pokemon not found'}, HTTPStatus.NOT_FOUND, {}
    except catalog.CatalogUnavailable as e:
        logger.error('Error fetching Pokemon detail: %s', e)
        return {'error': 'Failed to fetch Pokemon detail'}, \
            HTTPStatus.INTERNAL_SERVER_ERROR, {}
    return data, HTTPStatus.OK, {}
