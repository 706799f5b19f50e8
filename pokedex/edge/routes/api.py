"""
Provides the edge's JSON API.

The ``/api/auth`` routes proxy to the authority. The ``/api/pokemon`` routes
serve the catalog; they carry no decorator because
:class:`pokedex.auth.middleware.EdgeGateMiddleware` guards the whole prefix.
"""

import logging
from http import HTTPStatus

from flask import Blueprint, request, jsonify, Response

from pokedex.auth.exceptions import AuthorityUnreachable
from pokedex.controllers import catalog

from . import relay_cookies
from ..services import authority
from ..services.authority import AuthorityResponse

logger = logging.getLogger(__name__)

blueprint = Blueprint('api', __name__, url_prefix='/api')

PROXY_FAILED = {'error': 'Internal server error'}


def _relay(upstream: AuthorityResponse) -> Response:
    response = jsonify(upstream.data)
    response.status_code = upstream.status_code
    relay_cookies(response, upstream)
    return response


@blueprint.route('/auth/login', methods=['POST'])
def login() -> Response:
    """Forward a login to the authority."""
    payload = request.get_json(silent=True)
    try:
        upstream = authority.current_client().login(
            request.headers.get('Cookie'),
            payload if payload is not None else {}
        )
    except AuthorityUnreachable:
        logger.error('Error proxying login request')
        return jsonify(PROXY_FAILED), HTTPStatus.INTERNAL_SERVER_ERROR
    return _relay(upstream)


@blueprint.route('/auth/logout', methods=['POST'])
def logout() -> Response:
    """Forward a logout to the authority."""
    try:
        upstream = authority.current_client().logout(
            request.headers.get('Cookie')
        )
    except AuthorityUnreachable:
        logger.error('Error proxying logout request')
        return jsonify(PROXY_FAILED), HTTPStatus.INTERNAL_SERVER_ERROR
    return _relay(upstream)


@blueprint.route('/auth/status', methods=['GET'])
def status() -> Response:
    """Forward a status check to the authority."""
    try:
        upstream = authority.current_client().status(
            request.headers.get('Cookie')
        )
    except AuthorityUnreachable:
        logger.error('Error proxying status request')
        return jsonify(PROXY_FAILED), HTTPStatus.INTERNAL_SERVER_ERROR
    return _relay(upstream)


@blueprint.route('/pokemon', methods=['GET'])
def list_pokemon() -> Response:
    """Get a page of the catalog."""
    data, code, headers = catalog.list_pokemon(request.args)
    return jsonify(data), code, headers


@blueprint.route('/pokemon/<string:pokemon_id>', methods=['GET'])
def get_pokemon(pokemon_id: str) -> Response:
    """Get one Pokémon from the catalog."""
    data, code, headers = catalog.get_pokemon(pokemon_id)
    return jsonify(data), code, headers
