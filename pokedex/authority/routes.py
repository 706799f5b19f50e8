"""Provides the authority's JSON API."""

import logging
from http import HTTPStatus

from flask import Blueprint, current_app, request, jsonify, Response

from pokedex.auth import verify_request
from pokedex.auth.decorators import protected
from pokedex.auth.exceptions import InvalidCredentials
from pokedex.auth.sessions import SessionIssuer, set_session_cookie, \
    clear_session_cookie
from pokedex.controllers import catalog

logger = logging.getLogger(__name__)

ISSUER_KEY = 'pokedex.issuer'

blueprint = Blueprint('authority', __name__, url_prefix='/api')


def _issuer() -> SessionIssuer:
    issuer: SessionIssuer = current_app.extensions[ISSUER_KEY]
    return issuer


@blueprint.after_request
def apply_response_headers(response: Response) -> Response:
    """Prevent UI redress attacks."""
    response.headers['Content-Security-Policy'] = "frame-ancestors 'none'"
    response.headers['X-Frame-Options'] = 'DENY'
    return response


@blueprint.route('/login', methods=['POST'])
def login() -> Response:
    """Log in with a JSON username and password, and set the session cookie."""
    # Anything other than a JSON object with string fields is simply a
    # failed login.
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    try:
        issued = _issuer().login(data.get('username'), data.get('password'))
    except InvalidCredentials:
        logger.info('Login failed')
        return jsonify(error='Invalid credentials'), HTTPStatus.UNAUTHORIZED

    response = jsonify(message='Login successful')
    set_session_cookie(response, issued.token, issued.cookie,
                       name=current_app.config['AUTH_SESSION_COOKIE_NAME'])
    return response


@blueprint.route('/logout', methods=['POST'])
def logout() -> Response:
    """Expire the session cookie, whether or not there was a session."""
    response = jsonify(message='Logout successful')
    clear_session_cookie(response, _issuer().logout(),
                         name=current_app.config['AUTH_SESSION_COOKIE_NAME'])
    return response


@blueprint.route('/status', methods=['GET'])
def status() -> Response:
    """Report whether the request carries a valid session. Always 200."""
    result = verify_request()
    if not result.authenticated:
        return jsonify(success=False)
    return jsonify(success=True, user={'username': result.identity.username})


@blueprint.route('/pokemon', methods=['GET'])
@protected
def list_pokemon() -> Response:
    """Get a page of the catalog."""
    data, code, headers = catalog.list_pokemon(request.args)
    return jsonify(data), code, headers


@blueprint.route('/pokemon/<string:pokemon_id>', methods=['GET'])
@protected
def get_pokemon(pokemon_id: str) -> Response:
    """Get one Pokémon from the catalog."""
    data, code, headers = catalog.get_pokemon(pokemon_id)
    return jsonify(data), code, headers
