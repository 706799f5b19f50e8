"""
Session-based protection of Flask routes.

Each decorator here verifies the current request (see
:func:`pokedex.auth.verify_request`) and applies the boundary action that
suits the kind of route it protects:

:func:`login_required`
    For server-rendered pages. Unauthenticated visitors are redirected to the
    login page.
:func:`anonymous_only`
    For the login page itself. Authenticated visitors are redirected away.
:func:`protected`
    For JSON APIs. Unauthenticated requests get a 401 or 403 with an
    ``{"error": ...}`` body.

In every case the authenticated :class:`.domain.Identity` is attached to the
request as ``request.auth`` before the route is called.

.. code-block:: python

   from pokedex.auth.decorators import protected


   @blueprint.route('/pokemon', methods=['GET'])
   @protected
   def list_pokemon():
       return jsonify(user=request.auth.username)

None of these raise: every verification outcome becomes either a redirect, a
JSON error response, or a call to the route.
"""

import logging
from typing import Callable, Any, Tuple, Dict
from functools import wraps
from http import HTTPStatus

from flask import request, current_app, redirect, url_for, jsonify, \
    make_response
from werkzeug.routing import BuildError

from . import verify_request
from ..domain import VerificationResult

logger = logging.getLogger(__name__)

NO_TOKEN = {'error': 'Unauthorized: No token provided'}
NO_VALID_TOKEN = {'error': 'Unauthorized: No valid token provided'}
INVALID_TOKEN = {'error': 'Forbidden: Invalid or expired token'}


def denial(result: VerificationResult) -> Tuple[Dict[str, str], int]:
    """
    Get the error body and status code for an unauthenticated request.

    Only a verifier that examined the token itself (and so set ``rejected``)
    can justify a 403. Everything else is a 401.
    """
    if getattr(result, 'rejected', False):
        return INVALID_TOKEN, HTTPStatus.FORBIDDEN
    if getattr(result, 'token_present', False):
        return NO_VALID_TOKEN, HTTPStatus.UNAUTHORIZED
    return NO_TOKEN, HTTPStatus.UNAUTHORIZED


def _login_url() -> str:
    # The ui.login route may not exist on every app that uses this package,
    # so fall back to the configured URL.
    try:
        return url_for('ui.login')
    except BuildError:
        return str(current_app.config.get('LOGIN_URL', '/login'))


def login_required(func: Callable) -> Callable:
    """Redirect unauthenticated visitors to the login page."""
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        result = verify_request()
        if not result.authenticated:
            logger.debug('No valid session; redirecting to login')
            return redirect(_login_url(), code=HTTPStatus.FOUND)
        request.auth = result.identity
        return func(*args, **kwargs)
    return wrapper


def anonymous_only(func: Callable) -> Callable:
    """Redirect authenticated visitors away from the decorated page."""
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        result = verify_request()
        if result.authenticated:
            next_page = current_app.config.get('DEFAULT_LOGIN_REDIRECT_URL',
                                               '/')
            return make_response(redirect(next_page,
                                          code=HTTPStatus.SEE_OTHER))
        request.auth = None
        return func(*args, **kwargs)
    return wrapper


def protected(func: Callable) -> Callable:
    """Answer 401/403 for requests without a valid session."""
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        result = verify_request()
        if not result.authenticated:
            body, code = denial(result)
            logger.debug('Request not authenticated; answering %i', code)
            return jsonify(body), code
        request.auth = result.identity
        logger.debug('Request is authenticated, proceeding')
        return func(*args, **kwargs)
    return wrapper
