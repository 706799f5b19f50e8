"""Provides tools for working with authenticated sessions."""

import logging
from typing import Optional

from flask import Flask, current_app, request, g

from .verifiers import SessionVerifier, build_verifier
from ..domain import VerificationError, VerificationResult

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'pokedex.auth'
ENVIRON_KEY = 'pokedex.auth_result'
"""Where :class:`.middleware.EdgeGateMiddleware` leaves its result."""


class Auth(object):
    """
    Attaches a :class:`.SessionVerifier` to a Flask application.

    Intended for use in a Flask application factory, for example:

    .. code-block:: python

       from flask import Flask
       from pokedex.auth import Auth
       from someapp import routes


       def create_app() -> Flask:
          app = Flask('someapp')
          app.config.from_pyfile('config.py')
          Auth(app)   # Verifier is chosen by SESSION_VERIFIER.
          app.register_blueprint(routes.blueprint)
          return app

    """

    def __init__(self, app: Optional[Flask] = None,
                 verifier: Optional[SessionVerifier] = None) -> None:
        self.verifier: Optional[SessionVerifier] = None
        if app is not None:
            self.init_app(app, verifier)

    def init_app(self, app: Flask,
                 verifier: Optional[SessionVerifier] = None) -> None:
        """
        Install the verifier on ``app``.

        If no verifier is passed, one is built from the app configuration,
        which raises :class:`.ConfigurationError` if that is incomplete.
        """
        if verifier is None:
            verifier = build_verifier(app.config)
        self.verifier = verifier
        app.extensions[EXTENSION_KEY] = self
        app.config.setdefault('LOGIN_URL', '/login')
        app.config.setdefault('DEFAULT_LOGIN_REDIRECT_URL', '/')
        logger.info('Using %s', type(verifier).__name__)


def current_verifier() -> SessionVerifier:
    """Get the verifier installed on the current app."""
    verifier: SessionVerifier = current_app.extensions[EXTENSION_KEY].verifier
    return verifier


def verify_request() -> VerificationResult:
    """
    Verify the session on the current request.

    The result is kept for the rest of this request only; every request is
    verified afresh. If the edge middleware already verified this request, its
    result is reused.
    """
    if 'auth_result' in g:
        result: VerificationResult = g.auth_result
        return result

    result = request.environ.get(ENVIRON_KEY)
    if result is None:
        try:
            result = current_verifier().verify(request.cookies)
        except Exception as e:
            logger.error('Unhandled exception during verification: %s',
                         type(e).__name__)
            result = VerificationError(token_present=True,
                                       reason='verifier failed')
    g.auth_result = result
    return result
