"""
Middleware for gating whole path prefixes before they reach the app.

The middleware runs ahead of Flask routing: requests under one of the
configured prefixes are verified and, if unauthenticated, answered with the
same 401/403 semantics as :func:`.decorators.protected` without building an
application request context. Requests outside the prefixes pass untouched.
"""

import json
import logging
from typing import Callable, Iterable, Any

from werkzeug.http import parse_cookie
from werkzeug.wrappers import Response

from . import ENVIRON_KEY
from .decorators import denial
from .verifiers import SessionVerifier
from ..domain import VerificationError

logger = logging.getLogger(__name__)


class EdgeGateMiddleware(object):
    """
    Rejects unauthenticated requests to protected path prefixes.

    On success, the verification result is left in the WSGI environ under
    :data:`pokedex.auth.ENVIRON_KEY` so that the app does not verify twice.
    """

    def __init__(self, wsgi_app: Callable, verifier: SessionVerifier,
                 prefixes: Iterable[str]) -> None:
        self.wsgi_app = wsgi_app
        self.verifier = verifier
        self.prefixes = [prefix.rstrip('/') for prefix in prefixes
                         if prefix.strip('/')]

    def is_protected(self, path: str) -> bool:
        """Determine whether ``path`` falls under a protected prefix."""
        return any(path == prefix or path.startswith(prefix + '/')
                   for prefix in self.prefixes)

    def __call__(self, environ: dict, start_response: Callable) -> Any:
        """Verify the request if needed, then pass it on or answer it."""
        if not self.is_protected(environ.get('PATH_INFO', '')):
            return self.wsgi_app(environ, start_response)

        cookies = parse_cookie(environ)
        try:
            result = self.verifier.verify(cookies)
        except Exception as e:
            logger.error('Unhandled exception during verification: %s',
                         type(e).__name__)
            result = VerificationError(token_present=True,
                                       reason='verifier failed')

        if result.authenticated:
            environ[ENVIRON_KEY] = result
            return self.wsgi_app(environ, start_response)

        body, code = denial(result)
        logger.debug('Rejected %s with %i', environ.get('PATH_INFO'), code)
        response = Response(json.dumps(body), status=code,
                            mimetype='application/json')
        return response(environ, start_response)
