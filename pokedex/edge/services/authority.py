"""
Service integration for the backend authority.

The edge forwards login, logout and status calls to the authority, passing the
client's ``Cookie`` header through and bringing every ``Set-Cookie`` header
back. Calls are made once: login and logout are not known to be idempotent,
so nothing here retries.
"""

import logging
from typing import Any, List, NamedTuple, Optional

import requests
from flask import Flask, current_app

from pokedex.auth.exceptions import AuthorityUnreachable

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'pokedex.authority'


class AuthorityResponse(NamedTuple):
    """What the authority answered."""

    status_code: int
    data: Any
    set_cookies: List[str]
    """Every ``Set-Cookie`` header, verbatim and in order."""


def set_cookie_headers(response: requests.Response) -> List[str]:
    """
    Get all ``Set-Cookie`` headers from an upstream response.

    ``requests`` folds repeated headers into a single comma-joined value,
    which mangles cookies (``Expires`` contains a comma), so they are read
    from the underlying urllib3 response instead.
    """
    raw_headers = getattr(response.raw, 'headers', None)
    if raw_headers is not None and hasattr(raw_headers, 'getlist'):
        return list(raw_headers.getlist('Set-Cookie'))
    value = response.headers.get('Set-Cookie')
    return [value] if value else []


class AuthorityClient(object):
    """Forwards session operations to the authority."""

    def __init__(self, base_url: str, timeout: float = 3.0,
                 session: Optional[requests.Session] = None) -> None:
        self._base_url = base_url.rstrip('/')
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()

    def forward(self, method: str, path: str, cookie_header: Optional[str],
                payload: Any = None) -> AuthorityResponse:
        """
        Make one call to the authority.

        Raises
        ------
        :class:`.AuthorityUnreachable`
            On a network failure, a timeout, or a non-JSON answer.

        """
        url = f'{self._base_url}{path}'
        headers = {}
        if cookie_header:
            headers['Cookie'] = cookie_header
        try:
            response = self._session.request(method, url, headers=headers,
                                             json=payload,
                                             timeout=self._timeout)
        except requests.exceptions.RequestException as e:
            logger.error('Authority request %s %s failed: %s', method, path,
                         type(e).__name__)
            raise AuthorityUnreachable(f'{method} {path} failed') from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error('Authority answered %s %s with non-JSON', method,
                         path)
            raise AuthorityUnreachable(f'{method} {path}: not JSON') from e
        return AuthorityResponse(response.status_code, data,
                                 set_cookie_headers(response))

    def login(self, cookie_header: Optional[str], credentials: Any) \
            -> AuthorityResponse:
        """Forward a login."""
        return self.forward('POST', '/api/login', cookie_header,
                            payload=credentials)

    def logout(self, cookie_header: Optional[str]) -> AuthorityResponse:
        """Forward a logout."""
        return self.forward('POST', '/api/logout', cookie_header)

    def status(self, cookie_header: Optional[str]) -> AuthorityResponse:
        """Forward a status check."""
        return self.forward('GET', '/api/status', cookie_header)


def init_app(app: Flask) -> None:
    """Attach an :class:`.AuthorityClient` configured from ``app.config``."""
    app.extensions[EXTENSION_KEY] = AuthorityClient(
        app.config['AUTHORITY_URL'],
        timeout=float(app.config.get('AUTHORITY_TIMEOUT', 3))
    )


def current_client() -> AuthorityClient:
    """Get the :class:`.AuthorityClient` for the current app."""
    client: AuthorityClient = current_app.extensions[EXTENSION_KEY]
    return client
