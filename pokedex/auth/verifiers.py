"""
Session verification strategies.

Both strategies share one contract: given the cookies on an inbound request,
return a :data:`.domain.VerificationResult`. Neither raises for a bad token or
a transport problem; those become :class:`.domain.Unauthenticated` (or its
subclass :class:`.domain.VerificationError`).

:class:`DirectVerifier`
    Verifies the token locally with the shared secret. Used where the
    verifying layer and the issuing layer share a trust domain.
:class:`DelegatingVerifier`
    Holds no secret. Forwards the cookie to the authority's status endpoint
    and trusts its verdict. Fails closed: if the authority cannot be reached,
    the request is not authenticated, and there is no local fallback.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

import requests

from . import tokens
from .exceptions import InvalidToken, ExpiredToken, ConfigurationError
from .sessions import COOKIE_NAME
from ..domain import Authenticated, Unauthenticated, VerificationError, \
    VerificationResult, Identity

logger = logging.getLogger(__name__)

DEFAULT_AUTHORITY_TIMEOUT = 3.0
"""Seconds to wait on the authority before treating it as unreachable."""


class SessionVerifier(ABC):
    """Extracts the session cookie from a request and verifies it."""

    def __init__(self, cookie_name: str = COOKIE_NAME) -> None:
        self.cookie_name = cookie_name

    def extract(self, cookies: Mapping[str, str]) -> Optional[str]:
        """Get the session token from request cookies, if there is one."""
        return cookies.get(self.cookie_name) or None

    @abstractmethod
    def verify(self, cookies: Mapping[str, str]) -> VerificationResult:
        """Verify the session carried by ``cookies``."""


class DirectVerifier(SessionVerifier):
    """Verifies session tokens locally."""

    def __init__(self, codec: tokens.TokenCodec,
                 cookie_name: str = COOKIE_NAME) -> None:
        super(DirectVerifier, self).__init__(cookie_name)
        self._codec = codec

    def verify(self, cookies: Mapping[str, str]) -> VerificationResult:
        token = self.extract(cookies)
        if token is None:
            return Unauthenticated()
        try:
            claims = self._codec.verify(token)
        except ExpiredToken:
            logger.info('Session token is expired')
            return Unauthenticated(token_present=True, rejected=True)
        except InvalidToken as e:
            logger.info('Session token is not valid: %s', type(e).__name__)
            return Unauthenticated(token_present=True, rejected=True)
        return Authenticated(claims.identity)


class DelegatingVerifier(SessionVerifier):
    """Asks the backend authority whether a session is valid."""

    STATUS_PATH = '/api/status'

    def __init__(self, authority_url: str,
                 timeout: float = DEFAULT_AUTHORITY_TIMEOUT,
                 cookie_name: str = COOKIE_NAME,
                 session: Optional[requests.Session] = None) -> None:
        super(DelegatingVerifier, self).__init__(cookie_name)
        self._endpoint = authority_url.rstrip('/') + self.STATUS_PATH
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()

    def verify(self, cookies: Mapping[str, str]) -> VerificationResult:
        token = self.extract(cookies)
        if token is None:
            return Unauthenticated()
        headers = {'Cookie': f'{self.cookie_name}={token}'}
        try:
            response = self._session.get(self._endpoint, headers=headers,
                                         timeout=self._timeout)
        except requests.exceptions.RequestException as e:
            logger.error('Authority unreachable: %s', type(e).__name__)
            return VerificationError(token_present=True,
                                     reason='authority unreachable')

        if response.status_code != 200:
            logger.info('Authority answered %i', response.status_code)
            return Unauthenticated(token_present=True)
        try:
            data = response.json()
        except ValueError:
            logger.error('Authority answered with something other than JSON')
            return VerificationError(token_present=True,
                                     reason='unexpected authority response')

        if not isinstance(data, dict) or data.get('success') is not True:
            logger.debug('Authority did not accept the session')
            return Unauthenticated(token_present=True)
        user = data.get('user')
        username = user.get('username') if isinstance(user, dict) else None
        if not isinstance(username, str) or not username:
            logger.error('Authority accepted the session without a user')
            return VerificationError(token_present=True,
                                     reason='unexpected authority response')
        return Authenticated(Identity(username))


def build_verifier(config: Mapping[str, Any]) -> SessionVerifier:
    """
    Create the :class:`.SessionVerifier` selected by ``SESSION_VERIFIER``.

    ``direct`` needs ``JWT_SECRET``; ``delegating`` needs ``AUTHORITY_URL``.
    """
    kind = config.get('SESSION_VERIFIER', 'direct')
    cookie_name = config.get('AUTH_SESSION_COOKIE_NAME', COOKIE_NAME)
    if kind == 'direct':
        return DirectVerifier(tokens.build_codec(config),
                              cookie_name=cookie_name)
    if kind == 'delegating':
        authority_url = config.get('AUTHORITY_URL')
        if not authority_url:
            logger.critical('AUTHORITY_URL is not set; refusing to start')
            raise ConfigurationError('AUTHORITY_URL is not set')
        timeout = float(config.get('AUTHORITY_TIMEOUT',
                                   DEFAULT_AUTHORITY_TIMEOUT))
        return DelegatingVerifier(authority_url, timeout=timeout,
                                  cookie_name=cookie_name)
    logger.critical('Unknown SESSION_VERIFIER %s', kind)
    raise ConfigurationError(f'Unknown SESSION_VERIFIER: {kind}')
