"""
Session issuance.

On a successful login the issuer mints a token and describes the cookie that
should carry it. The boundary layer writes that description onto the
response with :func:`set_session_cookie`; nothing is retained server-side.
"""

import logging
from typing import Any, Mapping

from werkzeug.wrappers import Response

from .credentials import CredentialValidator
from .tokens import TokenCodec
from ..domain import CookieAttributes, IssuedSession

logger = logging.getLogger(__name__)

COOKIE_NAME = 'auth_token'


class SessionIssuer(object):
    """Validates credentials and mints session tokens."""

    def __init__(self, validator: CredentialValidator, codec: TokenCodec,
                 production: bool = False) -> None:
        self._validator = validator
        self._codec = codec
        self._production = production

    def cookie_attributes(self, max_age: int = None) -> CookieAttributes:
        """
        Cookie attributes for this deployment.

        Production deployments get ``secure`` cookies with a strict same-site
        policy; everything else gets lax, non-secure cookies so that local
        development over plain HTTP works.
        """
        if max_age is None:
            max_age = int(self._codec.lifetime.total_seconds())
        return CookieAttributes(
            httponly=True,
            secure=self._production,
            samesite='Strict' if self._production else 'Lax',
            max_age=max_age,
            path='/'
        )

    def login(self, subject: Any, secret: Any) -> IssuedSession:
        """
        Log in with a username and password.

        Raises
        ------
        :class:`.InvalidCredentials`
            No cookie may be set in that case.

        """
        identity = self._validator.validate(subject, secret)
        token = self._codec.issue(identity.subject)
        logger.info('Issued session for %s', identity.subject)
        return IssuedSession(token=token, cookie=self.cookie_attributes())

    def logout(self) -> CookieAttributes:
        """Cookie attributes that force the session cookie to expire."""
        return self.cookie_attributes(max_age=0)


def build_issuer(config: Mapping[str, Any], validator: CredentialValidator,
                 codec: TokenCodec) -> SessionIssuer:
    """Create a :class:`.SessionIssuer` from app configuration."""
    production = config.get('ENVIRONMENT', 'development') == 'production'
    return SessionIssuer(validator, codec, production=production)


def set_session_cookie(response: Response, token: str,
                       attributes: CookieAttributes,
                       name: str = COOKIE_NAME) -> None:
    """Write the session cookie onto ``response``."""
    response.set_cookie(name, token, **attributes.as_kwargs())


def clear_session_cookie(response: Response, attributes: CookieAttributes,
                         name: str = COOKIE_NAME) -> None:
    """Write a directive that expires the session cookie immediately."""
    kwargs = attributes.as_kwargs()
    kwargs['max_age'] = 0
    response.set_cookie(name, '', expires=0, **kwargs)
