"""Functions for issuing and verifying session tokens."""

import logging
from typing import Callable, Mapping, Any
from datetime import datetime, timedelta

import jwt
from pytz import UTC

from .exceptions import MalformedToken, SignatureInvalid, ExpiredToken, \
    ConfigurationError
from ..domain import Claims

logger = logging.getLogger(__name__)

ALGORITHM = 'HS256'
DEFAULT_LIFETIME = timedelta(hours=24)

INSECURE_SECRETS = frozenset(['your-secret-key', 'foosecret'])
"""Well-known development secrets that must never sign real sessions."""


def utcnow() -> datetime:
    """Get the current time in UTC."""
    return datetime.now(tz=UTC)


class TokenCodec(object):
    """
    Signs and verifies compact, self-contained session tokens.

    Tokens are JWTs signed with HMAC-SHA256 and carry three claims: ``sub``
    (the username), ``iat`` and ``exp``. The secret is handed in once, at
    construction; nothing here reads the environment.
    """

    def __init__(self, secret: str, lifetime: timedelta = DEFAULT_LIFETIME,
                 clock: Callable[[], datetime] = utcnow) -> None:
        """
        Set up the codec.

        Parameters
        ----------
        secret : str
            Shared signing secret. May not be empty.
        lifetime : :class:`timedelta`
            How long an issued token remains valid.
        clock : callable
            Returns the current (timezone-aware) time. Injected for testing.

        """
        if not secret:
            raise ConfigurationError('Signing secret is not set')
        self._secret = secret
        self._lifetime = lifetime
        self._clock = clock

    @property
    def lifetime(self) -> timedelta:
        """How long an issued token remains valid."""
        return self._lifetime

    def issue(self, subject: str) -> str:
        """Mint a token asserting ``subject``, valid from now."""
        if not subject:
            raise ValueError('Subject must be non-empty')
        issued_at = self._clock()
        expires_at = issued_at + self._lifetime
        claims = {
            'sub': subject,
            'iat': int(issued_at.timestamp()),
            'exp': int(expires_at.timestamp())
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> Claims:
        """
        Verify a token, first its signature and then its expiry.

        Raises
        ------
        :class:`.SignatureInvalid`
            The token was tampered with, or signed with another secret.
        :class:`.MalformedToken`
            The token could not be parsed or lacks required claims.
        :class:`.ExpiredToken`
            The token is past its expiry.

        """
        try:
            data: dict = jwt.decode(token, self._secret,
                                    algorithms=[ALGORITHM],
                                    options={
                                        'verify_exp': False,
                                        'verify_iat': False,
                                        'verify_nbf': False,
                                        'require': ['sub', 'iat', 'exp']
                                    })
        except jwt.exceptions.InvalidSignatureError as e:
            raise SignatureInvalid('Signature does not match') from e
        except jwt.exceptions.InvalidTokenError as e:
            raise MalformedToken('Not a valid token') from e

        subject = data['sub']
        if not isinstance(subject, str) or not subject:
            raise MalformedToken('Token has no subject')
        try:
            issued_at = datetime.fromtimestamp(int(data['iat']), tz=UTC)
            expires_at = datetime.fromtimestamp(int(data['exp']), tz=UTC)
        except (TypeError, ValueError, OverflowError, OSError) as e:
            raise MalformedToken('Token has invalid timestamps') from e

        if self._clock() > expires_at:
            raise ExpiredToken('Token expired')
        return Claims(subject=subject, issued_at=issued_at,
                      expires_at=expires_at)


def build_codec(config: Mapping[str, Any]) -> TokenCodec:
    """
    Create a :class:`.TokenCodec` from application configuration.

    Refuses to produce a codec if ``JWT_SECRET`` is missing, empty, or one of
    the well-known development defaults.
    """
    secret = config.get('JWT_SECRET')
    if not secret:
        logger.critical('JWT_SECRET is not set; refusing to start')
        raise ConfigurationError('JWT_SECRET is not set')
    if secret in INSECURE_SECRETS:
        logger.critical('JWT_SECRET is a well-known default; refusing to start')
        raise ConfigurationError('JWT_SECRET is insecure')
    lifetime = timedelta(seconds=int(config.get('SESSION_DURATION', 86400)))
    return TokenCodec(secret, lifetime=lifetime)
