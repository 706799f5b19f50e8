"""Check submitted credentials against the single known identity."""

import logging
import secrets
from typing import Any, Mapping

from .exceptions import InvalidCredentials
from ..domain import Identity

logger = logging.getLogger(__name__)


def _matches(submitted: str, expected: str) -> bool:
    # compare_digest only accepts ASCII str, so compare the encoded bytes.
    return secrets.compare_digest(submitted.encode('utf-8'),
                                  expected.encode('utf-8'))


class CredentialValidator(object):
    """Accepts exactly one configured username/password pair."""

    def __init__(self, username: str, password: str) -> None:
        if not username or not password:
            raise ValueError('Username and password must be non-empty')
        self._username = username
        self._password = password

    def validate(self, subject: Any, secret: Any) -> Identity:
        """
        Return the :class:`.Identity` for a matching pair.

        Both fields are always compared, so the time taken does not reveal
        which of them was wrong.

        Raises
        ------
        :class:`.InvalidCredentials`
            The pair does not match. Unknown user and wrong password are not
            distinguished.

        """
        if not isinstance(subject, str) or not isinstance(secret, str):
            logger.debug('Credentials are not strings')
            raise InvalidCredentials('Invalid credentials')
        subject_ok = _matches(subject, self._username)
        secret_ok = _matches(secret, self._password)
        if not (subject_ok and secret_ok):
            logger.debug('Credentials do not match')
            raise InvalidCredentials('Invalid credentials')
        return Identity(self._username)


def build_validator(config: Mapping[str, Any]) -> CredentialValidator:
    """Create a :class:`.CredentialValidator` from app configuration."""
    return CredentialValidator(config.get('AUTH_USERNAME', 'admin'),
                               config.get('AUTH_PASSWORD', 'admin'))
