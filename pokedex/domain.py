"""Defines session concepts for use in the Pokédex services."""

from typing import NamedTuple, Union, ClassVar, Dict, Any
from dataclasses import dataclass
from datetime import datetime


class Identity(NamedTuple):
    """The authenticated subject."""

    subject: str
    """The username of the single identity that the system recognizes."""

    @property
    def username(self) -> str:
        """Alias used by the external interfaces."""
        return self.subject


class Claims(NamedTuple):
    """The verified content of a session token."""

    subject: str
    issued_at: datetime
    expires_at: datetime

    @property
    def identity(self) -> Identity:
        """The :class:`.Identity` asserted by these claims."""
        return Identity(self.subject)


class CookieAttributes(NamedTuple):
    """Describes how a session token must be stored by the client."""

    httponly: bool
    secure: bool
    samesite: str
    """Either ``'Strict'`` or ``'Lax'``."""

    max_age: int
    """Lifetime in seconds. Zero forces the cookie to expire immediately."""

    path: str = '/'

    def as_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for :meth:`werkzeug.Response.set_cookie`."""
        return {
            'httponly': self.httponly,
            'secure': self.secure,
            'samesite': self.samesite,
            'max_age': self.max_age,
            'path': self.path
        }


class IssuedSession(NamedTuple):
    """A freshly minted token and the attributes of its cookie."""

    token: str
    cookie: CookieAttributes


@dataclass(frozen=True)
class Authenticated:
    """The request carries a valid session."""

    identity: Identity
    authenticated: ClassVar[bool] = True


@dataclass(frozen=True)
class Unauthenticated:
    """
    The request does not carry a valid session.

    ``token_present`` is set when a session cookie was found on the request.
    ``rejected`` is set only by a verifier that examined the token itself and
    found it invalid or expired; a verifier that relies on a remote authority
    cannot make that claim.
    """

    token_present: bool = False
    rejected: bool = False
    authenticated: ClassVar[bool] = False


@dataclass(frozen=True)
class VerificationError(Unauthenticated):
    """Verification could not be carried out; treated as unauthenticated."""

    reason: str = ''


VerificationResult = Union[Authenticated, Unauthenticated]
