"""Exceptions."""


class InvalidCredentials(RuntimeError):
    """The submitted username/password pair does not match the known one."""


class InvalidToken(RuntimeError):
    """A session token could not be verified."""


class MalformedToken(InvalidToken):
    """The token is not a token, or lacks required claims."""


class SignatureInvalid(InvalidToken):
    """The token signature does not match its content."""


class ExpiredToken(InvalidToken):
    """The token is past its expiry."""


class AuthorityUnreachable(RuntimeError):
    """The backend authority could not be reached, or answered nonsense."""


class ConfigurationError(RuntimeError):
    """The service is missing required configuration."""
