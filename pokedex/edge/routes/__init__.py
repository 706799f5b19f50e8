"""Routes for the edge service."""

from flask import Response

from ..services.authority import AuthorityResponse


def relay_cookies(response: Response, upstream: AuthorityResponse) -> None:
    """Copy every ``Set-Cookie`` from the authority onto ``response``."""
    for value in upstream.set_cookies:
        response.headers.add('Set-Cookie', value)
