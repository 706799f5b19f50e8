"""Web Server Gateway Interface entry-point."""

import os

from pokedex.authority.factory import create_app

__flask_app__ = None


def application(environ, start_response):    # type: ignore
    """WSGI application."""
    for key, value in environ.items():
        # Deployment config arrives as plain strings; request headers and
        # WSGI internals never become configuration.
        if key == 'SERVER_NAME' or key.startswith(('HTTP_', 'wsgi.')) \
                or not isinstance(value, str):
            continue
        os.environ[key] = value

    global __flask_app__
    if __flask_app__ is None:
        __flask_app__ = create_app()
    return __flask_app__(environ, start_response)
