"""Flask configuration for the edge service."""

import os

ENVIRONMENT = os.environ.get('ENVIRONMENT', 'development')

SESSION_VERIFIER = os.environ.get('SESSION_VERIFIER', 'delegating')
"""``delegating`` asks the authority; ``direct`` needs ``JWT_SECRET``."""

JWT_SECRET = os.environ.get('JWT_SECRET')
"""Only used, and then required, by the direct verifier."""

AUTHORITY_URL = os.environ.get('AUTHORITY_URL', 'http://localhost:3001')
AUTHORITY_TIMEOUT = float(os.environ.get('AUTHORITY_TIMEOUT', '3'))
"""Seconds before an authority call counts as failed."""

AUTH_SESSION_COOKIE_NAME = os.environ.get('AUTH_SESSION_COOKIE_NAME',
                                          'auth_token')
SESSION_DURATION = int(os.environ.get('SESSION_DURATION', '86400'))

PROTECTED_PATH_PREFIXES = [
    prefix.strip() for prefix
    in os.environ.get('PROTECTED_PATH_PREFIXES', '/api/pokemon').split(',')
    if prefix.strip()
]
"""Paths rejected by the edge gate unless the request is authenticated."""

LOGIN_URL = '/login'
DEFAULT_LOGIN_REDIRECT_URL = os.environ.get('DEFAULT_LOGIN_REDIRECT_URL', '/')
"""Where visitors go after logging in, or if they visit /login while logged in."""

CATALOG_URL = os.environ.get('CATALOG_URL', 'https://pokeapi.co/api/v2')
CATALOG_TIMEOUT = float(os.environ.get('CATALOG_TIMEOUT', '10'))

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
