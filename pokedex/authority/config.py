"""Flask configuration for the authority service."""

import os

ENVIRONMENT = os.environ.get('ENVIRONMENT', 'development')
"""``production`` turns on secure, strict same-site session cookies."""

JWT_SECRET = os.environ.get('JWT_SECRET')
"""Signing secret. There is no default: the service will not start without it."""

AUTH_SESSION_COOKIE_NAME = os.environ.get('AUTH_SESSION_COOKIE_NAME',
                                          'auth_token')
SESSION_DURATION = int(os.environ.get('SESSION_DURATION', '86400'))
"""Lifetime of tokens and their cookies, in seconds."""

AUTH_USERNAME = os.environ.get('AUTH_USERNAME', 'admin')
AUTH_PASSWORD = os.environ.get('AUTH_PASSWORD', 'admin')

SESSION_VERIFIER = 'direct'
"""The authority always verifies with its own secret."""

CATALOG_URL = os.environ.get('CATALOG_URL', 'https://pokeapi.co/api/v2')
CATALOG_TIMEOUT = float(os.environ.get('CATALOG_TIMEOUT', '10'))

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
