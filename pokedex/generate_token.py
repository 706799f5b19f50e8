"""
Helper script for generating a session token.

Be sure that you are using the same secret when running this script as when you
run the authority. Set ``JWT_SECRET=somesecret`` in your environment to ensure
that the same secret is always used.

.. code-block:: bash

   $ JWT_SECRET=somesecret generate-token
   Username [admin]:
   Lifetime in hours [24]:

   eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.eyJzdWIiOiJhZG1pbiIsImlhdCI6MTc2MDg...

Set the token as the ``auth_token`` cookie on your requests to protected
endpoints, e.g. ``curl --cookie auth_token=<token> localhost:3001/api/pokemon``.
"""

import os
from datetime import timedelta

import click

from pokedex.auth.exceptions import ConfigurationError
from pokedex.auth.tokens import build_codec, TokenCodec


@click.command()
@click.option('--username', prompt='Username', default='admin')
@click.option('--hours', prompt='Lifetime in hours', default=24, type=int)
def generate_token(username: str, hours: int = 24) -> None:
    """Generate a session token for dev/testing purposes."""
    try:
        build_codec(os.environ)     # Refuses missing or insecure secrets.
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    codec = TokenCodec(os.environ['JWT_SECRET'],
                       lifetime=timedelta(hours=hours))
    click.echo(codec.issue(username))


if __name__ == '__main__':
    generate_token()
