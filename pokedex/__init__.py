"""
Pokédex session authentication and request gating.

This package provides the components shared by the Pokédex services for
issuing and verifying signed session tokens. Housing these components in a
library (separate from the service implementations) ensures that the cookie
name, token format, and status-code semantics agree between the backend
authority and the public-facing edge.

Quick start
-----------

For typical use-cases, you will need to do the following:

1. Install this package into your virtual environment.
2. Install :class:`pokedex.auth.Auth` onto your application, with either a
   :class:`.DirectVerifier` (if your app holds the signing secret) or a
   :class:`.DelegatingVerifier` (if it must ask the authority).
3. Protect views with :func:`.decorators.login_required` (pages) or
   :func:`.decorators.protected` (JSON APIs), and/or wrap the app in
   :class:`.middleware.EdgeGateMiddleware` for whole path prefixes.

Here's an example:

.. code-block:: python

   # yourapp/factory.py
   from pokedex import auth
   from pokedex.auth.middleware import EdgeGateMiddleware
   from pokedex.auth.verifiers import build_verifier


   def create_app() -> Flask:
       app = Flask('foo')
       app.config.from_pyfile('config.py')
       verifier = build_verifier(app.config)
       auth.Auth(app, verifier)    # <- Install the Auth extension.
       app.wsgi_app = EdgeGateMiddleware(app.wsgi_app, verifier,
                                         ['/api/pokemon'])
       return app

"""

from .domain import Identity, Claims, CookieAttributes, IssuedSession, \
    Authenticated, Unauthenticated, VerificationError, VerificationResult
