"""
Backend authority for Pokédex sessions.

The authority is a Flask application that owns the signing secret. It is the
only component that can mint session tokens: it validates the submitted
username and password, issues a signed token, and sets it on the client as
the ``auth_token`` cookie. It also answers status requests, which is how the
public-facing edge service learns whether a session is valid when it runs
without the secret (see :class:`pokedex.auth.verifiers.DelegatingVerifier`).

The authority serves the protected catalog API as well, verifying the
session cookie directly on each request.
"""
