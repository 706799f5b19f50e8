"""
Public-facing edge service.

The edge is a Flask application that sits in front of the backend authority.
It serves the server-rendered pages and the catalog API, and proxies login,
logout and status calls to the authority, carrying the ``auth_token`` cookie
across that hop in both directions.

The edge does not need the signing secret. By default it verifies sessions by
asking the authority (``SESSION_VERIFIER=delegating``), at the cost of one
extra request per verification. When it shares the secret with the authority
it can verify locally instead (``SESSION_VERIFIER=direct``), which also lets
the edge gate tell a missing token (401) from an invalid one (403).
"""
