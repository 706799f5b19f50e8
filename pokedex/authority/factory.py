"""Provides an app factory for the authority service."""

from flask import Flask, jsonify, Response
from werkzeug.exceptions import HTTPException, NotFound, BadRequest, \
    MethodNotAllowed

from pokedex import app_logging
from pokedex.auth import Auth
from pokedex.auth.credentials import build_validator
from pokedex.auth.sessions import build_issuer
from pokedex.auth.tokens import build_codec
from pokedex.auth.verifiers import DirectVerifier
from pokedex.services import catalog

from . import routes


def jsonify_exception(error: HTTPException) -> Response:
    exc_resp = error.get_response()
    response = jsonify(error=error.description)
    response.status_code = exc_resp.status_code
    return response


def create_app() -> Flask:
    """Initialize an instance of the authority service."""
    app = Flask('pokedex.authority')
    app.config.from_pyfile('config.py')
    app_logging.setup_logger(app.config['LOG_LEVEL'])

    codec = build_codec(app.config)
    validator = build_validator(app.config)
    cookie_name = app.config['AUTH_SESSION_COOKIE_NAME']
    app.extensions[routes.ISSUER_KEY] = build_issuer(app.config, validator,
                                                     codec)
    Auth(app, DirectVerifier(codec, cookie_name=cookie_name))
    catalog.init_app(app)

    app.register_blueprint(routes.blueprint)
    app.errorhandler(NotFound)(jsonify_exception)
    app.errorhandler(BadRequest)(jsonify_exception)
    app.errorhandler(MethodNotAllowed)(jsonify_exception)
    return app
