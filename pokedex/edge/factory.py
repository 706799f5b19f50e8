"""Application factory for the edge app."""

from flask import Flask, jsonify, Response
from werkzeug.exceptions import HTTPException, NotFound, BadRequest, MethodNotAllowed

from pokedex import app_logging
from pokedex.auth import Auth
from pokedex.auth.middleware import EdgeGateMiddleware
from pokedex.auth.verifiers import build_verifier
from pokedex.services import catalog

from .routes import api, ui
from .services import authority


def jsonify_exception(error: HTTPException) -> Response:
    exc_resp = error.get_response()
    response = jsonify(error=error.description)
    response.status_code = exc_resp.status_code
    return response


def create_app() -> Flask:
    """Initialize and configure the edge application."""
    app = Flask('pokedex.edge')
    app.config.from_pyfile('config.py')
    app_logging.setup_logger(app.config['LOG_LEVEL'])

    verifier = build_verifier(app.config)
    Auth(app, verifier)
    authority.init_app(app)
    catalog.init_app(app)

    app.register_blueprint(api.blueprint)
    app.register_blueprint(ui.blueprint)
    app.errorhandler(NotFound)(jsonify_exception)
    app.errorhandler(BadRequest)(jsonify_exception)
    app.errorhandler(MethodNotAllowed)(jsonify_exception)

    app.wsgi_app = EdgeGateMiddleware(app.wsgi_app, verifier,  # type: ignore
                                      app.config['PROTECTED_PATH_PREFIXES'])
    return app
