"""Provides Flask integration for the server-rendered pages."""

import logging
from http import HTTPStatus

from flask import Blueprint, render_template, request, make_response, \
    redirect, current_app, url_for, Response

from pokedex.auth.decorators import login_required, anonymous_only
from pokedex.auth.exceptions import AuthorityUnreachable

from . import relay_cookies
from ..services import authority

logger = logging.getLogger(__name__)
blueprint = Blueprint('ui', __name__, url_prefix='')


@blueprint.after_request
def apply_response_headers(response: Response) -> Response:
    """Prevent UI redress attacks."""
    response.headers['Content-Security-Policy'] = "frame-ancestors 'none'"
    response.headers['X-Frame-Options'] = 'DENY'
    return response


@blueprint.route('/', methods=['GET'])
@login_required
def home() -> Response:
    """The protected landing page."""
    return make_response(render_template('edge/home.html',
                                         username=request.auth.username))


@blueprint.route('/login', methods=['GET', 'POST'])
@anonymous_only
def login() -> Response:
    """User can log in with username and password."""
    if request.method == 'GET':
        return make_response(render_template('edge/login.html'))

    credentials = {'username': request.form.get('username', ''),
                   'password': request.form.get('password', '')}
    try:
        upstream = authority.current_client().login(
            request.headers.get('Cookie'), credentials
        )
    except AuthorityUnreachable:
        logger.error('Login could not reach the authority')
        content = render_template('edge/login.html',
                                  error='Something went wrong. Try again.')
        return make_response(content, HTTPStatus.INTERNAL_SERVER_ERROR)

    if upstream.status_code != HTTPStatus.OK:
        content = render_template('edge/login.html',
                                  error='Invalid credentials')
        return make_response(content, HTTPStatus.UNAUTHORIZED)

    next_page = current_app.config['DEFAULT_LOGIN_REDIRECT_URL']
    response = make_response(redirect(next_page, code=HTTPStatus.SEE_OTHER))
    relay_cookies(response, upstream)
    return response


@blueprint.route('/logout', methods=['POST'])
def logout() -> Response:
    """Log out, then go back to the login page."""
    try:
        upstream = authority.current_client().logout(
            request.headers.get('Cookie')
        )
    except AuthorityUnreachable:
        logger.error('Logout could not reach the authority')
        content = render_template('edge/error.html',
                                  error='Logout failed. Try again.')
        return make_response(content, HTTPStatus.INTERNAL_SERVER_ERROR)

    response = make_response(redirect(url_for('ui.login'),
                                      code=HTTPStatus.SEE_OTHER))
    relay_cookies(response, upstream)
    return response
