"""Tests for the edge service as a whole."""

import os
from unittest import TestCase, mock

import requests

from pokedex.auth.tokens import TokenCodec

from ..factory import create_app

SECRET = 'not-a-real-secret-but-long-enough'

SESSION_COOKIE = ('auth_token=sometoken; HttpOnly; Max-Age=86400; Path=/; '
                  'SameSite=Lax')
OTHER_COOKIE = 'theme=dark; Expires=Wed, 21 Oct 2026 07:28:00 GMT; Path=/'


def _upstream(status_code=200, data=None, set_cookies=(), json_error=False):
    """A mock response from the authority."""
    response = mock.MagicMock(status_code=status_code)
    if json_error:
        response.json.side_effect = ValueError('Expecting value')
    else:
        response.json.return_value = data
    response.raw.headers.getlist.return_value = list(set_cookies)
    return response


class EdgeTestCase(TestCase):
    """
    Runs each test against a freshly configured edge.

    Every outbound HTTP call made through :class:`requests.Session` goes to
    ``self.session`` instead.
    """

    environ = {'SESSION_VERIFIER': 'delegating',
               'AUTHORITY_URL': 'http://authority.test:3001'}

    def setUp(self):
        """Configure the edge from a patched environment."""
        patcher = mock.patch.dict(os.environ, self.environ)
        patcher.start()
        self.addCleanup(patcher.stop)

        session_class = mock.patch('requests.Session')
        self.session = session_class.start().return_value
        self.addCleanup(session_class.stop)

        self.app = create_app()
        self.client = self.app.test_client()


class TestAuthProxy(EdgeTestCase):
    """The /api/auth routes are forwarded to the authority."""

    def test_login(self):
        """Status, body and every cookie come back from the authority."""
        self.session.request.return_value = _upstream(
            data={'message': 'Login successful'},
            set_cookies=[SESSION_COOKIE, OTHER_COOKIE]
        )
        response = self.client.post('/api/auth/login',
                                    json={'username': 'admin',
                                          'password': 'admin'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {'message': 'Login successful'})
        self.assertEqual(response.headers.getlist('Set-Cookie'),
                         [SESSION_COOKIE, OTHER_COOKIE])

        self.assertEqual(self.session.request.call_count, 1)
        args, kwargs = self.session.request.call_args
        self.assertEqual(args, ('POST', 'http://authority.test:3001/api/login'))
        self.assertEqual(kwargs['json'], {'username': 'admin',
                                          'password': 'admin'})
        self.assertEqual(kwargs['timeout'], 3.0)

    def test_login_failed(self):
        """A rejected login is relayed as-is."""
        self.session.request.return_value = _upstream(
            status_code=401, data={'error': 'Invalid credentials'}
        )
        response = self.client.post('/api/auth/login',
                                    json={'username': 'admin',
                                          'password': 'nope'})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json(), {'error': 'Invalid credentials'})
        self.assertEqual(response.headers.getlist('Set-Cookie'), [])

    def test_cookie_is_forwarded(self):
        """The inbound Cookie header goes to the authority unchanged."""
        self.session.request.return_value = _upstream(
            data={'success': True, 'user': {'username': 'admin'}}
        )
        self.client.set_cookie('auth_token', 'sometoken')
        response = self.client.get('/api/auth/status')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['user'], {'username': 'admin'})
        _, kwargs = self.session.request.call_args
        self.assertEqual(kwargs['headers'], {'Cookie': 'auth_token=sometoken'})

    def test_logout(self):
        """The clearing cookie is relayed."""
        clearing = 'auth_token=; Expires=Thu, 01 Jan 1970 00:00:00 GMT; ' \
                   'Max-Age=0; HttpOnly; Path=/; SameSite=Lax'
        self.session.request.return_value = _upstream(
            data={'message': 'Logout successful'}, set_cookies=[clearing]
        )
        response = self.client.post('/api/auth/logout')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers.getlist('Set-Cookie'), [clearing])

    def test_unreachable(self):
        """A network failure is a 500, after exactly one attempt."""
        self.session.request.side_effect = \
            requests.exceptions.ConnectionError('refused')
        for method, path in (('post', '/api/auth/login'),
                             ('post', '/api/auth/logout'),
                             ('get', '/api/auth/status')):
            self.session.request.reset_mock()
            response = getattr(self.client, method)(path)
            self.assertEqual(response.status_code, 500)
            self.assertEqual(response.get_json(),
                             {'error': 'Internal server error'})
            self.assertEqual(self.session.request.call_count, 1)

    def test_not_json(self):
        """An answer that is not JSON is a 500."""
        self.session.request.return_value = _upstream(json_error=True)
        response = self.client.get('/api/auth/status')
        self.assertEqual(response.status_code, 500)


@mock.patch('pokedex.services.catalog.current_client')
class TestDelegatingGate(EdgeTestCase):
    """The catalog is gated by asking the authority."""

    def test_no_cookie(self, current_client):
        """Without a cookie nobody is asked, and the answer is 401."""
        response = self.client.get('/api/pokemon')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json(),
                         {'error': 'Unauthorized: No token provided'})
        self.assertEqual(self.session.get.call_count, 0)
        self.assertEqual(current_client.call_count, 0)

    def test_not_accepted(self, current_client):
        """The authority does not recognize the session."""
        self.session.get.return_value = _upstream(data={'success': False})
        self.client.set_cookie('auth_token', 'sometoken')
        response = self.client.get('/api/pokemon/25')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json(),
                         {'error': 'Unauthorized: No valid token provided'})
        self.assertEqual(current_client.call_count, 0)

    def test_authority_down(self, current_client):
        """If the authority cannot be reached nobody gets in."""
        self.session.get.side_effect = requests.exceptions.Timeout('slow')
        self.client.set_cookie('auth_token', 'sometoken')
        response = self.client.get('/api/pokemon')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.session.get.call_count, 1)
        self.assertEqual(current_client.call_count, 0)

    def test_accepted(self, current_client):
        """The authority vouches for the session; the catalog is served."""
        self.session.get.return_value = _upstream(
            data={'success': True, 'user': {'username': 'admin'}}
        )
        current_client.return_value.get_pokemon.return_value = {'id': 25}
        self.client.set_cookie('auth_token', 'sometoken')
        response = self.client.get('/api/pokemon/25')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {'id': 25})
        self.session.get.assert_called_once_with(
            'http://authority.test:3001/api/status',
            headers={'Cookie': 'auth_token=sometoken'}, timeout=3.0
        )

    def test_ungated_paths(self, current_client):
        """Proxy routes are not gated."""
        self.session.request.return_value = _upstream(data={'success': False})
        response = self.client.get('/api/auth/status')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.session.get.call_count, 0)


@mock.patch('pokedex.services.catalog.current_client')
class TestDirectGate(EdgeTestCase):
    """The catalog is gated locally when the edge has the secret."""

    environ = {'SESSION_VERIFIER': 'direct', 'JWT_SECRET': SECRET,
               'AUTHORITY_URL': 'http://authority.test:3001'}

    def test_no_cookie(self, current_client):
        response = self.client.get('/api/pokemon')
        self.assertEqual(response.status_code, 401)

    def test_forged(self, current_client):
        """A forged token is forbidden, and the authority is not asked."""
        forged = TokenCodec('some-other-secret').issue('admin')
        self.client.set_cookie('auth_token', forged)
        response = self.client.get('/api/pokemon')
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.get_json(),
                         {'error': 'Forbidden: Invalid or expired token'})
        self.assertEqual(self.session.get.call_count, 0)

    def test_valid(self, current_client):
        current_client.return_value.list_pokemon.return_value = {'count': 0}
        self.client.set_cookie('auth_token', TokenCodec(SECRET).issue('admin'))
        response = self.client.get('/api/pokemon')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.session.get.call_count, 0)


class TestPages(EdgeTestCase):
    """The server-rendered pages."""

    def accept_session(self):
        self.session.get.return_value = _upstream(
            data={'success': True, 'user': {'username': 'admin'}}
        )
        self.client.set_cookie('auth_token', 'sometoken')

    def test_home_requires_login(self):
        response = self.client.get('/')
        self.assertEqual(response.status_code, 302)
        self.assertTrue(response.headers['Location'].endswith('/login'))

    def test_home(self):
        self.accept_session()
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertIn(b'Welcome, admin!', response.data)
        self.assertEqual(response.headers['X-Frame-Options'], 'DENY')

    def test_login_page(self):
        response = self.client.get('/login')
        self.assertEqual(response.status_code, 200)
        self.assertIn(b'<form', response.data)

    def test_login_page_when_logged_in(self):
        self.accept_session()
        response = self.client.get('/login')
        self.assertEqual(response.status_code, 303)
        self.assertTrue(response.headers['Location'].endswith('/'))

    def test_login(self):
        """The form is sent to the authority and its cookie relayed."""
        self.session.request.return_value = _upstream(
            data={'message': 'Login successful'}, set_cookies=[SESSION_COOKIE]
        )
        response = self.client.post('/login', data={'username': 'admin',
                                                     'password': 'admin'})
        self.assertEqual(response.status_code, 303)
        self.assertTrue(response.headers['Location'].endswith('/'))
        self.assertEqual(response.headers.getlist('Set-Cookie'),
                         [SESSION_COOKIE])
        _, kwargs = self.session.request.call_args
        self.assertEqual(kwargs['json'], {'username': 'admin',
                                          'password': 'admin'})

    def test_login_failed(self):
        self.session.request.return_value = _upstream(
            status_code=401, data={'error': 'Invalid credentials'}
        )
        response = self.client.post('/login', data={'username': 'admin',
                                                     'password': 'nope'})
        self.assertEqual(response.status_code, 401)
        self.assertIn(b'Invalid credentials', response.data)
        self.assertEqual(response.headers.getlist('Set-Cookie'), [])

    def test_login_authority_down(self):
        self.session.request.side_effect = \
            requests.exceptions.ConnectionError('refused')
        response = self.client.post('/login', data={'username': 'admin',
                                                     'password': 'admin'})
        self.assertEqual(response.status_code, 500)
        self.assertIn(b'Something went wrong', response.data)

    def test_logout(self):
        clearing = 'auth_token=; Max-Age=0; Path=/'
        self.session.request.return_value = _upstream(
            data={'message': 'Logout successful'}, set_cookies=[clearing]
        )
        response = self.client.post('/logout')
        self.assertEqual(response.status_code, 303)
        self.assertTrue(response.headers['Location'].endswith('/login'))
        self.assertEqual(response.headers.getlist('Set-Cookie'), [clearing])
