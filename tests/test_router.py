import base64
import unittest

import mock
from webtest import TestApp

from davshare import policy
from davshare.router import RequestRouter, request_path

import memfs


class DummyDavApp(object):
    """Records the requests passed through to the WebDAV application."""

    def __init__(self):
        self.calls = []

    def __call__(self, environ, start_response):
        self.calls.append((environ['REQUEST_METHOD'], environ['PATH_INFO']))
        body = b'dav'
        start_response('207 Multi-Status',
                       [('Content-Type', 'text/plain; charset=utf-8'),
                        ('Content-Length', str(len(body)))])
        return [body]


class RouterTest(unittest.TestCase):
    def setUp(self):
        self.fs = memfs.MemoryFileSystem({'docs': {'b.txt': 3}, 'a.txt': 512})
        self.dav = DummyDavApp()
        self.creds = base64.b64encode(b'user:secret').decode('ascii')
        self.headers = {'Authorization': 'Basic %s' % self.creds}

    def make_app(self, user='', password='', read_only=False,
                 show_hidden=False):
        router = RequestRouter(self.dav, self.fs,
                               policy.Authenticator(user, password),
                               policy.ReadOnlyGuard(read_only),
                               show_hidden=show_hidden)
        return TestApp(router)

    def test_root_listing(self):
        app = self.make_app()
        res = app.get('/', status=200)
        self.assertEqual('text/html', res.content_type)
        self.assertEqual('utf-8', res.charset)
        self.assertNotIn('go-up', res.text)
        self.assertLess(res.text.index('docs/'), res.text.index('a.txt'))
        self.assertIn('<td class="size">512 B</td>', res.text)
        self.assertIn('<td>—</td>', res.text)
        self.assertEqual([], self.dav.calls)

    def test_redirect(self):
        app = self.make_app()
        res = app.get('/docs', status=302)
        self.assertTrue(res.location.endswith('/docs/'))

    def test_file_falls_through(self):
        app = self.make_app()
        res = app.get('/a.txt', status=207)
        self.assertEqual('dav', res.text)
        self.assertEqual([('GET', '/a.txt')], self.dav.calls)

    def test_missing_falls_through(self):
        app = self.make_app()
        app.get('/missing/', status=207)
        self.assertEqual([('GET', '/missing/')], self.dav.calls)

    def test_other_methods_fall_through(self):
        app = self.make_app()
        app.request('/docs/', method='PROPFIND', status=207)
        app.put('/new.txt', params=b'data', status=207)
        self.assertEqual([('PROPFIND', '/docs/'), ('PUT', '/new.txt')],
                         self.dav.calls)

    def test_utf8_path(self):
        self.fs.tree['café'] = {'menu.txt': 1}
        app = self.make_app()
        res = app.get('/caf%C3%A9/', status=200)
        self.assertIn('<title>café</title>', res.text)
        self.assertIn('href="/caf%C3%A9"', res.text)

    def test_undecodable_names(self):
        self.fs.tree['d\udce9'] = {'caf\udce9.txt': 7}
        app = self.make_app()
        res = app.get('/', status=200)
        self.assertIn('href="d%E9/"', res.text)
        self.assertIn('<span class="name">d�/</span>', res.text)
        res = app.get('/d%E9', status=302)
        self.assertTrue(res.location.endswith('/d%E9/'))
        res = app.get('/d%E9/', status=200)
        self.assertIn('<title>d�</title>', res.text)
        self.assertIn('href="caf%E9.txt"', res.text)
        self.assertIn('href="/d%E9"', res.text)
        self.assertEqual([], self.dav.calls)

    def test_auth_required(self):
        app = self.make_app('user', 'secret')
        res = app.get('/', status=401)
        self.assertEqual('Basic realm="Restricted"',
                         res.headers['WWW-Authenticate'])
        app.request('/', method='PROPFIND', status=401)
        self.assertEqual([], self.dav.calls)

    def test_auth_wrong_password(self):
        app = self.make_app('user', 'secret')
        wrong = base64.b64encode(b'user:nope').decode('ascii')
        res = app.get('/', headers={'Authorization': 'Basic %s' % wrong},
                      status=401)
        self.assertIn('need authorized', res.text)

    def test_auth_ok(self):
        app = self.make_app('user', 'secret')
        app.get('/', headers=self.headers, status=200)
        app.get('/a.txt', headers=self.headers, status=207)
        self.assertEqual([('GET', '/a.txt')], self.dav.calls)

    def test_anonymous_ignores_header(self):
        app = self.make_app()
        app.get('/', headers={'Authorization': 'Basic garbage'}, status=200)

    def test_read_only(self):
        app = self.make_app(read_only=True)
        res = app.put('/new.txt', params=b'data', status=403)
        self.assertIn('Read Only', res.text)
        app.request('/docs', method='MKCOL', status=403)
        app.get('/', status=200)
        app.get('/a.txt', status=207)
        self.assertEqual([('GET', '/a.txt')], self.dav.calls)

    def test_read_write(self):
        app = self.make_app(read_only=False)
        app.put('/new.txt', params=b'data', status=207)
        self.assertEqual([('PUT', '/new.txt')], self.dav.calls)

    def test_auth_checked_before_read_only(self):
        app = self.make_app('user', 'secret', read_only=True)
        app.put('/new.txt', params=b'data', status=401)
        app.put('/new.txt', params=b'data', headers=self.headers, status=403)

    def test_listing_not_consulted_for_denied_requests(self):
        app = self.make_app('user', 'secret')
        with mock.patch.object(self.fs, 'open') as mock_open:
            app.get('/', status=401)
            self.assertFalse(mock_open.called)


class RequestPathTest(unittest.TestCase):
    def test_utf8(self):
        raw = 'café'.encode('utf-8').decode('latin-1')
        self.assertEqual('/café', request_path({'PATH_INFO': '/' + raw}))

    def test_empty(self):
        self.assertEqual('/', request_path({'PATH_INFO': ''}))
        self.assertEqual('/', request_path({}))

    def test_invalid_utf8_becomes_surrogate_escapes(self):
        path = request_path({'PATH_INFO': '/d\xe9/'})
        self.assertEqual('/d\udce9/', path)
        self.assertEqual(b'/d\xe9/', path.encode('utf-8', 'surrogateescape'))

    def test_non_latin1_left_alone(self):
        self.assertEqual('/中', request_path({'PATH_INFO': '/中'}))


if __name__ == "__main__":
    unittest.main()
