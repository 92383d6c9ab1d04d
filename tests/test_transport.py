########################################################################
# File name: test_transport.py
# This file is part of: xbosh
#
# LICENSE
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Lesser General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with this program.  If not, see
# <http://www.gnu.org/licenses/>.
#
########################################################################
import unittest
import unittest.mock

import httpx

import xbosh.transport as transport


TEST_ENDPOINT = "http://localhost:5280/http-bind"


class TestBaseTransport(unittest.TestCase):
    def test_is_abstract(self):
        with self.assertRaises(TypeError):
            transport.BaseTransport()


class TestHTTPXTransport(unittest.TestCase):
    def setUp(self):
        self.requests = []
        self.status_code = 200
        self.content = b"<body xmlns='http://jabber.org/protocol/httpbind'/>"

        def handler(request):
            self.requests.append(request)
            return httpx.Response(self.status_code, content=self.content)

        self.client = httpx.Client(transport=httpx.MockTransport(handler))
        self.t = transport.HTTPXTransport(self.client)

    def tearDown(self):
        self.client.close()

    def test_is_transport(self):
        self.assertIsInstance(self.t, transport.BaseTransport)
        self.assertIs(self.t.client, self.client)

    def test_post(self):
        body, status = self.t.post(TEST_ENDPOINT, b"<foo/>")

        self.assertEqual(body, self.content)
        self.assertEqual(status, 200)

        request, = self.requests
        self.assertEqual(request.method, "POST")
        self.assertEqual(str(request.url), TEST_ENDPOINT)
        self.assertEqual(request.content, b"<foo/>")

    def test_default_headers(self):
        self.t.post(TEST_ENDPOINT, b"<foo/>")
        request, = self.requests
        self.assertEqual(request.headers["content-type"],
                         "text/xml; charset=utf-8")
        self.assertEqual(request.headers["accept"], "text/xml")

    def test_extra_headers(self):
        t = transport.HTTPXTransport(self.client,
                                     headers={"User-Agent": "xbosh-test"})
        t.post(TEST_ENDPOINT, b"<foo/>")
        request, = self.requests
        self.assertEqual(request.headers["user-agent"], "xbosh-test")
        self.assertEqual(request.headers["accept"], "text/xml")

    def test_error_status_is_not_raised(self):
        self.status_code = 404
        self.content = b"not found"
        body, status = self.t.post(TEST_ENDPOINT, b"<foo/>")
        self.assertEqual(status, 404)
        self.assertEqual(body, b"not found")

    def test_transport_errors_propagate(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            t = transport.HTTPXTransport(client)
            with self.assertRaises(httpx.ConnectError):
                t.post(TEST_ENDPOINT, b"<foo/>")

    def test_close_does_not_close_foreign_client(self):
        self.t.close()
        self.assertFalse(self.client.is_closed)

    def test_creates_and_owns_client(self):
        with unittest.mock.patch("httpx.Client") as Client:
            t = transport.HTTPXTransport(timeout=10.0)

        Client.assert_called_once_with(
            follow_redirects=True,
            timeout=httpx.Timeout(10.0),
        )
        self.assertIs(t.client, Client())

        with t as entered:
            self.assertIs(entered, t)
        Client().close.assert_called_once_with()
