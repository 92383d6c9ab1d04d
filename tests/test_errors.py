########################################################################
# File name: test_errors.py
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

import xbosh
import xbosh.errors as errors


class TestProtocolError(unittest.TestCase):
    def test_is_connection_error(self):
        self.assertTrue(issubclass(errors.ProtocolError, ConnectionError))

    def test_init(self):
        exc = errors.ProtocolError("foo", response="<bar/>")
        self.assertEqual(str(exc), "foo")
        self.assertEqual(exc.response, "<bar/>")

    def test_response_defaults_to_none(self):
        self.assertIsNone(errors.ProtocolError("foo").response)


class TestAuthenticationNotSupported(unittest.TestCase):
    def test_is_protocol_error(self):
        self.assertTrue(issubclass(errors.AuthenticationNotSupported,
                                   errors.ProtocolError))

    def test_no_mechanisms(self):
        exc = errors.AuthenticationNotSupported([])
        self.assertEqual(str(exc), "no authentication mechanisms advertised")
        self.assertEqual(exc.mechanisms, [])

    def test_unsupported_mechanisms(self):
        exc = errors.AuthenticationNotSupported(
            ("SCRAM-SHA-1", "DIGEST-MD5"),
            response="<features/>",
        )
        self.assertEqual(
            str(exc),
            "unsupported authentication mechanisms: SCRAM-SHA-1, DIGEST-MD5"
        )
        self.assertEqual(exc.mechanisms, ["SCRAM-SHA-1", "DIGEST-MD5"])
        self.assertEqual(exc.response, "<features/>")


class TestAuthenticationError(unittest.TestCase):
    def test_is_protocol_error(self):
        self.assertTrue(issubclass(errors.AuthenticationError,
                                   errors.ProtocolError))

    def test_condition(self):
        exc = errors.AuthenticationError("not-authorized")
        self.assertEqual(str(exc), "authentication failed: not-authorized")
        self.assertEqual(exc.condition, "not-authorized")

    def test_without_condition(self):
        exc = errors.AuthenticationError(None)
        self.assertEqual(str(exc), "authentication failed")
        self.assertIsNone(exc.condition)

    def test_exported_from_package(self):
        self.assertIs(xbosh.ProtocolError, errors.ProtocolError)
        self.assertIs(xbosh.AuthenticationError, errors.AuthenticationError)
        self.assertIs(xbosh.AuthenticationNotSupported,
                      errors.AuthenticationNotSupported)
