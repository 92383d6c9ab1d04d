########################################################################
# File name: test_xml.py
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

import xbosh.xml as xml

from xbosh.utils import etree, namespaces


class Testparse(unittest.TestCase):
    def test_returns_root(self):
        el = xml.parse(b"<foo xmlns='urn:example'><bar/></foo>")
        self.assertEqual(el.tag, "{urn:example}foo")
        self.assertIsNone(el.getparent())

    def test_drops_blank_text(self):
        el = xml.parse(b"<foo>\n  <bar/>\n</foo>")
        self.assertIsNone(el.text)
        self.assertIsNone(el[0].tail)

    def test_malformed(self):
        with self.assertRaises(etree.XMLSyntaxError):
            xml.parse(b"<foo>")


class Testserialize(unittest.TestCase):
    def test_str(self):
        el = etree.fromstring("<foo xmlns='urn:example'><bar>baz</bar></foo>")
        self.assertEqual(
            xml.serialize(el),
            '<foo xmlns="urn:example"><bar>baz</bar></foo>',
        )

    def test_without_tail(self):
        el = etree.fromstring("<foo><bar/>tail</foo>")
        self.assertEqual(xml.serialize(el[0]), "<bar/>")


class TestLookup(unittest.TestCase):
    def setUp(self):
        self.el = xml.parse(
            "<body xmlns='{}' xmlns:stream='{}'>"
            "<stream:features>"
            "<bind xmlns='{}'/>"
            "<mechanisms xmlns='{}'>"
            "<mechanism>PLAIN</mechanism>"
            "<mechanism>ANONYMOUS</mechanism>"
            "</mechanisms>"
            "</stream:features>"
            "</body>".format(
                namespaces.httpbind,
                namespaces.xmlstream,
                namespaces.rfc6120_bind,
                namespaces.sasl,
            ).encode("utf-8")
        )

    def test_find(self):
        self.assertEqual(
            xml.find(self.el, "./stream:features/bind:bind").tag,
            "{{{}}}bind".format(namespaces.rfc6120_bind),
        )
        self.assertIsNone(
            xml.find(self.el, "./stream:features/session:session")
        )

    def test_findall(self):
        self.assertEqual(
            [el.text for el in xml.findall(
                self.el,
                "./stream:features/sasl:mechanisms/sasl:mechanism",
            )],
            ["PLAIN", "ANONYMOUS"],
        )

    def test_findtext(self):
        self.assertEqual(
            xml.findtext(
                self.el,
                "./stream:features/sasl:mechanisms/sasl:mechanism",
            ),
            "PLAIN",
        )
        self.assertEqual(
            xml.findtext(self.el, "./body:nothing", "default"),
            "default",
        )


class Testlocalname(unittest.TestCase):
    def test_namespaced(self):
        self.assertEqual(
            xml.localname(etree.fromstring("<a:foo xmlns:a='urn:x'/>")),
            "foo",
        )

    def test_plain(self):
        self.assertEqual(xml.localname(etree.fromstring("<foo/>")), "foo")


class Testfirst_child(unittest.TestCase):
    def test_first_element(self):
        el = xml.parse(b"<foo><!-- hi --><?pi x?><bar/><baz/></foo>")
        self.assertEqual(xml.first_child(el).tag, "bar")

    def test_none(self):
        self.assertIsNone(xml.first_child(xml.parse(b"<foo>text</foo>")))
