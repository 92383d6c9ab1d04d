########################################################################
# File name: xmltestutils.py
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
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with this program.  If not, see
# <http://www.gnu.org/licenses/>.
#
########################################################################
import unittest

from . import xml


def element_path(el, upto=None):
    segments = []
    parent = el.getparent()

    while parent is not None and parent != upto:
        similar = list(parent.iterchildren(el.tag))
        segments.insert(0, "{}[{}]".format(el.tag, similar.index(el)))
        el = parent
        parent = el.getparent()

    return "/".join(["", el.tag] + segments)


class XMLTestCase(unittest.TestCase):
    def assertAttributesEqual(self, el1, el2):
        self.assertDictEqual(
            dict(el1.attrib),
            dict(el2.attrib),
            "Attribute differences at {}".format(element_path(el2))
        )

    def assertSubtreeEqual(self, tree1, tree2):
        """
        Compare tag, attributes, text and children (in order) of the two
        elements. Whitespace around text is ignored.
        """
        self.assertEqual(tree1.tag, tree2.tag,
                         "tag mismatch at {}".format(element_path(tree2)))
        self.assertEqual(
            (tree1.text or "").strip(),
            (tree2.text or "").strip(),
            "text mismatch at {}".format(element_path(tree2))
        )
        self.assertAttributesEqual(tree1, tree2)

        children1 = list(tree1)
        children2 = list(tree2)
        self.assertEqual(
            len(children1),
            len(children2),
            "child count mismatch at {}".format(element_path(tree2))
        )
        for c1, c2 in zip(children1, children2):
            self.assertSubtreeEqual(c1, c2)

    def assertXMLEqual(self, expected, el):
        """
        Parse the :class:`str` or :class:`bytes` `expected` and compare it
        with the element `el`.
        """
        if isinstance(expected, str):
            expected = expected.encode("utf-8")
        self.assertSubtreeEqual(xml.parse(expected), el)
