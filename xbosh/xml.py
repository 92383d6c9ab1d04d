########################################################################
# File name: xml.py
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
"""
:mod:`~xbosh.xml` --- XML helpers
#################################

Thin layer over :mod:`lxml.etree` which fixes the parser configuration and
the prefix bindings used to look things up in BOSH responses.

.. data:: PREFIXES

   The prefix-to-namespace mapping used by :func:`find`, :func:`findall` and
   :func:`findtext`:

   ============  ==========================================
   ``body``      ``http://jabber.org/protocol/httpbind``
   ``xmpp``      ``urn:xmpp:xbosh``
   ``stream``    ``http://etherx.jabber.org/streams``
   ``client``    ``jabber:client``
   ``sasl``      ``urn:ietf:params:xml:ns:xmpp-sasl``
   ``bind``      ``urn:ietf:params:xml:ns:xmpp-bind``
   ``session``   ``urn:ietf:params:xml:ns:xmpp-session``
   ============  ==========================================

.. autofunction:: parse

.. autofunction:: serialize

.. autofunction:: find

.. autofunction:: findall

.. autofunction:: findtext

.. autofunction:: localname

.. autofunction:: first_child
"""

from .utils import etree, namespaces


PREFIXES = {
    "body": namespaces.httpbind,
    "xmpp": namespaces.xbosh,
    "stream": namespaces.xmlstream,
    "client": namespaces.client,
    "sasl": namespaces.sasl,
    "bind": namespaces.rfc6120_bind,
    "session": namespaces.rfc3921_session,
}


def make_parser():
    """
    Create a parser which neither resolves entities nor touches the network.
    """
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_blank_text=True,
    )


def parse(blob):
    """
    Parse the :class:`bytes` `blob` and return its root element.

    :raises lxml.etree.XMLSyntaxError: if `blob` is not well-formed
    """
    return etree.fromstring(blob, make_parser())


def serialize(el):
    """
    Serialise the element `el` (including its children) to :class:`str`.
    """
    return etree.tostring(el, encoding="unicode", with_tail=False)


def find(el, path):
    return el.find(path, PREFIXES)


def findall(el, path):
    return el.findall(path, PREFIXES)


def findtext(el, path, default=None):
    return el.findtext(path, default, PREFIXES)


def localname(el):
    """
    Return the tag of `el` without its namespace.
    """
    return etree.QName(el).localname


def first_child(el):
    """
    Return the first child element of `el`, skipping comments and processing
    instructions, or :data:`None` if there is none.
    """
    for child in el:
        if isinstance(child.tag, str):
            return child
    return None
