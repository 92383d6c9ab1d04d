########################################################################
# File name: utils.py
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
:mod:`~xbosh.utils` --- Internal utils
######################################

Miscellaneous utilities used throughout the xbosh codebase.

.. data:: namespaces

   Collects the namespaces used on a BOSH session. Each namespace is given
   a shortname and its value is the namespace string.

.. autoclass:: Namespaces

"""

import lxml.etree as etree

__all__ = [
    "etree",
    "namespaces",
]


class Namespaces:
    """
    Manage short-hands for XML namespaces.

    Instances of this class may be used to assign mnemonic short-hands
    to XML namespaces, for example:

    .. code-block:: python

        namespaces = Namespaces()
        namespaces.httpbind = "http://jabber.org/protocol/httpbind"

    Each namespace may only be bound to one short-hand, a short-hand may not
    be rebound to a different namespace and short-hands cannot be deleted;
    violating either raises :class:`ValueError` (or :class:`AttributeError`
    for deletion).

    The defined short-hands MUST NOT start with an underscore.
    """

    def __init__(self):
        self._all_namespaces = {}

    def __setattr__(self, attr, value):
        if not attr.startswith("_"):
            existing_attr = self._all_namespaces.get(value)
            if existing_attr is not None and existing_attr != attr:
                raise ValueError(
                    "namespace {} already defined as {}".format(
                        value,
                        existing_attr,
                    )
                )
            if getattr(self, attr, value) != value:
                raise ValueError("inconsistent namespace redefinition")
            self._all_namespaces[value] = attr
        super().__setattr__(attr, value)

    def __delattr__(self, attr):
        if not attr.startswith("_"):
            raise AttributeError("deleting short-hands is prohibited")
        super().__delattr__(attr)


namespaces = Namespaces()
namespaces.httpbind = "http://jabber.org/protocol/httpbind"
namespaces.xbosh = "urn:xmpp:xbosh"
namespaces.xmlstream = "http://etherx.jabber.org/streams"
namespaces.client = "jabber:client"
namespaces.sasl = "urn:ietf:params:xml:ns:xmpp-sasl"
namespaces.rfc6120_bind = "urn:ietf:params:xml:ns:xmpp-bind"
namespaces.rfc3921_session = "urn:ietf:params:xml:ns:xmpp-session"
namespaces.xml = "http://www.w3.org/XML/1998/namespace"
