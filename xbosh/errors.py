########################################################################
# File name: errors.py
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
:mod:`~xbosh.errors` --- Exception classes
##########################################

Session negotiation exceptions
==============================

.. autoclass:: ProtocolError

.. autoclass:: AuthenticationNotSupported

.. autoclass:: AuthenticationError

Failures of the HTTP transport (:mod:`httpx` exceptions) and of the XML
parser (:class:`lxml.etree.XMLSyntaxError`) are not translated; they reach
the caller unchanged.
"""


class ProtocolError(ConnectionError):
    """
    The server answered with something the session negotiation did not
    expect.

    .. attribute:: response

       The serialised response element (as :class:`str`) which triggered the
       error, or :data:`None` if there was no response element at all.
    """

    def __init__(self, message, response=None):
        super().__init__(message)
        self.response = response


class AuthenticationNotSupported(ProtocolError):
    """
    None of the SASL mechanisms the server advertised is supported.

    .. attribute:: mechanisms

       The list of mechanism names the server advertised (possibly empty).
    """

    def __init__(self, mechanisms, response=None):
        if mechanisms:
            msg = "unsupported authentication mechanisms: {}".format(
                ", ".join(mechanisms)
            )
        else:
            msg = "no authentication mechanisms advertised"
        super().__init__(msg, response=response)
        self.mechanisms = list(mechanisms)


class AuthenticationError(ProtocolError):
    """
    The server rejected the credentials.

    .. attribute:: condition

       The local name of the first child of the SASL ``<failure/>`` element
       (for example ``"not-authorized"``), or :data:`None` if the server did
       not include a condition.
    """

    def __init__(self, condition, response=None):
        msg = "authentication failed"
        if condition is not None:
            msg += ": {}".format(condition)
        super().__init__(msg, response=response)
        self.condition = condition
