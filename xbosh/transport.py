########################################################################
# File name: transport.py
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
:mod:`~xbosh.transport` --- HTTP transports
###########################################

The session client does not talk HTTP itself; it hands serialised request
bodies to a transport object and expects the response body back.

.. autoclass:: BaseTransport

.. autoclass:: HTTPXTransport

"""

import abc

import httpx


class BaseTransport(metaclass=abc.ABCMeta):
    """
    This is the base class for transports. It defines the public interface
    used by :class:`~xbosh.client.BOSHClient`.

    .. automethod:: post
    """

    @abc.abstractmethod
    def post(self, endpoint, body):
        """
        POST `body` to the URL `endpoint`.

        :param endpoint: The URL of the BOSH connection manager.
        :type endpoint: :class:`str`
        :param body: The serialised request.
        :type body: :class:`bytes`
        :return: The response body and the HTTP status code.
        :rtype: pair of :class:`bytes` and :class:`int`

        Network failures are raised as they occur; implementations must not
        retry.
        """


class HTTPXTransport(BaseTransport):
    """
    Transport on top of a synchronous :class:`httpx.Client`.

    :param client: Client to use; if omitted, one is created and owned by
        the transport.
    :type client: :class:`httpx.Client` or :data:`None`
    :param timeout: Timeout in seconds for a newly created client. It must be
        longer than the ``wait`` negotiated with the server.
    :type timeout: :class:`float`
    :param headers: Additional headers sent with each request.
    :type headers: :class:`dict` or :data:`None`

    The HTTP status is passed on but not interpreted; a non-XML error page
    fails later, when the body is parsed.

    Transports which own their client can be used as context managers; the
    client is closed on exit.
    """

    DEFAULT_HEADERS = {
        "Content-Type": "text/xml; charset=utf-8",
        "Accept": "text/xml",
    }

    def __init__(self, client=None, *, timeout=90.0, headers=None):
        super().__init__()
        self._headers = dict(self.DEFAULT_HEADERS)
        if headers:
            self._headers.update(headers)

        self._owns_client = client is None
        if client is None:
            client = httpx.Client(
                follow_redirects=True,
                timeout=httpx.Timeout(timeout),
            )
        self._client = client

    @property
    def client(self):
        return self._client

    def post(self, endpoint, body):
        response = self._client.post(
            endpoint,
            content=body,
            headers=self._headers,
        )
        return response.content, response.status_code

    def close(self):
        """
        Close the underlying client, if it is owned by this transport.
        """
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, tb):
        self.close()
