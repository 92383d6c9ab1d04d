########################################################################
# File name: client.py
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
:mod:`~xbosh.client` --- BOSH session client
############################################

.. autoclass:: BOSHClient

.. autofunction:: connect
"""

import logging
import random

import aiosasl

from . import errors, stanza, xml
from .transport import HTTPXTransport


class BOSHClient:
    """
    Client side of a BOSH session (:xep:`124`, :xep:`206`) with inline SASL
    ``PLAIN`` authentication and resource binding.

    :param jid: The bare JID to authenticate as, e.g. ``"user@host"``.
    :type jid: :class:`str`
    :param password: The password for `jid`.
    :type password: :class:`str`
    :param endpoint: URL of the BOSH connection manager.
    :type endpoint: :class:`str`
    :param wait: Longest time in seconds the connection manager may hold a
        request.
    :param hold: Number of requests the connection manager may keep waiting.
    :param window: Proposed request window.
    :param rid: Initial request ID; random if :data:`None`.
    :type rid: :class:`int` or :data:`None`
    :param transport: HTTP transport; an :class:`~.transport.HTTPXTransport`
        is created if :data:`None`.
    :type transport: :class:`~.transport.BaseTransport` or :data:`None`
        (a transport created by the client is closed by :meth:`close`)
    :param base_logger: Parent logger; the client logs request and response
        bodies on a child called ``BOSHClient``.
    :type base_logger: :class:`logging.Logger`

    .. warning::

       A client is a single mutable state machine. It must not be used from
       more than one thread at a time, and every method blocks until the
       HTTP round trip(s) it performs have completed.

    Negotiation:

    .. automethod:: connect

    .. automethod:: create_session

    .. automethod:: authenticate

    .. automethod:: restart

    .. automethod:: bind_resource

    Exchanging stanzas:

    .. automethod:: send

    Releasing resources:

    .. automethod:: close

    The client is also a context manager which calls :meth:`close` on
    exit.

    Session state:

    .. attribute:: jid

       The bare JID until :meth:`bind_resource` replaces it with the full
       JID assigned by the server.

    .. attribute:: sid

       Session ID, or :data:`None` while no session is established.

    .. attribute:: rid

       ID of the next request.

    .. attribute:: wait
                   hold
                   window
                   polling
                   inactivity
                   requests

       Tuning values. `wait`, `hold` and `window` start out as the values
       proposed by the client; :meth:`create_session` and :meth:`restart`
       replace all but `window` with the strings sent by the server, which
       is :data:`None` for each attribute the server left out.

    .. autoattribute:: endpoint

    .. autoattribute:: host
    """

    def __init__(self, jid, password, endpoint, *,
                 wait=60,
                 hold=1,
                 window=10,
                 rid=None,
                 transport=None,
                 base_logger=logging.getLogger("xbosh")):
        super().__init__()
        self.jid = jid
        self._password = password
        self._endpoint = endpoint
        self._host = None
        self._logger = base_logger.getChild(type(self).__name__)

        self._owns_transport = transport is None
        if transport is None:
            transport = HTTPXTransport()
        self._transport = transport

        self.sid = None
        self.wait = wait
        self.hold = hold
        self.window = window
        self.polling = None
        self.inactivity = None
        self.requests = None
        if rid is None:
            rid = random.randrange(1000000)
        self.rid = rid

    @property
    def endpoint(self):
        """
        URL of the BOSH connection manager (read-only).
        """
        return self._endpoint

    @property
    def host(self):
        """
        Domain part of the JID the client was created with. It is taken
        once and does not change when binding a resource changes
        :attr:`jid`.
        """
        if self._host is None:
            self._host = self.jid.split("@")[-1]
        return self._host

    def connect(self):
        """
        Run the complete negotiation: create the session, authenticate,
        and (if authentication succeeded) restart the stream and bind a
        resource.

        :return: the client itself
        :raises xbosh.errors.ProtocolError: if a step failed

        Nothing is retried. After an exception, the client is left in the
        state the last successful step produced and should be discarded.
        """
        self.create_session()
        authenticated = self.authenticate()
        if authenticated:
            self.restart()
        return self

    def _update_session_parameters(self, response):
        for name, value in stanza.read_session_parameters(response).items():
            setattr(self, name, value)

    def create_session(self):
        """
        Request a new session from the connection manager and take over the
        session ID and tuning values it sends.
        """
        request = stanza.make_session_request(
            rid=self.rid,
            host=self.host,
            wait=self.wait,
            hold=self.hold,
            window=self.window,
        )
        response = self.send(request)
        self._update_session_parameters(response)
        self._logger.debug("session created: sid=%r wait=%r hold=%r",
                           self.sid, self.wait, self.hold)

    def authenticate(self):
        """
        Authenticate using SASL ``PLAIN``.

        :return: :data:`True`
        :raises xbosh.errors.AuthenticationNotSupported: if the server does
            not offer ``PLAIN``
        :raises xbosh.errors.AuthenticationError: if the server rejected the
            credentials
        :raises xbosh.errors.ProtocolError: if the server answered with
            neither ``<success/>`` nor ``<failure/>``
        """
        response = self.send(stanza.make_sasl_auth("DIGEST-MD5"))
        mechanisms = stanza.read_mechanisms(response)
        self._logger.debug("server offers mechanisms: %r", mechanisms)

        token = aiosasl.PLAIN.any_supported(mechanisms)
        if token is None:
            raise errors.AuthenticationNotSupported(
                mechanisms,
                response=self._dump(response),
            )

        response = self.send(stanza.make_sasl_auth(
            token,
            stanza.make_plain_credentials(self.jid, self._password),
        ))

        state = None if response is None else xml.localname(response)
        if state == "success":
            self._logger.debug("authenticated as %s", self.jid)
            return True
        if state == "failure":
            condition = xml.first_child(response)
            if condition is not None:
                condition = xml.localname(condition)
            raise errors.AuthenticationError(
                condition,
                response=self._dump(response),
            )

        raise errors.ProtocolError(
            "unexpected response to authentication: {}".format(
                self._dump(response)
            ),
            response=self._dump(response),
        )

    def restart(self):
        """
        Restart the stream after authentication.

        The restart request carries the current :attr:`sid` and :attr:`rid`;
        :attr:`sid` is cleared before the request is posted, so the request
        body is sent as is and the session values are taken over from the
        response. :attr:`rid` is incremented afterwards.

        If the response announces resource binding, :meth:`bind_resource`
        is called.
        """
        request = stanza.make_restart_request(
            rid=self.rid,
            sid=self.sid,
            host=self.host,
        )
        self.sid = None
        response = self.send(request)
        self._update_session_parameters(response)
        self.rid += 1

        if xml.find(response, "./stream:features/bind:bind") is not None:
            self.bind_resource()

        if xml.find(response, "./stream:features/session:session") is None:
            self._logger.debug("no session establishment offered")
        else:
            # XXX: RFC 3921 session establishment is not performed; servers
            # following RFC 6121 mark it optional or omit it.
            self._logger.debug("server offers session establishment")

    def bind_resource(self):
        """
        Bind a randomly named resource and replace :attr:`jid` with the full
        JID returned by the server.

        :return: :data:`True`
        :raises xbosh.errors.ProtocolError: if the response contains no JID
        """
        request = stanza.make_bind_request(
            "bind_{}".format(random.randrange(1000)),
            "bosh_{}".format(random.randrange(1000)),
        )
        response = self.send(request)
        jid = stanza.read_bound_jid(response)
        if jid is None:
            raise errors.ProtocolError(
                "no JID in resource binding response: {}".format(
                    self._dump(response)
                ),
                response=self._dump(response),
            )
        self.jid = jid
        self._logger.debug("bound to %s", self.jid)
        return True

    def send(self, payload):
        """
        Send `payload` and return the response.

        :param payload: The element to send, or :data:`None` for an empty
            request (only allowed within a session).
        :type payload: :class:`lxml.etree._Element`
        :return: The response element.

        Without a session (:attr:`sid` is :data:`None`), `payload` itself is
        posted and the root element of the response is returned.

        With a session, `payload` is wrapped in a ``<body/>`` carrying the
        current :attr:`rid` and :attr:`sid`; the first child of the response
        ``<body/>`` is returned (:data:`None` if it is empty) and
        :attr:`rid` is incremented.
        """
        if self.sid is None:
            if payload is None:
                raise ValueError("payload is required without a session")
            return self._post(payload)

        request = stanza.make_body(
            rid=self.rid,
            sid=self.sid,
            payload=payload,
        )
        response = self._post(request)
        self.rid += 1
        return xml.first_child(response)

    def _post(self, el):
        body = xml.serialize(el)
        self._logger.debug("SENT %s", body)
        blob, status = self._transport.post(
            self._endpoint,
            body.encode("utf-8"),
        )
        self._logger.debug("RECV (%d) %s", status,
                           blob.decode("utf-8", errors="replace"))
        return xml.parse(blob)

    def close(self):
        """
        Close the transport if the client created it. A transport passed to
        the constructor is left open; it belongs to the caller.

        This does not terminate the BOSH session on the server.
        """
        if self._owns_transport:
            self._transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @staticmethod
    def _dump(el):
        if el is None:
            return None
        return xml.serialize(el)


def connect(jid, password, endpoint, **kwargs):
    """
    Create a :class:`BOSHClient` and run :meth:`BOSHClient.connect` on it.

    The keyword arguments are passed to :class:`BOSHClient`.

    :return: the connected client

    If the negotiation fails, the client is closed before the exception
    propagates. On success, the caller is responsible for calling
    :meth:`BOSHClient.close`.
    """
    client = BOSHClient(jid, password, endpoint, **kwargs)
    try:
        return client.connect()
    except BaseException:
        client.close()
        raise
