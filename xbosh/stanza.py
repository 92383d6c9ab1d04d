########################################################################
# File name: stanza.py
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
:mod:`~xbosh.stanza` --- Building and reading BOSH payloads
###########################################################

Builders
========

All builders return fresh :class:`lxml.etree._Element` instances.

.. autofunction:: make_session_request

.. autofunction:: make_restart_request

.. autofunction:: make_body

.. autofunction:: make_sasl_auth

.. autofunction:: make_plain_credentials

.. autofunction:: make_bind_request

Readers
=======

.. autodata:: SESSION_PARAMETERS

.. autofunction:: read_session_parameters

.. autofunction:: read_mechanisms

.. autofunction:: read_bound_jid
"""

import base64

from . import xml
from .utils import etree, namespaces


#: Attributes of a session creation or restart response which are copied
#: onto the client.
SESSION_PARAMETERS = (
    "sid",
    "wait",
    "polling",
    "inactivity",
    "requests",
    "hold",
)

CONTENT_TYPE = "text/xml; charset=utf-8"


def _set_attrs(el, attrs):
    for name, value in attrs:
        if value is not None:
            el.set(name, str(value))


def _body(nsmap, attrs):
    el = etree.Element(
        etree.QName(namespaces.httpbind, "body"),
        nsmap=nsmap,
    )
    _set_attrs(el, attrs)
    return el


def make_session_request(*, rid, host, wait, hold, window):
    """
    Build the session creation request (XEP-0124, section 7.1, with the
    XEP-0206 version attribute).
    """
    return _body(
        {None: namespaces.httpbind, "xmpp": namespaces.xbosh},
        [
            ("content", CONTENT_TYPE),
            ("wait", wait),
            ("hold", hold),
            ("rid", rid),
            ("to", host),
            ("window", window),
            (etree.QName(namespaces.xbosh, "version").text, "1.0"),
        ]
    )


def make_restart_request(*, rid, sid, host, lang="en"):
    """
    Build the stream restart request (XEP-0206, section 5).
    """
    return _body(
        {None: namespaces.httpbind, "xmpp": namespaces.xbosh},
        [
            ("rid", rid),
            ("sid", sid),
            ("to", host),
            (etree.QName(namespaces.xml, "lang").text, lang),
            (etree.QName(namespaces.xbosh, "restart").text, "true"),
        ]
    )


def make_body(*, rid, sid, payload=None):
    """
    Wrap `payload` in a ``<body/>`` envelope carrying `rid` and `sid`.

    `payload` is moved into the envelope; if it is :data:`None`, the envelope
    is left empty.
    """
    el = _body(
        {None: namespaces.httpbind},
        [
            ("rid", rid),
            ("sid", sid),
        ]
    )
    if payload is not None:
        el.append(payload)
    return el


def make_sasl_auth(mechanism, payload=None):
    """
    Build a SASL ``<auth/>`` element. `payload` is :class:`bytes` and is
    sent base64 encoded.
    """
    el = etree.Element(
        etree.QName(namespaces.sasl, "auth"),
        nsmap={None: namespaces.sasl},
    )
    el.set("mechanism", mechanism)
    if payload is not None:
        el.text = base64.b64encode(payload).decode("ascii")
    return el


def make_plain_credentials(jid, password):
    """
    Return the PLAIN message (:rfc:`4616`) for `jid` and `password`.

    The authorization identity is the full `jid`, the authentication
    identity its localpart.

    :raises ValueError: if any of the three parts contains a NUL character
    """
    localpart = jid.split("@")[0]
    parts = [s.encode("utf-8") for s in (jid, localpart, password)]
    if any(b"\0" in part for part in parts):
        raise ValueError("NUL byte in username or password is disallowed")
    return b"\0".join(parts)


def make_bind_request(iq_id, resource):
    """
    Build the resource binding ``<iq/>`` (:rfc:`6120`, section 7).
    """
    iq = etree.Element(
        etree.QName(namespaces.client, "iq"),
        nsmap={None: namespaces.client},
    )
    iq.set("id", iq_id)
    iq.set("type", "set")
    bind = etree.SubElement(
        iq,
        etree.QName(namespaces.rfc6120_bind, "bind"),
        nsmap={None: namespaces.rfc6120_bind},
    )
    etree.SubElement(
        bind,
        etree.QName(namespaces.rfc6120_bind, "resource"),
    ).text = resource
    return iq


def read_session_parameters(el):
    """
    Return a dictionary with the :data:`SESSION_PARAMETERS` attributes of
    `el`. Missing attributes map to :data:`None`.
    """
    return {name: el.get(name) for name in SESSION_PARAMETERS}


def read_mechanisms(el):
    """
    Return the SASL mechanism names advertised in `el`.

    `el` is either the ``<stream:features/>`` element or the element
    containing it (some servers send the features wrapped). :data:`None`
    yields an empty list.
    """
    if el is None:
        return []
    for path in ("./sasl:mechanisms/sasl:mechanism",
                 "./stream:features/sasl:mechanisms/sasl:mechanism"):
        mechanisms = xml.findall(el, path)
        if mechanisms:
            return [(mechanism.text or "").strip()
                    for mechanism in mechanisms]
    return []


def read_bound_jid(el):
    """
    Return the text of the ``<jid/>`` inside the ``<bind/>`` child of `el`,
    or :data:`None` if there is none.
    """
    if el is None:
        return None
    return xml.findtext(el, "./bind:bind/bind:jid")
