########################################################################
# File name: diagnostics.py
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
:mod:`~xbosh.diagnostics` --- Callback sink for protocol traces
###############################################################

:class:`~xbosh.client.BOSHClient` logs every request and response body at
DEBUG level through :mod:`logging`. Applications which just want the raw
trace handed to a function can attach one with :func:`install_sink`:

.. code-block:: python

    handler = xbosh.diagnostics.install_sink(print)
    client = xbosh.connect("me@server.tld", "secret", endpoint)
    xbosh.diagnostics.remove_sink(handler)

.. autofunction:: install_sink

.. autofunction:: remove_sink

.. autoclass:: CallbackHandler
"""

import logging


#: Line passed to the callback right after it has been installed.
STARTUP_LINE = "Logging on"


class CallbackHandler(logging.Handler):
    """
    :class:`logging.Handler` which passes each formatted record to
    `callback`.

    Exceptions raised by `callback` are passed to :meth:`handleError`, so a
    failing sink cannot interrupt the code which logged the record.
    """

    def __init__(self, callback, level=logging.DEBUG):
        super().__init__(level)
        self.callback = callback
        #: Level of the logger before :func:`install_sink` changed it.
        self.previous_level = logging.NOTSET

    def emit(self, record):
        try:
            msg = self.format(record)
            self.callback(msg)
        except Exception:  # NOQA
            self.handleError(record)


def _default_logger(logger):
    if logger is None:
        return logging.getLogger("xbosh")
    return logger


def install_sink(callback, logger=None):
    """
    Route the diagnostics of `logger` to `callback`.

    :param callback: Called with one :class:`str` per message.
    :param logger: Logger to attach to; defaults to the ``xbosh`` logger,
        which is the default `base_logger` of the client.
    :type logger: :class:`logging.Logger` or :data:`None`
    :return: The handler, to be passed to :func:`remove_sink`.
    :rtype: :class:`CallbackHandler`

    There is at most one sink per logger: a :class:`CallbackHandler` which
    is already attached to `logger` is removed first.

    The logger is set to DEBUG level so that the request and response bodies
    reach the sink; :func:`remove_sink` restores the previous level.
    :data:`STARTUP_LINE` is passed to `callback` before this function
    returns.
    """
    logger = _default_logger(logger)
    previous_level = logger.level
    for old in list(logger.handlers):
        if isinstance(old, CallbackHandler):
            logger.removeHandler(old)
            previous_level = old.previous_level

    handler = CallbackHandler(callback)
    handler.previous_level = previous_level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    callback(STARTUP_LINE)
    return handler


def remove_sink(handler, logger=None):
    """
    Detach a handler previously returned by :func:`install_sink` and
    restore the level `logger` had before the sink was installed.

    Removing a handler which is not attached any more has no effect.
    """
    logger = _default_logger(logger)
    if handler not in logger.handlers:
        return
    logger.removeHandler(handler)
    logger.setLevel(handler.previous_level)
