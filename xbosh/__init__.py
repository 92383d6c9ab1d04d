########################################################################
# File name: __init__.py
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
Version information
###################

.. autodata:: __version__

.. data:: version

   Alias of :data:`__version__`.

.. autodata:: version_info

Shorthands
##########

.. function:: connect

   Alias of :func:`xbosh.client.connect`.

"""
from ._version import version_info, __version__, version  # NOQA: F401

#: The imported :mod:`xbosh` version as a tuple of `major version`, `minor
#: version`, `patch level` and `pre-release identifier`.
version_info = version_info

#: The imported :mod:`xbosh` version as a string.
__version__ = __version__

from .client import BOSHClient, connect  # NOQA: F401
from .errors import (  # NOQA: F401
    AuthenticationError,
    AuthenticationNotSupported,
    ProtocolError,
)
from .transport import BaseTransport, HTTPXTransport  # NOQA: F401
from . import diagnostics  # NOQA: F401
