########################################################################
# File name: bosh_connect.py
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
Negotiate a BOSH session and print the values needed to attach to it
(for example from a browser-side client).

The JID, password and endpoint can be given on the command line or in the
``[global]`` section of an INI file::

    [global]
    local_jid = me@server.tld
    password = secret
    endpoint = https://server.tld/http-bind
"""
import argparse
import configparser
import getpass
import logging
import os
import os.path
import sys

import xbosh


def prepare_argparse():
    config_default_path = os.path.join(
        os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config")),
        "xbosh_examples.ini")
    if not os.path.exists(config_default_path):
        config_default_path = None

    parser = argparse.ArgumentParser()
    parser.add_argument(
        "-c", "--config",
        default=config_default_path,
        type=argparse.FileType("r"),
        help="Configuration file to read",
    )
    parser.add_argument(
        "-j", "--local-jid",
        help="JID to authenticate with (only required if not in config)"
    )
    parser.add_argument(
        "-e", "--endpoint",
        help="URL of the BOSH service (only required if not in config)"
    )
    parser.add_argument(
        "-p",
        dest="ask_password",
        action="store_true",
        default=False,
        help="Ask for password on stdio"
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        default=False,
        help="Print every request and response body"
    )
    parser.add_argument(
        "-v",
        help="Increase verbosity",
        default=0,
        dest="verbosity",
        action="count",
    )
    return parser


def configure(args):
    config = configparser.ConfigParser()
    if args.config is not None:
        with args.config:
            config.read_file(args.config)

    logging.basicConfig(
        level={
            0: logging.ERROR,
            1: logging.WARNING,
            2: logging.INFO,
        }.get(args.verbosity, logging.DEBUG)
    )

    jid = args.local_jid or config.get("global", "local_jid", fallback=None)
    if jid is None:
        jid = input("Account JID> ")

    endpoint = args.endpoint or config.get("global", "endpoint",
                                           fallback=None)
    if endpoint is None:
        endpoint = input("BOSH endpoint> ")

    if args.ask_password:
        password = getpass.getpass()
    else:
        try:
            password = config.get("global", "password")
        except (configparser.NoOptionError,
                configparser.NoSectionError):
            logging.error("When the local JID %s is set, password "
                          "must be set as well.", jid)
            raise

    return jid, password, endpoint


def main():
    args = prepare_argparse().parse_args()
    jid, password, endpoint = configure(args)

    if args.trace:
        xbosh.diagnostics.install_sink(
            lambda msg: print(msg, file=sys.stderr)
        )

    with xbosh.HTTPXTransport() as transport:
        try:
            client = xbosh.connect(jid, password, endpoint,
                                   transport=transport)
        except xbosh.AuthenticationError as exc:
            print("authentication failed: {}".format(exc.condition),
                  file=sys.stderr)
            return 1
        except xbosh.ProtocolError as exc:
            print("negotiation failed: {}".format(exc), file=sys.stderr)
            return 2

    print("jid={}".format(client.jid))
    print("sid={}".format(client.sid))
    print("rid={}".format(client.rid))
    return 0


if __name__ == "__main__":
    sys.exit(main())
