# Copyright 2013 Christian Schwede <info@cschwede.de>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import argparse
import collections

from davshare import errors

DEFAULT_PORT = '5005'
# all interfaces and address families
DEFAULT_HOST = ''

Config = collections.namedtuple('Config', [
    'root', 'host', 'port', 'https', 'cert_file', 'key_file',
    'user', 'password', 'read_only', 'show_hidden', 'verbose'])


def split_address(address):
    """Split "5005", ":5005", "host:5005" or "[::1]:5005" into (host, port).

    An empty host means all interfaces, IPv4 and IPv6.
    """
    if not address:
        raise errors.ConfigurationError('-port must not be empty')
    host, sep, port = address.rpartition(':')
    if not sep:
        host, port = '', address
    host = host.strip('[]') or DEFAULT_HOST
    try:
        port = int(port)
    except ValueError:
        raise errors.ConfigurationError('invalid port in %r' % address)
    if not 0 <= port <= 65535:
        raise errors.ConfigurationError('invalid port in %r' % address)
    return host, port


def make_parser():
    parser = argparse.ArgumentParser(
        prog='davshare',
        description='WebDAV server with an HTML directory index')
    parser.add_argument('-dir', '--dir', dest='root', default='',
                        help='webdav root dir')
    parser.add_argument('-port', '--port', default=DEFAULT_PORT,
                        help='http or https port, or host:port '
                             '(default: %(default)s)')
    parser.add_argument('-https-mode', '--https-mode', dest='https',
                        action='store_true', help='use https mode')
    parser.add_argument('-https-cert-file', '--https-cert-file',
                        dest='cert_file', default='cert.pem',
                        help='https cert file (default: %(default)s)')
    parser.add_argument('-https-key-file', '--https-key-file',
                        dest='key_file', default='key.pem',
                        help='https key file (default: %(default)s)')
    parser.add_argument('-user', '--user', default='', help='user name')
    parser.add_argument('-password', '--password', default='',
                        help='user password')
    parser.add_argument('-read-only', '--read-only', dest='read_only',
                        action='store_true', help='read only')
    parser.add_argument('-show-hidden', '--show-hidden', dest='show_hidden',
                        action='store_true', help='show hidden files')
    parser.add_argument('-verbose', '--verbose', type=int, default=1,
                        help='log verbosity 0-5 (default: %(default)s)')
    return parser


def from_args(args):
    if not args.root:
        raise errors.ConfigurationError('-dir and -port flags are required.')
    host, port = split_address(args.port)
    return Config(root=args.root, host=host, port=port, https=args.https,
                  cert_file=args.cert_file, key_file=args.key_file,
                  user=args.user, password=args.password,
                  read_only=args.read_only, show_hidden=args.show_hidden,
                  verbose=args.verbose)


def parse_args(argv=None, parser=None):
    """Build the Config from command line arguments.

    Raises ConfigurationError when -dir is missing or -port is unusable.
    """
    parser = parser or make_parser()
    return from_args(parser.parse_args(argv))
