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

import logging
import socket
import sys

from cheroot import wsgi
from cheroot.ssl.builtin import BuiltinSSLAdapter
import waitress
from wsgidav.fs_dav_provider import FilesystemProvider
from wsgidav.wsgidav_app import WsgiDAVApp

from davshare import config as davconfig
from davshare import errors
from davshare import filesystem
from davshare import policy
from davshare import router

logger = logging.getLogger(__name__)

wsgidav_log = logging.getLogger("wsgidav")
wsgidav_log.setLevel(logging.WARNING)

waitress_log = logging.getLogger("waitress")
waitress_log.setLevel(logging.WARNING)

# Request body limit handed to waitress (5 GiB)
MAX_REQUEST_BODY_SIZE = 5 * 1024 * 1024 * 1024


def log_level(verbose):
    if verbose >= 4:
        return logging.DEBUG
    if verbose >= 2:
        return logging.INFO
    return logging.WARNING


def build_dav_app(config):
    """WsgiDAV application serving config.root.

    Authentication, read-only mode and directory listings are handled by
    the RequestRouter in front of it, so WsgiDAV runs anonymously and with
    its own directory browser disabled.
    """
    dav_config = {
        "provider_mapping": {"/": FilesystemProvider(
            config.root, fs_opts={"follow_symlinks": True})},
        "verbose": config.verbose,
        "logging": {"enable": False},
        "property_manager": True,
        "lock_storage": True,
        "http_authenticator": {
            "domain_controller": None,
            "accept_basic": True,
            "accept_digest": False,
            "default_to_digest": False,
        },
        "simple_dc": {"user_mapping": {"*": True}},
        "dir_browser": {"enable": False},
    }
    return WsgiDAVApp(dav_config)


def build_app(config, dav_app=None):
    if dav_app is None:
        dav_app = build_dav_app(config)
    return router.RequestRouter(
        dav_app,
        filesystem.LocalFileSystem(config.root),
        authenticator=policy.Authenticator(config.user, config.password),
        guard=policy.ReadOnlyGuard(config.read_only),
        show_hidden=config.show_hidden)


def tls_bind_address(config):
    """cheroot bind address. An empty host listens on every address family:
    "::" is bound dual-stack by cheroot, falling back to IPv4 only."""
    if config.host:
        return (config.host, config.port)
    if socket.has_ipv6:
        return ('::', config.port)
    return ('0.0.0.0', config.port)


def serve(app, config):
    """Serve app until interrupted. Raises OSError if the server fails to
    bind or the TLS material cannot be loaded."""
    display_host = config.host or '*'
    if config.https:
        server = wsgi.Server(tls_bind_address(config), app)
        server.ssl_adapter = BuiltinSSLAdapter(config.cert_file,
                                               config.key_file)
        logger.info("Serving %s on https://%s:%d", config.root, display_host,
                    config.port)
        try:
            server.start()
        finally:
            server.stop()
    else:
        logger.info("Serving %s on http://%s:%d", config.root, display_host,
                    config.port)
        if config.host:
            listen = {'host': config.host, 'port': config.port}
        else:
            # "*" binds all IPv4 and IPv6 interfaces
            listen = {'listen': '*:%d' % config.port}
        waitress.serve(app, max_request_body_size=MAX_REQUEST_BODY_SIZE,
                       **listen)


def main(argv=None):
    parser = davconfig.make_parser()
    try:
        config = davconfig.parse_args(argv, parser)
    except errors.ConfigurationError as ex:
        parser.print_usage(sys.stderr)
        sys.stderr.write('\nError: %s\n' % ex)
        return 0

    logging.basicConfig(
        level=log_level(config.verbose),
        format='%(asctime)s %(name)s %(levelname)s: %(message)s')
    wsgidav_log.setLevel(log_level(config.verbose))

    app = build_app(config)
    try:
        serve(app, config)
    except OSError as ex:
        sys.stderr.write('Failed to start server: %s\n' % ex)
        return 1
    except KeyboardInterrupt:
        logger.info("Stopped")
    return 0


if __name__ == '__main__':
    sys.exit(main())
