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

import base64
import collections
import hmac
import logging

from davshare import responses

logger = logging.getLogger(__name__)

ALLOW = 'allow'
DENY_UNAUTHENTICATED = 'deny-unauthenticated'
DENY_FORBIDDEN = 'deny-forbidden'

WRITE_METHODS = frozenset(['PUT', 'DELETE', 'PROPPATCH', 'MKCOL',
                           'COPY', 'MOVE'])

AccessDecision = collections.namedtuple('AccessDecision',
                                        ['verdict', 'response'])

ALLOWED = AccessDecision(ALLOW, None)


def basic_credentials(environ):
    """Return (username, password) from a Basic Authorization header.

    Returns None if the header is missing or malformed.
    """
    header = environ.get('HTTP_AUTHORIZATION', '')
    scheme, _, encoded = header.partition(' ')
    if scheme.lower() != 'basic':
        return None
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True)
        decoded = decoded.decode('utf-8')
    except ValueError:
        return None
    username, sep, password = decoded.partition(':')
    if not sep:
        return None
    return username, password


def _equal(given, expected):
    return hmac.compare_digest(given.encode('utf-8'), expected.encode('utf-8'))


class Authenticator(object):
    """HTTP Basic authentication against a single configured account.

    Only enabled when both username and password are non-empty, otherwise
    every request is allowed.
    """

    realm = 'Restricted'

    def __init__(self, username='', password=''):
        self.username = username or ''
        self.password = password or ''

    def __repr__(self):
        return self.__class__.__name__

    @property
    def enabled(self):
        return bool(self.username and self.password)

    def check(self, environ):
        if not self.enabled:
            return ALLOWED

        credentials = basic_credentials(environ)
        if credentials is None:
            logger.info("Missing credentials for %s %s",
                        environ.get('REQUEST_METHOD'),
                        environ.get('PATH_INFO'))
            challenge = ('WWW-Authenticate', 'Basic realm="%s"' % self.realm)
            return AccessDecision(DENY_UNAUTHENTICATED,
                                  responses.Response(401, [challenge], b''))

        username, password = credentials
        # evaluate both, no short circuit
        user_ok = _equal(username, self.username)
        password_ok = _equal(password, self.password)
        if not (user_ok and password_ok):
            logger.info("Invalid credentials for user %r", username)
            return AccessDecision(
                DENY_UNAUTHENTICATED,
                responses.text_response(401, 'WebDAV: need authorized!'))
        return ALLOWED


class ReadOnlyGuard(object):
    """Rejects write methods with 403 when the share is read-only."""

    def __init__(self, read_only=False):
        self.read_only = read_only

    def __repr__(self):
        return '%s(read_only=%r)' % (self.__class__.__name__, self.read_only)

    def check(self, environ):
        method = environ.get('REQUEST_METHOD', '')
        if self.read_only and method in WRITE_METHODS:
            logger.info("Rejected %s %s on read-only share", method,
                        environ.get('PATH_INFO'))
            return AccessDecision(
                DENY_FORBIDDEN,
                responses.text_response(403, 'WebDAV: Read Only!!!'))
        return ALLOWED
