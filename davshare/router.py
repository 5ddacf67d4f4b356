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

from davshare import listing
from davshare import policy
from davshare import responses

logger = logging.getLogger(__name__)


def request_path(environ):
    """PATH_INFO as text.

    WSGI servers pass the raw path bytes as latin-1; re-decode them as UTF-8
    the way browsers and WebDAV clients send them. Bytes that are not UTF-8
    become surrogate escapes, matching filenames from os.scandir().
    """
    path = environ.get('PATH_INFO', '') or '/'
    try:
        raw = path.encode('latin-1')
    except UnicodeEncodeError:
        return path
    return raw.decode('utf-8', 'surrogateescape')


class RequestRouter(object):
    """WSGI application in front of the WebDAV application.

    Requests pass the authenticator and the read-only guard, GET requests on
    directories get an HTML index, everything else goes to ``dav_app``
    unmodified.
    """

    def __init__(self, dav_app, fs, authenticator=None, guard=None,
                 show_hidden=False):
        self.dav_app = dav_app
        self.authenticator = authenticator or policy.Authenticator()
        self.guard = guard or policy.ReadOnlyGuard()
        self.listing = listing.DirectoryListingHandler(fs, show_hidden)

    def __repr__(self):
        return self.__class__.__name__

    def __call__(self, environ, start_response):
        for gate in (self.authenticator, self.guard):
            decision = gate.check(environ)
            if decision.verdict != policy.ALLOW:
                return responses.start(decision.response, start_response)

        method = environ.get('REQUEST_METHOD', 'GET')
        if method == 'GET':
            outcome = self.listing.handle(request_path(environ), method)
            if isinstance(outcome, responses.Handled):
                return responses.start(outcome.response, start_response)
            logger.debug("Passing GET %r to WebDAV (%s)",
                         environ.get('PATH_INFO'), outcome.reason)

        return self.dav_app(environ, start_response)
