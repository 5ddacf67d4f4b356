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

import collections

Response = collections.namedtuple('Response', ['status', 'headers', 'body'])

# Outcome of the directory listing: either a complete response, or a reason
# why the request is left to the WebDAV application.
Handled = collections.namedtuple('Handled', ['response'])
NotHandled = collections.namedtuple('NotHandled', ['reason'])

STATUS_TEXT = {
    200: 'OK',
    302: 'Found',
    401: 'Unauthorized',
    403: 'Forbidden',
    500: 'Internal Server Error',
}


def status_line(status):
    return '%d %s' % (status, STATUS_TEXT.get(status, ''))


def text_response(status, message, headers=None):
    """Plain text error response, body terminated by a newline."""
    all_headers = [('Content-Type', 'text/plain; charset=utf-8'),
                   ('X-Content-Type-Options', 'nosniff')]
    all_headers.extend(headers or [])
    return Response(status, all_headers, (message + '\n').encode('utf-8'))


def html_response(document):
    return Response(200, [('Content-Type', 'text/html; charset=utf-8')],
                    document.encode('utf-8'))


def redirect_response(location):
    return Response(302, [('Location', location)], b'')


def start(response, start_response):
    """Send a Response through a WSGI start_response callable."""
    headers = list(response.headers)
    headers.append(('Content-Length', str(len(response.body))))
    start_response(status_line(response.status), headers)
    return [response.body]
