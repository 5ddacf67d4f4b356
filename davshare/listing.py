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
import html
import logging
import urllib.parse

from davshare import errors
from davshare import responses

logger = logging.getLogger(__name__)

ROOT = '/'

KIB = 1 << 10
MIB = 1 << 20
GIB = 1 << 30
TIB = 1 << 40

TIMESTAMP_FORMAT = '%Y/%m/%d %H:%M:%S'

BreadcrumbSegment = collections.namedtuple('BreadcrumbSegment',
                                           ['label', 'target'])

ICON_UP = (
    '<svg xmlns="http://www.w3.org/2000/svg" class="icon icon-tabler '
    'icon-tabler-corner-left-up" width="24" height="24" viewBox="0 0 24 24" '
    'stroke-width="2" stroke="currentColor" fill="none" '
    'stroke-linecap="round" stroke-linejoin="round">'
    '<path stroke="none" d="M0 0h24v24H0z" fill="none"></path>'
    '<path d="M18 18h-6a3 3 0 0 1 -3 -3v-10l-4 4m8 0l-4 -4"></path></svg>')

ICON_FOLDER = (
    '<svg xmlns="http://www.w3.org/2000/svg" class="icon icon-tabler '
    'icon-tabler-folder-filled" width="24" height="24" viewBox="0 0 24 24" '
    'stroke-width="2" stroke="currentColor" fill="none" '
    'stroke-linecap="round" stroke-linejoin="round">'
    '<path stroke="none" d="M0 0h24v24H0z" fill="none"></path>'
    '<path d="M9 3a1 1 0 0 1 .608 .206l.1 .087l2.706 2.707h6.586a3 3 0 0 1 '
    '2.995 2.824l.005 .176v8a3 3 0 0 1 -2.824 2.995l-.176 .005h-14a3 3 0 0 1 '
    '-2.995 -2.824l-.005 -.176v-11a3 3 0 0 1 2.824 -2.995l.176 -.005h4z" '
    'stroke-width="0" fill="#ffb900"></path></svg>')

ICON_FILE = (
    '<svg xmlns="http://www.w3.org/2000/svg" class="icon icon-tabler '
    'icon-tabler-file" width="24" height="24" viewBox="0 0 24 24" '
    'stroke-width="2" stroke="currentColor" fill="none" '
    'stroke-linecap="round" stroke-linejoin="round">'
    '<path stroke="none" d="M0 0h24v24H0z" fill="none"></path>'
    '<path d="M14 3v4a1 1 0 0 0 1 1h4"></path>'
    '<path d="M17 21h-10a2 2 0 0 1 -2 -2v-14a2 2 0 0 1 2 -2h7l5 5v11a2 2 0 '
    '0 1 -2 2z"></path></svg>')

PAGE_HEAD = """<!DOCTYPE html>
<html>
<head>
<title>%(title)s</title>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<style>
body { font-family: sans-serif; margin: 0; color: #333; }
.wrapper { max-width: 1100px; margin: 0 auto; padding: 0 1em; }
header { background: #f2f2f2; padding: 1em 0; }
.breadcrumbs { font-size: small; color: #888; }
h1 a { color: #006ed3; text-decoration: none; }
table { width: 100%%; border-collapse: collapse; }
th, td { text-align: left; padding: .4em .6em; }
tbody tr:hover { background: #f5f5f5; }
td a { display: flex; align-items: center; color: #006ed3;
       text-decoration: none; }
td a svg { margin-right: .5em; }
.size, .timestamp { white-space: nowrap; }
@media (max-width: 600px) { .hideable { display: none; } }
</style>
</head>
<body>
%(nav)s
<div class="wrapper">
<main>
<div class="meta">
</div>
<div class="listing">
<table aria-describedby="summary">
<thead>
<tr>
<th></th>
<th>Name</th>
<th class="size">Size</th>
<th class="timestamp hideable">Modified</th>
<th class="hideable"></th>
</tr>
</thead>
<tbody>
"""

PAGE_TAIL = """</tbody>
</table>
</div>
</main>
</div>
</body>
<footer></footer>
</html>
"""

NAV = """<header>
<div class="wrapper"><div class="breadcrumbs">Folder Path</div>
<h1>
<a href="/">/</a>%s
</h1>
</div>
</header>
"""

UP_ROW = ('<tr><td></td><td><a href="../">%s<span class="go-up">Up</span>'
          '</a></td></tr>\n' % ICON_UP)


def format_size(num_bytes):
    """Human readable size with binary units, e.g. "1.50 MiB"."""
    if num_bytes >= TIB:
        return '%.2f TiB' % (num_bytes / TIB)
    if num_bytes >= GIB:
        return '%.2f GiB' % (num_bytes / GIB)
    if num_bytes >= MIB:
        return '%.2f MiB' % (num_bytes / MIB)
    if num_bytes >= KIB:
        return '%.2f KiB' % (num_bytes / KIB)
    return '%d B' % num_bytes


def _sort_key(entry):
    return (not entry.is_dir,
            entry.name.encode('utf-8', 'surrogateescape'))


def sort_entries(entries):
    """Directories first, then files, each group by byte-wise name."""
    return sorted(entries, key=_sort_key)


def display_name(name):
    """Text safe to encode as UTF-8.

    Filenames that are not valid UTF-8 arrive with surrogate escapes;
    their undecodable bytes are shown as U+FFFD.
    """
    raw = name.encode('utf-8', 'surrogateescape')
    return raw.decode('utf-8', 'replace')


def quote_path(path):
    return urllib.parse.quote(path, safe='/', errors='surrogateescape')


def build_breadcrumbs(path):
    segments = [p for p in (path or '').split('/') if p]
    crumbs = []
    for i, label in enumerate(segments):
        crumbs.append(BreadcrumbSegment(label,
                                        '/' + '/'.join(segments[:i + 1])))
    return crumbs


def render_breadcrumbs(path):
    """Header markup: a fixed root link followed by one link per segment."""
    links = ['<a href="%s">%s</a>' % (html.escape(quote_path(crumb.target)),
                                      html.escape(display_name(crumb.label)))
             for crumb in build_breadcrumbs(path)]
    return NAV % ' / '.join(links)


def render_entry(entry):
    link = urllib.parse.quote(entry.name, safe='', errors='surrogateescape')
    name = entry.name
    if entry.is_dir:
        link += '/'
        name += '/'
    row = ['<tr class="file"><td></td><td><a href="%s">%s'
           '<span class="name">%s</span></a></td>'
           % (html.escape(link), ICON_FOLDER if entry.is_dir else ICON_FILE,
              html.escape(display_name(name)))]
    if entry.is_dir:
        row.append('<td>—</td>')
    else:
        row.append('<td class="size">%s</td>' % format_size(entry.size))
    row.append('<td class="timestamp hideable">%s</td>'
               % entry.modified.strftime(TIMESTAMP_FORMAT))
    row.append('<td class="hideable"></td></tr>\n')
    return ''.join(row)


def render_page(folder_name, nav, entries, show_hidden=False):
    """Render a complete HTML index page.

    ``nav`` is the breadcrumb markup from render_breadcrumbs() and is
    embedded as is. ``entries`` are rendered in the given order, so callers
    pass them through sort_entries() first. Names starting with a dot are
    left out unless ``show_hidden`` is set.
    """
    title = html.escape(display_name(folder_name))
    parts = [PAGE_HEAD % {'title': title, 'nav': nav}]
    if folder_name != ROOT:
        parts.append(UP_ROW)
    for entry in entries:
        if not show_hidden and entry.name.startswith('.'):
            continue
        parts.append(render_entry(entry))
    parts.append(PAGE_TAIL)
    return ''.join(parts)


def folder_name(path):
    segments = [p for p in path.split('/') if p]
    if not segments:
        return ROOT
    return segments[-1]


class DirectoryListingHandler(object):
    """Answers GET requests on directories with an HTML index."""

    def __init__(self, fs, show_hidden=False):
        self.fs = fs
        self.show_hidden = show_hidden

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.fs)

    def handle(self, path, method='GET'):
        """Return Handled(response) or NotHandled(reason).

        Anything that is not a readable directory is NotHandled, so the
        WebDAV application can answer it (file downloads, 404s).
        """
        if method != 'GET':
            return responses.NotHandled('method')
        path = path or ROOT
        try:
            handle = self.fs.open(path)
        except errors.FileSystemError as ex:
            logger.debug("Not listing %r: %s", path, ex)
            return responses.NotHandled('open')

        with handle:
            if not handle.stat().is_dir:
                return responses.NotHandled('file')
            if not path.endswith('/'):
                return responses.Handled(
                    responses.redirect_response(quote_path(path) + '/'))
            try:
                children = handle.read_children()
            except errors.EnumerationError:
                logger.exception("Error reading directory %r", path)
                return responses.Handled(responses.text_response(
                    500, 'Error reading directory'))

        document = render_page(folder_name(path), render_breadcrumbs(path),
                               sort_entries(children), self.show_hidden)
        return responses.Handled(responses.html_response(document))
