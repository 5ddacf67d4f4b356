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
import datetime
import errno
import logging
import os
import stat

from davshare import errors

logger = logging.getLogger(__name__)

DirectoryEntry = collections.namedtuple(
    'DirectoryEntry', ['name', 'is_dir', 'size', 'modified'])

Stat = collections.namedtuple('Stat', ['is_dir', 'size', 'modified'])


def _mtime(st):
    return datetime.datetime.fromtimestamp(st.st_mtime)


class FileSystem(object):
    """Capability used by the directory listing.

    Implementations map request paths ("/a/b") to handles. open() raises
    NotFoundError when nothing exists at the path and OpenError for any
    other failure.
    """

    def open(self, path):
        raise NotImplementedError


class FileHandle(object):
    """An opened resource: stat() always works, read_children() only on
    directories and raises EnumerationError on failure."""

    def stat(self):
        raise NotImplementedError

    def read_children(self):
        raise NotImplementedError

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


class LocalFileHandle(FileHandle):
    def __init__(self, path, file_path, st):
        self.path = path
        self.file_path = file_path
        self._stat = Stat(stat.S_ISDIR(st.st_mode), st.st_size, _mtime(st))

    def stat(self):
        return self._stat

    def read_children(self):
        if not self._stat.is_dir:
            raise errors.EnumerationError(self.path, 'not a directory')
        children = []
        try:
            with os.scandir(self.file_path) as it:
                for entry in it:
                    try:
                        st = entry.stat()
                    except FileNotFoundError:
                        # dangling symlink
                        logger.debug("Skipping broken link %r", entry.path)
                        continue
                    except OSError as ex:
                        logger.debug("Skipping %r: %s", entry.path, ex)
                        continue
                    children.append(DirectoryEntry(
                        entry.name, entry.is_dir(), st.st_size, _mtime(st)))
        except OSError as ex:
            raise errors.EnumerationError(self.path, ex.strerror or str(ex))
        return children


class LocalFileSystem(FileSystem):
    """Serves files below a root folder of the local disk."""

    def __init__(self, root):
        self.root = os.path.abspath(root)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.root)

    def to_file_path(self, path):
        """Map a request path to a file path below root.

        Raises OpenError for paths that would leave the root folder.
        """
        parts = [p for p in path.split('/') if p]
        file_path = os.path.abspath(os.path.join(self.root, *parts))
        if file_path != self.root and \
                not file_path.startswith(self.root.rstrip(os.sep) + os.sep):
            raise errors.OpenError(path, 'outside of root folder')
        return file_path

    def open(self, path):
        file_path = self.to_file_path(path)
        try:
            st = os.stat(file_path)
        except OSError as ex:
            if ex.errno in (errno.ENOENT, errno.ENOTDIR):
                raise errors.NotFoundError(path)
            raise errors.OpenError(path, ex.strerror or str(ex))
        return LocalFileHandle(path, file_path, st)
