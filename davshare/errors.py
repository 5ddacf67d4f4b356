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


class DavShareError(Exception):
    """Base class for errors raised by davshare."""


class ConfigurationError(DavShareError):
    """Required settings are missing or invalid."""


class FileSystemError(DavShareError):
    """A path could not be opened or read."""

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason
        message = path
        if reason:
            message = '%s: %s' % (path, reason)
        super(FileSystemError, self).__init__(message)


class NotFoundError(FileSystemError):
    pass


class OpenError(FileSystemError):
    pass


class EnumerationError(FileSystemError):
    pass
