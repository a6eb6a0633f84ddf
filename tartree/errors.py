# Copyright 2026 The Bazel Authors. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Exceptions raised by tartree.

Plain filesystem failures are not wrapped: they reach the caller as the
OSError raised by the failing call.
"""


class Error(Exception):
  """Base class for all tartree errors."""


class NotADirectory(Error, NotADirectoryError):
  """An archive was requested from something that is not a directory."""


class IsADirectory(Error, IsADirectoryError):
  """An extraction was requested from a directory instead of an archive."""


class InvalidArgument(Error, ValueError):
  """A path argument does not have the expected shape."""


class UnsafeEntryName(Error, ValueError):
  """An archive entry would be written outside of the destination."""


class ArchiveError(Error, OSError):
  """The archive stream could not be parsed."""


class SkipEntry(Exception):
  """Raised while walking a tree to leave one object out of the archive.

  This never escapes the tree walk; it is kept apart from Error so that a
  failure to write the archive can not be mistaken for a skip.
  """
