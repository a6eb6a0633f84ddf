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
"""This tool builds tar files from a directory tree."""

import errno
import logging
import os
import shutil
import stat

from tartree import archive
from tartree import errors
from tartree.fs_reader import FileSystemReader

logger = logging.getLogger(__name__)


def create(dest_path: str, dir_path: str) -> None:
  """Create a tar archive at `dest_path` from the directory `dir_path`.

  Calling this function with `dir_path` having a trailing separator puts the
  content of `dir_path` at the root of the archive rather than the directory
  itself.

  Args:
    dest_path: the tar file to write. It is created or truncated.
    dir_path: the directory to archive.

  Raises:
    errors.NotADirectory: if `dir_path` is not a directory.
    OSError: if `dir_path` can not be stat'ed, or when creating the archive
        or copying the content of a file fails. A partially written archive
        is left behind in the latter case.
    archive.TarFileWriter.Error: if a file changed size while it was being
        archived.
  """
  if not stat.S_ISDIR(os.stat(dir_path).st_mode):
    raise errors.NotADirectory(
        errno.ENOTDIR, 'given path is not a directory', dir_path)

  reader = FileSystemReader(dir_path)
  with archive.TarFileWriter(dest_path) as tar_out:
    for info in reader:
      tar_out.add_entry(info)
  logger.info('Wrote %d entries from %s to %s', tar_out.members, dir_path,
              dest_path)


def archive_path_for(dir_path: str) -> str:
  """Return the path of the archive `create_in_place` builds for a tree."""
  return (dir_path.rstrip(os.sep) or os.sep) + archive.ARCHIVE_SUFFIX


def create_in_place(dir_path: str) -> None:
  """Behaves just as create() but replaces `dir_path` with the archive.

  The archive is named after `dir_path` with the .tar suffix added. The
  directory is removed only once the archive was fully written; if that
  fails it is left untouched.
  """
  create(archive_path_for(dir_path), dir_path)
  shutil.rmtree(dir_path)
  logger.info('Removed %s', dir_path)
