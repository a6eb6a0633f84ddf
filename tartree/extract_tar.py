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
"""Extracts tar files into a directory tree."""

import errno
import logging
import os
import shutil
import stat
import tarfile

from tartree import errors

logger = logging.getLogger(__name__)


def _target_path(dest_path, name):
  """Return where the entry `name` goes under `dest_path`.

  Raises:
    errors.UnsafeEntryName: if the entry would land outside of `dest_path`.
  """
  if os.path.isabs(name):
    raise errors.UnsafeEntryName('Absolute path in archive: %r' % name)
  root = os.path.realpath(dest_path)
  target = os.path.normpath(os.path.join(root, name))
  # Symlinks extracted earlier may redirect the target.
  resolved = os.path.realpath(target)
  if os.path.commonpath([root, resolved]) != root:
    raise errors.UnsafeEntryName('Path escapes the destination: %r' % name)
  return target


def _open_archive(archive_path):
  try:
    return tarfile.open(archive_path, mode='r|')
  except tarfile.TarError as e:
    raise errors.ArchiveError('Cannot read %s: %s' % (archive_path, e)) from e


def _members(tar, archive_path):
  """Yield the members of `tar` in stream order."""
  while True:
    try:
      member = tar.next()
    except tarfile.TarError as e:
      raise errors.ArchiveError(
          'Cannot read %s: %s' % (archive_path, e)) from e
    if member is None:
      return
    yield member


def _extract_file(tar, member, target):
  with open(target, 'wb') as f:
    if not member.isreg():
      return
    try:
      shutil.copyfileobj(tar.extractfile(member), f)
    except tarfile.TarError as e:
      raise errors.ArchiveError(
          'Cannot read content of %s: %s' % (member.name, e)) from e


def extract(dest_path: str, archive_path: str) -> None:
  """Extract the tar archive `archive_path` into `dest_path`.

  `dest_path` and its missing parents are created first. Directories and
  files are created in the order they appear in the archive; a failure to
  create one aborts the extraction and leaves what was extracted so far.
  Symlinks are created on a best effort basis.

  Args:
    dest_path: the directory to extract into.
    archive_path: the tar file to read.

  Raises:
    errors.IsADirectory: if `archive_path` is a directory.
    errors.ArchiveError: if the archive is malformed.
    errors.UnsafeEntryName: for an entry outside of `dest_path`.
    OSError: if a directory or file can not be created or written.
  """
  if stat.S_ISDIR(os.stat(archive_path).st_mode):
    raise errors.IsADirectory(
        errno.EISDIR, 'given path is a directory', archive_path)

  os.makedirs(dest_path, exist_ok=True)

  count = 0
  with _open_archive(archive_path) as tar:
    for member in _members(tar, archive_path):
      target = _target_path(dest_path, member.name)
      if member.isdir():
        logger.debug('Creating directory %s', member.name)
        os.mkdir(target, stat.S_IMODE(member.mode))
      elif member.issym():
        logger.debug('Creating symlink %s -> %s', member.name,
                     member.linkname)
        try:
          os.symlink(member.linkname, target)
        except OSError as e:
          logger.warning('Cannot create symlink %s: %s', target, e)
          continue
      else:
        # Anything else is extracted as a regular file.
        logger.debug('Extracting %s', member.name)
        _extract_file(tar, member, target)
      count += 1
  logger.info('Extracted %d entries from %s to %s', count, archive_path,
              dest_path)


def destination_for(archive_path: str) -> str:
  """Return the directory `extract_in_place` extracts `archive_path` into.

  Raises:
    errors.InvalidArgument: if `archive_path` has no file extension.
  """
  stem, ext = os.path.splitext(archive_path)
  if not ext:
    raise errors.InvalidArgument(
        'expected a file extension (%s)' % archive_path)
  return os.path.dirname(stem) or os.curdir


def extract_in_place(archive_path: str) -> None:
  """Extract a tar archive next to itself, then remove the archive.

  Note that `archive_path` is expected to contain a file extension. The
  archive is left in place if the extraction fails.
  """
  dest_path = destination_for(archive_path)
  extract(dest_path, archive_path)
  os.remove(archive_path)
  logger.info('Removed %s', archive_path)
