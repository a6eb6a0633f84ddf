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
"""Tar writing primitives shared by the archive builder."""

import logging
import os
import stat
import tarfile

from tartree import errors
from tartree.tree_reader import EntryKind, FileInfo

try:
  import grp  # pylint: disable=g-import-not-at-top
  import pwd  # pylint: disable=g-import-not-at-top
except ImportError:
  grp = pwd = None

logger = logging.getLogger(__name__)

# POSIX.1-2001: plain ustar headers, plus extended headers only for names or
# values ustar can not hold.
TAR_FORMAT = tarfile.PAX_FORMAT

ARCHIVE_SUFFIX = '.tar'

_TAR_TYPES = {
    EntryKind.DIRECTORY: tarfile.DIRTYPE,
    EntryKind.REGULAR: tarfile.REGTYPE,
    EntryKind.SYMLINK: tarfile.SYMTYPE,
}


def _owner_names(uid, gid):
  """Look up user and group names the way `tar` does, '' when unknown."""
  uname = gname = ''
  if pwd:
    try:
      uname = pwd.getpwuid(uid).pw_name
    except KeyError:
      pass
  if grp:
    try:
      gname = grp.getgrgid(gid).gr_name
    except KeyError:
      pass
  return uname, gname


class TarFileWriter(object):
  """A wrapper to write tar files from tree entries."""

  class Error(errors.Error):
    pass

  def __init__(self, name):
    """TarFileWriter wraps tarfile.open().

    Args:
      name: the tar file name. It is created or truncated.
    """
    self.name = name
    self.tar = tarfile.open(name=name, mode='w', format=TAR_FORMAT)
    self.members = 0

  def __enter__(self):
    return self

  def __exit__(self, t, v, traceback):
    self.close()

  def make_tarinfo(self, info: FileInfo) -> tarfile.TarInfo:
    """Create the header record describing `info`.

    Args:
      info: a directory, regular file or symlink entry.
    Returns:
      a TarInfo ready to be written.
    """
    if info.kind not in _TAR_TYPES:
      raise self.Error('Cannot archive %s entry %s' % (info.kind.value,
                                                       info.path))
    tarinfo = tarfile.TarInfo(info.path)
    tarinfo.type = _TAR_TYPES[info.kind]
    tarinfo.mode = stat.S_IMODE(info.mode)
    tarinfo.mtime = info.mtime
    tarinfo.uid = info.uid
    tarinfo.gid = info.gid
    tarinfo.uname, tarinfo.gname = _owner_names(info.uid, info.gid)
    if info.is_regular:
      tarinfo.size = info.size
    elif info.is_symlink:
      tarinfo.linkname = info.symlink_target
    elif not tarinfo.name.endswith('/'):
      # Some pre-POSIX.1-1988 tar implementations indicated a directory by
      # having a trailing slash in the name. Honor that here.
      tarinfo.name += '/'
    return tarinfo

  def add_entry(self, info: FileInfo):
    """Write the header for `info` followed by its content, if any."""
    tarinfo = self.make_tarinfo(info)
    logger.debug('Adding %s', tarinfo.name)
    if info.is_regular:
      with open(info.source, 'rb') as f:
        # The header already carries the size seen while walking.
        size = os.fstat(f.fileno()).st_size
        if size != info.size:
          raise self.Error('%s changed size while archiving: %d != %d' %
                           (info.source, size, info.size))
        self.tar.addfile(tarinfo, f)
    else:
      self.tar.addfile(tarinfo)
    self.members += 1

  def close(self):
    """Close the output tar file, writing the end-of-archive marker.

    This class should not be used anymore after calling that method.
    """
    self.tar.close()
