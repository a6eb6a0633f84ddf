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
"""Shared helpers for the tartree tests."""

import os
import tarfile

from tartree.fs_reader import FileSystemReader


def assertTarFileContent(test_class, tar, content):
  """Assert that tarfile contains exactly the entry described by `content`.

  Args:
      tar: the path to the TAR file to test.
      content: an array describing the expected content of the TAR file.
          Each entry in that list should be a dictionary where each field
          is a field to test in the corresponding TarInfo. For
          testing the presence of a file "x", then the entry could simply
          be `{"name": "x"}`, the missing field will be ignored. To match
          the content of a file entry, use the key "data".
  """
  got_names = []
  with tarfile.open(tar, "r:*") as f:
    for current in f:
      got_names.append(current.name)

  with tarfile.open(tar, "r:*") as f:
    i = 0
    for current in f:
      error_msg = "Extraneous file at end of archive %s: %s" % (
          tar,
          current.name
          )
      test_class.assertLess(i, len(content), error_msg)
      for k, v in content[i].items():
        if k == "data":
          value = f.extractfile(current).read()
        else:
          value = getattr(current, k)
        error_msg = " ".join([
            "Value `%s` for key `%s` of file" % (value, k),
            "%s in archive %s does" % (current.name, tar),
            "not match expected value `%s`" % v
            ])
        error_msg += str(got_names)
        test_class.assertEqual(value, v, error_msg)
      i += 1
    if i < len(content):
      test_class.fail("Missing file %s in archive %s" % (content[i], tar))


def write_file(path, data=b""):
  os.makedirs(os.path.dirname(path), exist_ok=True)
  with open(path, "wb") as f:
    f.write(data)


def make_sample_tree(top):
  """Populate `top` with files, directories and symlinks.

  Layout:
    top/a.txt          "alpha"
    top/empty/
    top/sub/b.txt      "bravo"
    top/sub/deep/c.bin 1000 bytes
    top/sub/to_a       -> ../a.txt
    top/dangling       -> nowhere/at/all
  """
  write_file(os.path.join(top, "a.txt"), b"alpha")
  os.makedirs(os.path.join(top, "empty"))
  write_file(os.path.join(top, "sub", "b.txt"), b"bravo")
  write_file(os.path.join(top, "sub", "deep", "c.bin"), bytes(range(250)) * 4)
  os.symlink(os.path.join("..", "a.txt"), os.path.join(top, "sub", "to_a"))
  os.symlink("nowhere/at/all", os.path.join(top, "dangling"))


def snapshot_tree(top):
  """Describe the content of `top` as {path: (kind, data or link target)}.

  Link targets are the raw text stored on disk.
  """
  result = {}
  for info in FileSystemReader(top.rstrip(os.sep) + os.sep):
    if info.is_regular:
      with open(info.source, "rb") as f:
        detail = f.read()
    elif info.is_symlink:
      detail = os.readlink(info.source)
    else:
      detail = None
    result[info.path] = (info.kind, detail)
  return result
