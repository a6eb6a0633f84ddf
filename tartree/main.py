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
"""Command line tool to create, extract and list tar archives of trees."""

import argparse
import logging
import os
import stat
import sys
import tarfile

from tartree import build_tar
from tartree import errors
from tartree import extract_tar

LOG_LEVEL_ENV = 'TARTREE_LOG_LEVEL'

_LEVEL_MAP = {
    'CRITICAL': logging.CRITICAL,
    'ERROR': logging.ERROR,
    'WARNING': logging.WARNING,
    'INFO': logging.INFO,
    'DEBUG': logging.DEBUG,
}


def configure_logging(verbosity=0):
  """Configure the root logger for command line use.

  Order of precedence for the level:
  1. -v (INFO) or -vv (DEBUG) on the command line
  2. Environment variable TARTREE_LOG_LEVEL
  3. Fallback to WARNING
  """
  if verbosity >= 2:
    level = logging.DEBUG
  elif verbosity == 1:
    level = logging.INFO
  else:
    level_name = os.environ.get(LOG_LEVEL_ENV, 'WARNING').upper()
    level = _LEVEL_MAP.get(level_name, logging.WARNING)
  logging.basicConfig(
      level=level,
      format='%(levelname)s: %(name)s: %(message)s',
  )


def _create_argument_parser():
  """Creates the command line arg parser."""
  parser = argparse.ArgumentParser(
      prog='tartree',
      description='Create or extract tar archives of directory trees.',
      fromfile_prefix_chars='@')
  parser.add_argument('-v', '--verbose', action='count', default=0,
                      help='Log more details. Repeat for debug output.')
  subparsers = parser.add_subparsers(dest='command', required=True)

  create_parser = subparsers.add_parser(
      'create', help='Create an archive from a directory.')
  create_parser.add_argument(
      'directory', type=str,
      help='The directory to archive. With a trailing separator its content'
           ' is placed at the root of the archive.')
  create_parser.add_argument(
      '-o', '--output', type=str,
      help='The output tar file path. Defaults to the directory name with'
           ' the .tar suffix.')
  create_parser.add_argument(
      '-i', '--in-place', action='store_true',
      help='Remove the directory once the archive was created.')

  extract_parser = subparsers.add_parser(
      'extract', help='Extract an archive into a directory.')
  extract_parser.add_argument('archive', type=str,
                              help='The tar file to extract.')
  extract_parser.add_argument(
      '-d', '--directory', type=str,
      help='The directory to extract into. Defaults to the directory holding'
           ' the archive.')
  extract_parser.add_argument(
      '-i', '--in-place', action='store_true',
      help='Remove the archive once it was extracted.')

  list_parser = subparsers.add_parser(
      'list', help='List the entries of an archive.')
  list_parser.add_argument('archive', type=str,
                           help='The tar file to list.')
  return parser


def format_member(member: tarfile.TarInfo) -> str:
  """Format one archive entry like `tar -tv` does, without owners."""
  line = '%s %8d %s' % (stat.filemode(member.mode | _type_bits(member)),
                        member.size, member.name)
  if member.isdir():
    line += '/'
  if member.issym():
    line += ' -> ' + member.linkname
  return line


def _type_bits(member):
  if member.isdir():
    return stat.S_IFDIR
  if member.issym():
    return stat.S_IFLNK
  return stat.S_IFREG


def _create(args):
  if args.in_place:
    if args.output:
      raise errors.InvalidArgument('--output can not be used with --in-place')
    build_tar.create_in_place(args.directory)
  else:
    build_tar.create(args.output or build_tar.archive_path_for(args.directory),
                     args.directory)


def _extract(args):
  if args.in_place:
    if args.directory:
      raise errors.InvalidArgument(
          '--directory can not be used with --in-place')
    extract_tar.extract_in_place(args.archive)
  else:
    dest_path = args.directory or os.path.dirname(args.archive) or os.curdir
    extract_tar.extract(dest_path, args.archive)


def _list(args, out):
  try:
    with tarfile.open(args.archive, mode='r|') as tar:
      for member in tar:
        print(format_member(member), file=out)
  except tarfile.TarError as e:
    raise errors.ArchiveError('Cannot read %s: %s' % (args.archive, e)) from e


def main(argv=None, out=sys.stdout):
  args = _create_argument_parser().parse_args(argv)
  configure_logging(args.verbose)
  try:
    if args.command == 'create':
      _create(args)
    elif args.command == 'extract':
      _extract(args)
    else:
      _list(args, out)
  except (errors.Error, OSError) as e:
    print('tartree: %s' % e, file=sys.stderr)
    return 1
  return 0


if __name__ == '__main__':
  sys.exit(main())
