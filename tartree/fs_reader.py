"""Depth-first reader for filesystem directories."""

import logging
import os

from tartree.errors import SkipEntry
from tartree.tree_reader import EntryKind, FileInfo, TreeReader

logger = logging.getLogger(__name__)


def resolve_symlink_target(path: str) -> str:
    """Return the target to record for the symlink at `path`.

    The fully resolved target is expressed relative to the directory holding
    the link. A broken or looping link, or one whose target can not be made
    relative (different drives), is recorded with its raw text instead.
    """
    try:
        resolved = os.path.realpath(path, strict=True)
    except OSError:
        return os.readlink(path)
    try:
        return os.path.relpath(
            resolved, os.path.realpath(os.path.dirname(path)))
    except ValueError:
        return os.readlink(path)


def archive_root(dir_path: str) -> str:
    """Return the directory archive names are made relative to.

    With a trailing separator the content of `dir_path` is placed at the
    root of the archive, otherwise `dir_path` itself is the single top-level
    entry. Relative sources such as "." are named after the directory they
    point to.
    """
    top = os.path.abspath(dir_path)
    if dir_path.endswith(os.sep):
        return top
    return os.path.dirname(top)


class FileSystemReader(TreeReader):
    """Reader for filesystem directories.

    Objects are visited depth first, parents before their children and
    siblings in name order. Anything that can not be stat'ed, listed or
    classified is skipped and the walk goes on.
    """

    def __init__(self, folder_path: str):
        if not os.path.isdir(folder_path):
            raise ValueError(f"Path is not a directory: {folder_path}")

        self.top = os.path.abspath(folder_path)
        self.base = archive_root(folder_path)
        self._include_top = self.base != self.top
        self._gen = self._scan_directory()
        self.done = False

    def _archive_name(self, path: str) -> str:
        return os.path.relpath(path, self.base).replace(os.sep, '/')

    def classify(self, path: str) -> FileInfo:
        """Build the FileInfo for `path` or raise SkipEntry."""
        try:
            st = os.lstat(path)
        except OSError as e:
            raise SkipEntry(f'cannot stat {path}: {e}') from e

        kind = EntryKind.from_mode(st.st_mode)
        if kind is EntryKind.UNSUPPORTED:
            raise SkipEntry(f'unsupported file type: {path}')

        target = None
        if kind is EntryKind.SYMLINK:
            try:
                target = resolve_symlink_target(path)
            except OSError as e:
                raise SkipEntry(f'cannot read link {path}: {e}') from e

        return FileInfo(
            path=self._archive_name(path),
            kind=kind,
            size=st.st_size if kind is EntryKind.REGULAR else 0,
            mode=st.st_mode,
            source=path,
            uid=st.st_uid,
            gid=st.st_gid,
            mtime=int(st.st_mtime),
            symlink_target=target,
        )

    def _visit(self, path: str, emit: bool):
        if emit:
            try:
                info = self.classify(path)
            except SkipEntry as e:
                logger.debug('Skipping: %s', e)
                return
            yield info
            if not info.is_dir:
                return
        try:
            names = sorted(os.listdir(path))
        except OSError as e:
            logger.debug('Skipping content of %s: %s', path, e)
            return
        for name in names:
            yield from self._visit(os.path.join(path, name), True)

    def _scan_directory(self):
        """Walk the tree, yielding FileInfo for each archived entry."""
        yield from self._visit(self.top, self._include_top)

    def next(self) -> FileInfo:
        """Return the next FileInfo, or None if no more items."""
        if self.done:
            return None
        try:
            return next(self._gen)
        except StopIteration:
            self.done = True
            return None

    def is_done(self) -> bool:
        """Return True if all items have been read."""
        return self.done
