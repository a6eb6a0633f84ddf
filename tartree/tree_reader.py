"""Base types shared by the tree readers."""

import enum
import stat
from abc import ABC, abstractmethod
from dataclasses import dataclass


class EntryKind(enum.Enum):
    """Kind of a filesystem object, as far as the archive is concerned."""
    DIRECTORY = 'directory'
    REGULAR = 'regular'
    SYMLINK = 'symlink'
    UNSUPPORTED = 'unsupported'  # fifos, sockets and devices

    @classmethod
    def from_mode(cls, mode: int) -> 'EntryKind':
        if stat.S_ISLNK(mode):
            return cls.SYMLINK
        if stat.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat.S_ISREG(mode):
            return cls.REGULAR
        return cls.UNSUPPORTED


@dataclass
class FileInfo:
    """Information about a file or directory."""
    path: str     # archive name, '/' separated, no trailing '/'
    kind: EntryKind
    size: int     # 0 for directories and symlinks
    mode: int     # st_mode, including the file type bits
    source: str = ''  # where the entry lives on disk
    uid: int = 0
    gid: int = 0
    mtime: int = 0
    symlink_target: str = None

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.kind is EntryKind.SYMLINK

    @property
    def is_regular(self) -> bool:
        return self.kind is EntryKind.REGULAR


class TreeReader(ABC):
    """Abstract base class for reading tree metadata from various sources."""

    @abstractmethod
    def next(self) -> FileInfo:
        """
        Return the next FileInfo, or None if no more items.
        """
        pass

    @abstractmethod
    def is_done(self) -> bool:
        """Return True if all items have been read."""
        pass

    def __iter__(self):
        while True:
            info = self.next()
            if info is None:
                return
            yield info
