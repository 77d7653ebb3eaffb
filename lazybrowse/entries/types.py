"""Domain datatypes for directory entries and listings."""

from __future__ import annotations

import stat
from dataclasses import dataclass

KIND_REGULAR = "regular"
KIND_DIRECTORY = "directory"
KIND_SYMLINK = "symlink"
KIND_SOCKET = "socket"
KIND_FIFO = "fifo"
KIND_EXECUTABLE = "executable"
KIND_OTHER = "other"

SIZED_KINDS = frozenset({KIND_REGULAR, KIND_EXECUTABLE})

_KIND_INDICATORS = {
    KIND_DIRECTORY: "/",
    KIND_SYMLINK: "@",
    KIND_SOCKET: "=",
    KIND_FIFO: "|",
    KIND_EXECUTABLE: "*",
}


def kind_for_mode(mode: int) -> str:
    """Classify a raw ``st_mode`` from a non-following stat."""
    if stat.S_ISDIR(mode):
        return KIND_DIRECTORY
    if stat.S_ISLNK(mode):
        return KIND_SYMLINK
    if stat.S_ISSOCK(mode):
        return KIND_SOCKET
    if stat.S_ISFIFO(mode):
        return KIND_FIFO
    if stat.S_ISREG(mode):
        return KIND_EXECUTABLE if mode & stat.S_IXUSR else KIND_REGULAR
    return KIND_OTHER


def kind_indicator(kind: str) -> str:
    """Return the one-character suffix drawn after an entry name, or ``""``."""
    return _KIND_INDICATORS.get(kind, "")


@dataclass(frozen=True)
class Entry:
    """One listed filesystem object, as observed by ``lstat``."""

    name: str
    kind: str
    mode: int
    mtime_ns: int
    size: int

    @property
    def is_sized(self) -> bool:
        """Whether this entry counts toward the listing's aggregate size."""
        return self.kind in SIZED_KINDS


@dataclass(frozen=True)
class DirectoryListing:
    """Filtered directory contents plus the aggregate size of sized entries."""

    entries: tuple[Entry, ...] = ()
    total_size: int = 0


__all__ = [
    "KIND_REGULAR",
    "KIND_DIRECTORY",
    "KIND_SYMLINK",
    "KIND_SOCKET",
    "KIND_FIFO",
    "KIND_EXECUTABLE",
    "KIND_OTHER",
    "SIZED_KINDS",
    "Entry",
    "DirectoryListing",
    "kind_for_mode",
    "kind_indicator",
]
