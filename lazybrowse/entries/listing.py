"""Filesystem scanning for one directory level."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

from ..errors import DirectoryUnreadable, StatError, os_error_reason
from ..paths import join_path
from .types import DirectoryListing, Entry, kind_for_mode

logger = logging.getLogger(__name__)


def stat_entry(directory: str, name: str) -> Entry:
    """Build an ``Entry`` for ``name`` from a non-following stat of its path.

    Raises ``StatError`` when the stat fails.
    """
    path = join_path(directory, name)
    try:
        st = os.lstat(path)
    except OSError as exc:
        raise StatError(path, os_error_reason(exc)) from exc
    return Entry(
        name=name,
        kind=kind_for_mode(st.st_mode),
        mode=st.st_mode,
        mtime_ns=int(st.st_mtime_ns),
        size=int(st.st_size),
    )


def list_entries(directory: str, accept: Callable[[str], bool]) -> DirectoryListing:
    """List entries of ``directory`` whose names ``accept`` admits.

    The result is unordered. ``total_size`` sums the sizes of regular and
    executable entries only.
    """
    entries: list[Entry] = []
    total_size = 0
    try:
        scanner = os.scandir(directory)
    except OSError as exc:
        raise DirectoryUnreadable(directory, os_error_reason(exc)) from exc

    with scanner:
        for child in scanner:
            name = child.name
            if name in {".", ".."}:
                continue
            if not accept(name):
                continue
            entry = stat_entry(directory, name)
            if entry.is_sized:
                total_size += entry.size
            entries.append(entry)

    logger.debug("listed %s: %d entries, %d bytes", directory, len(entries), total_size)
    return DirectoryListing(entries=tuple(entries), total_size=total_size)


__all__ = [
    "stat_entry",
    "list_entries",
]
