"""Path building, normalization, and lookup helpers.

Paths are plain POSIX strings. ``join_path`` is the single place where a
directory and an entry name become a full path, so cursor restoration and
entry opening always agree on the spelling of a path.
"""

from __future__ import annotations

import os
import posixpath
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .errors import DirectoryUnreadable, os_error_reason

if TYPE_CHECKING:
    from .entries.types import Entry

ROOT = "/"


def normalize_path(path: str) -> str:
    """Strip trailing separators, keeping a lone ``/`` for the root."""
    stripped = path.rstrip("/")
    if not stripped:
        return ROOT if path.startswith("/") else path
    return stripped


def join_path(directory: str, name: str) -> str:
    """Join ``name`` onto ``directory``.

    An absolute ``name`` replaces ``directory`` outright. Joining onto the
    root never doubles the separator.
    """
    if name.startswith("/"):
        joined = name
    elif directory == ROOT:
        joined = ROOT + name
    else:
        joined = f"{directory}/{name}"
    return posixpath.normpath(joined)


def has_parent(path: str) -> bool:
    """Return whether ``parent_of`` is meaningful for ``path``."""
    return path not in {ROOT, "."} and "/" in path


def parent_of(path: str) -> str:
    """Return the logical parent of ``path`` (``dirname`` semantics)."""
    parent = posixpath.dirname(normalize_path(path))
    return parent or "."


def index_of(entries: Sequence[Entry], directory: str, target: str | None) -> int:
    """Position of the entry whose joined path equals ``target``, else ``0``."""
    if target is None:
        return 0
    for idx, entry in enumerate(entries):
        if join_path(directory, entry.name) == target:
            return idx
    return 0


def ensure_readable_dir(path: str) -> None:
    """Raise ``DirectoryUnreadable`` unless ``path`` can be opened for listing."""
    try:
        with os.scandir(path):
            pass
    except OSError as exc:
        raise DirectoryUnreadable(path, os_error_reason(exc)) from exc


__all__ = [
    "ROOT",
    "normalize_path",
    "join_path",
    "has_parent",
    "parent_of",
    "index_of",
    "ensure_readable_dir",
]
