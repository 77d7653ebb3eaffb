"""Filter compilation and entry ordering.

Filters are case-insensitive regular expressions searched anywhere in an
entry name. Ordering is either byte-wise by name or newest-first by mtime.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from dataclasses import dataclass

from ..errors import InvalidPattern
from .types import Entry

DEFAULT_UNPRIVILEGED_FILTER = "^[^.]"
SHOW_ALL_FILTER = "."


@dataclass(frozen=True)
class FilterPattern:
    """Compiled filter plus the source string it was compiled from."""

    source: str
    regex: re.Pattern[str]

    def matches(self, name: str) -> bool:
        """Return whether ``name`` passes this filter."""
        return self.regex.search(name) is not None


def compile_filter(source: str) -> FilterPattern:
    """Compile ``source`` into a ``FilterPattern``.

    Raises ``InvalidPattern`` carrying the regex engine's message on failure.
    """
    try:
        regex = re.compile(source, re.IGNORECASE)
    except re.error as exc:
        raise InvalidPattern(source, str(exc)) from exc
    return FilterPattern(source=source, regex=regex)


def default_filter_source(privileged: bool) -> str:
    """Privileged sessions show everything; others hide dotfiles."""
    return SHOW_ALL_FILTER if privileged else DEFAULT_UNPRIVILEGED_FILTER


def _name_key(entry: Entry) -> bytes:
    return os.fsencode(entry.name)


def _mtime_key(entry: Entry) -> int:
    return -entry.mtime_ns


def sort_entries(entries: Iterable[Entry], mtime_order: bool) -> tuple[Entry, ...]:
    """Return ``entries`` ordered by name bytes, or newest first when ``mtime_order``."""
    key = _mtime_key if mtime_order else _name_key
    return tuple(sorted(entries, key=key))


__all__ = [
    "DEFAULT_UNPRIVILEGED_FILTER",
    "SHOW_ALL_FILTER",
    "FilterPattern",
    "compile_filter",
    "default_filter_source",
    "sort_entries",
]
