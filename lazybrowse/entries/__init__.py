"""Directory entry model, listing, and ordering helpers."""

from .listing import list_entries, stat_entry
from .ordering import (
    DEFAULT_UNPRIVILEGED_FILTER,
    SHOW_ALL_FILTER,
    FilterPattern,
    compile_filter,
    default_filter_source,
    sort_entries,
)
from .types import (
    KIND_DIRECTORY,
    KIND_EXECUTABLE,
    KIND_FIFO,
    KIND_OTHER,
    KIND_REGULAR,
    KIND_SOCKET,
    KIND_SYMLINK,
    DirectoryListing,
    Entry,
    kind_for_mode,
    kind_indicator,
)

__all__ = [
    "DEFAULT_UNPRIVILEGED_FILTER",
    "SHOW_ALL_FILTER",
    "KIND_DIRECTORY",
    "KIND_EXECUTABLE",
    "KIND_FIFO",
    "KIND_OTHER",
    "KIND_REGULAR",
    "KIND_SOCKET",
    "KIND_SYMLINK",
    "DirectoryListing",
    "Entry",
    "FilterPattern",
    "compile_filter",
    "default_filter_source",
    "kind_for_mode",
    "kind_indicator",
    "list_entries",
    "sort_entries",
    "stat_entry",
]
