"""Error taxonomy shared by the lister, filter pipeline, and navigator.

``DirectoryUnreadable`` and ``InvalidPattern`` are recoverable and end up on
the status line. ``StatError`` is fatal and unwinds the whole browser.
"""

from __future__ import annotations


class BrowseError(Exception):
    """Base class for browser failures carrying a short user-facing reason."""

    def __init__(self, subject: str, reason: str) -> None:
        super().__init__(f"{subject}: {reason}")
        self.subject = subject
        self.reason = reason


class DirectoryUnreadable(BrowseError):
    """Directory could not be opened for listing."""

    @property
    def path(self) -> str:
        return self.subject


class InvalidPattern(BrowseError):
    """Filter source failed to compile as a regular expression."""

    @property
    def source(self) -> str:
        return self.subject


class StatError(BrowseError):
    """``lstat`` failed on an entry that was just enumerated."""

    @property
    def path(self) -> str:
        return self.subject


def os_error_reason(exc: OSError) -> str:
    """Return the bare OS error text (``Permission denied``) for ``exc``."""
    return exc.strerror or str(exc)


__all__ = [
    "BrowseError",
    "DirectoryUnreadable",
    "InvalidPattern",
    "StatError",
    "os_error_reason",
]
