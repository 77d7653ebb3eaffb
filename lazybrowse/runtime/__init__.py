"""Public runtime orchestration entry points.

This package groups the interactive browser bootstrap (`run_browser`) and the
lower-level event loop contracts used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming


def run_browser(*args, **kwargs):
    """Lazily import browser entrypoint to avoid terminal setup on import."""
    from .app import run_browser as _run_browser

    return _run_browser(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name in {"RuntimeLoopCallbacks", "RuntimeLoopTiming"}:
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "run_browser",
    "RuntimeLoopCallbacks",
    "RuntimeLoopTiming",
    "run_main_loop",
]
