"""Main interactive event loop for the terminal UI.

Renders when state is dirty, blocks for one key (bounded by a timeout), and
hands bound keys to the navigator. Timeouts feed the idle counter only.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..input import KeyBinding, read_key
from .state import BrowseState
from .terminal import TerminalController


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    input_timeout_ms: int = 1000
    idle_timeout_ticks: int = 0


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    render: Callable[[], None]
    lookup_binding: Callable[[str], KeyBinding | None]
    dispatch: Callable[[KeyBinding], bool]
    on_idle: Callable[[], None]


class IdleCounter:
    """Count consecutive input timeouts and signal once per ``limit`` ticks."""

    def __init__(self, limit: int) -> None:
        self.limit = max(0, limit)
        self.ticks = 0

    def reset(self) -> None:
        self.ticks = 0

    def tick(self) -> bool:
        """Record one timeout; ``True`` when the idle action should fire."""
        self.ticks += 1
        if self.limit and self.ticks >= self.limit:
            self.ticks = 0
            return True
        return False


def normalize_enter(key: str, skip_next_lf: bool) -> tuple[str | None, bool]:
    """Fold CR / LF / CRLF into a single ``ENTER`` token.

    Returns ``(key_or_None, skip_next_lf)``; ``None`` means swallow the key.
    """
    if skip_next_lf and key == "ENTER_LF":
        return None, False
    if key == "ENTER_CR":
        return "ENTER", True
    if key == "ENTER_LF":
        return "ENTER", False
    return key, False


def run_main_loop(
    state: BrowseState,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run the interactive loop until a quit action occurs.

    Exceptions from callbacks (a fatal ``StatError``) propagate after the
    terminal has been restored by ``raw_mode``.
    """
    ops = callbacks
    idle = IdleCounter(timing.idle_timeout_ticks)
    skip_next_lf = False

    with terminal.raw_mode():
        while True:
            if state.dirty:
                ops.render()
                state.dirty = False

            try:
                raw_key = read_key(stdin_fd, timeout_ms=timing.input_timeout_ms)
            except KeyboardInterrupt:
                continue
            if raw_key == "":
                if idle.tick():
                    ops.on_idle()
                continue
            idle.reset()

            key, skip_next_lf = normalize_enter(raw_key, skip_next_lf)
            if key is None:
                continue

            binding = ops.lookup_binding(key)
            if binding is None:
                continue
            if ops.dispatch(binding):
                return


__all__ = [
    "IdleCounter",
    "RuntimeLoopCallbacks",
    "RuntimeLoopTiming",
    "normalize_enter",
    "run_main_loop",
]
