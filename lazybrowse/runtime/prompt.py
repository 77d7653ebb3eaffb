"""Bottom-row line prompts read straight from the raw terminal.

``prompt_line`` collects a full line; ``prompt_incremental`` reads a single
keystroke for filter-as-you-type mode.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..input import read_key
from ..render import prompt_row_ansi
from ..ui_theme import DEFAULT_THEME, UITheme

PROMPT_APPEND = "append"
PROMPT_BACKSPACE = "backspace"
PROMPT_SUBMIT = "submit"

_SUBMIT_KEYS = frozenset({"ENTER_CR", "ENTER_LF", "ENTER", "ESC"})


@dataclass(frozen=True)
class PromptKey:
    """One keystroke as seen by filter-as-you-type mode."""

    kind: str
    char: str = ""


def _is_text_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


class TerminalPrompt:
    """Draw prompts on the last terminal row and read raw keys for them."""

    def __init__(
        self,
        stdin_fd: int,
        stdout_fd: int,
        read: Callable[..., str] = read_key,
        get_terminal_size: Callable[..., os.terminal_size] = shutil.get_terminal_size,
        theme: UITheme = DEFAULT_THEME,
    ) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._read = read
        self._get_terminal_size = get_terminal_size
        self.theme = theme

    def _draw(self, label: str, text: str) -> None:
        term = self._get_terminal_size((80, 24))
        os.write(
            self.stdout_fd,
            prompt_row_ansi(label, text, term.columns, term.lines, self.theme).encode("utf-8", errors="replace"),
        )

    def _hide_cursor(self) -> None:
        os.write(self.stdout_fd, b"\x1b[?25l")

    def prompt_line(self, label: str) -> str | None:
        """Read a line; ``None`` when cancelled with Esc or submitted empty."""
        text = ""
        try:
            while True:
                self._draw(label, text)
                key = self._read(self.stdin_fd)
                if key in {"ENTER_CR", "ENTER_LF"}:
                    return text or None
                if key == "ESC":
                    return None
                if key == "BACKSPACE":
                    text = text[:-1]
                elif key == "CTRL_U":
                    text = ""
                elif _is_text_key(key):
                    text += key
        finally:
            self._hide_cursor()

    def prompt_incremental(self, label: str, partial: str) -> PromptKey:
        """Read one meaningful keystroke for the in-progress ``partial``."""
        try:
            while True:
                self._draw(label, partial)
                key = self._read(self.stdin_fd)
                if key in _SUBMIT_KEYS:
                    return PromptKey(PROMPT_SUBMIT)
                if key == "BACKSPACE":
                    return PromptKey(PROMPT_BACKSPACE)
                if _is_text_key(key):
                    return PromptKey(PROMPT_APPEND, key)
        finally:
            self._hide_cursor()


__all__ = [
    "PROMPT_APPEND",
    "PROMPT_BACKSPACE",
    "PROMPT_SUBMIT",
    "PromptKey",
    "TerminalPrompt",
]
