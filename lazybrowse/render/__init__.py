"""Rendering engine for the single-column browser view.

Builds fully composed ANSI frames from browse state. Frame builders are
pure; only ``render_browser`` writes to the terminal.

Layout::

    cwd: /mnt/path                         12.000K
    <blank>
       file0
     > file1/
       ...
    <blank>
    status or prompt
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass

from ..entries import (
    KIND_DIRECTORY,
    KIND_EXECUTABLE,
    KIND_FIFO,
    KIND_SOCKET,
    KIND_SYMLINK,
    Entry,
    kind_indicator,
)
from ..ui_theme import DEFAULT_THEME, UITheme
from .text import clip_display, display_width

CWD_LABEL = "cwd: "
CURSOR_MARK = " > "
EMPTY_MARK = "   "
SIZE_COLUMN_FROM_RIGHT = 16
HEADER_ROWS = 2
FOOTER_ROWS = 2
SIZE_UNITS = "BKMGT"


def format_size(size: int) -> str:
    """Human-readable size: ``%12.3f`` plus a ``B/K/M/G/T`` unit."""
    value = float(size)
    unit = 0
    while value > 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:12.3f}{SIZE_UNITS[unit]}"


def entry_rows(height: int) -> int:
    """Rows available for entries in a terminal ``height`` rows tall."""
    return max(0, height - HEADER_ROWS - FOOTER_ROWS)


def visible_window(count: int, cursor: int, rows: int) -> range:
    """Indices of entries to draw, keeping the cursor centered when possible."""
    lines = min(rows, count)
    if lines <= 0:
        return range(0)
    half = lines // 2
    if cursor < half:
        return range(0, lines)
    if cursor >= count - half:
        return range(count - lines, count)
    start = cursor - half
    return range(start, start + lines)


def _entry_color(entry: Entry, theme: UITheme) -> str:
    if entry.kind == KIND_DIRECTORY:
        return theme.entry_directory
    if entry.kind == KIND_SYMLINK:
        return theme.entry_symlink
    if entry.kind == KIND_EXECUTABLE:
        return theme.entry_executable
    if entry.kind in {KIND_SOCKET, KIND_FIFO}:
        return theme.entry_special
    return theme.entry_default


def format_entry_row(entry: Entry, active: bool, width: int, theme: UITheme = DEFAULT_THEME) -> str:
    """One entry row: cursor mark, clipped name, kind indicator, optional size."""
    mark = CURSOR_MARK if active else EMPTY_MARK
    indicator = kind_indicator(entry.kind)
    show_size = entry.is_sized
    size_text = format_size(entry.size) if show_size else ""

    max_name = width - len(mark) - (SIZE_COLUMN_FROM_RIGHT + 1) - len(indicator)
    name = clip_display(entry.name, max_name)
    label = name + indicator

    mark_styled = f"{theme.cursor}{mark}{theme.reset}" if active else mark
    row = f"{mark_styled}{_entry_color(entry, theme)}{label}{theme.reset}"
    if show_size:
        used = len(mark) + display_width(label)
        gap = max(1, width - SIZE_COLUMN_FROM_RIGHT - used)
        row += " " * gap + f"{theme.entry_size}{size_text}{theme.reset}"
    return row


def format_header(path: str, total_size: int, width: int, theme: UITheme = DEFAULT_THEME) -> str:
    max_path = width - len(CWD_LABEL) - (SIZE_COLUMN_FROM_RIGHT + 1)
    shown = clip_display(path, max_path)
    used = len(CWD_LABEL) + display_width(shown)
    gap = max(1, width - SIZE_COLUMN_FROM_RIGHT - used)
    return (
        f"{theme.cwd}{CWD_LABEL}{shown}{theme.reset}"
        + " " * gap
        + f"{theme.total_size}{format_size(total_size)}{theme.reset}"
    )


@dataclass(frozen=True)
class FrameContext:
    """Everything a frame needs, decoupled from ``BrowseState``."""

    path: str
    entries: Sequence[Entry]
    cursor: int
    total_size: int
    status_message: str
    width: int
    height: int
    theme: UITheme = DEFAULT_THEME


def build_frame_lines(context: FrameContext) -> list[str]:
    """Return the screen as a list of styled rows, top to bottom."""
    width = max(1, context.width)
    theme = context.theme
    lines = [format_header(context.path, context.total_size, width, theme), ""]
    window = visible_window(len(context.entries), context.cursor, entry_rows(context.height))
    for idx in window:
        lines.append(format_entry_row(context.entries[idx], idx == context.cursor, width, theme))
    while len(lines) < max(1, context.height - 1):
        lines.append("")
    if context.status_message:
        message = clip_display(context.status_message, width - 1)
        lines.append(f"{theme.status}{message}{theme.reset}")
    else:
        lines.append("")
    return lines[: max(1, context.height)]


def build_frame(context: FrameContext) -> str:
    out: list[str] = ["\033[H\033[J"]
    for row, line in enumerate(build_frame_lines(context), start=1):
        out.append(f"\033[{row};1H{line}")
    return "".join(out)


def render_browser(context: FrameContext, stdout_fd: int) -> None:
    os.write(stdout_fd, build_frame(context).encode("utf-8", errors="replace"))


def prompt_row_ansi(label: str, text: str, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> str:
    """Escape sequence that redraws the last row as ``label`` + ``text``.

    When the input is wider than the row, its tail stays visible.
    """
    room = max(1, width - len(label) - 1)
    shown = text
    while display_width(shown) > room:
        shown = shown[1:]
    return f"\033[{max(1, height)};1H\033[2K{theme.prompt}{label}{theme.reset}{shown}\033[?25h"


__all__ = [
    "CURSOR_MARK",
    "CWD_LABEL",
    "EMPTY_MARK",
    "FrameContext",
    "build_frame",
    "build_frame_lines",
    "entry_rows",
    "format_entry_row",
    "format_header",
    "format_size",
    "prompt_row_ansi",
    "render_browser",
    "visible_window",
]
