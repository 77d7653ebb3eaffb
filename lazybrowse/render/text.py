"""Display-width measurement and clipping for plain (unstyled) text.

Names are clipped before styling, so these helpers never see escape
sequences.
"""

from __future__ import annotations

import unicodedata


def char_display_width(ch: str) -> int:
    """Terminal columns taken by ``ch``: 0 for combining marks, 2 for wide."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in text)


def clip_display(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` terminal columns.

    Control characters are shown as ``?`` so a hostile filename cannot move
    the cursor.
    """
    if max_cols <= 0:
        return ""
    out: list[str] = []
    col = 0
    for ch in text:
        if not ch.isprintable():
            ch = "?"
        width = char_display_width(ch)
        if col + width > max_cols:
            break
        out.append(ch)
        col += width
    return "".join(out)


__all__ = [
    "char_display_width",
    "clip_display",
    "display_width",
]
