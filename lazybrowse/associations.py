"""Filename-to-program association rules used to open regular files."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Association:
    """Open files whose name matches ``pattern`` with ``program``."""

    pattern: str
    program: str


DEFAULT_ASSOCIATIONS: tuple[Association, ...] = (
    Association(r"\.(avi|mp4|mkv|mp3|ogg|flac|mov)$", "mpv"),
    Association(r"\.(png|jpg|gif)$", "sxiv"),
    Association(r"\.(html|svg)$", "firefox"),
    Association(r"\.pdf$", "mupdf"),
    Association(r"\.sh$", "sh"),
    Association(r".", "less"),
)


def open_with(name: str, associations: Sequence[Association] = DEFAULT_ASSOCIATIONS) -> str | None:
    """Return the program for the first rule matching ``name``.

    Matching is case-insensitive. Rules whose pattern fails to compile are
    skipped rather than reported.
    """
    for association in associations:
        try:
            regex = re.compile(association.pattern, re.IGNORECASE)
        except re.error:
            logger.debug("skipping association with bad pattern %r", association.pattern)
            continue
        if regex.search(name) is not None:
            return association.program
    return None


def coerce_associations(raw: object) -> tuple[Association, ...] | None:
    """Build associations from JSON ``[[pattern, program], ...]`` data.

    Returns ``None`` when ``raw`` is not a list; malformed pairs are dropped.
    """
    if not isinstance(raw, list):
        return None
    rules: list[Association] = []
    for item in raw:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            continue
        pattern, program = item
        if not isinstance(pattern, str) or not isinstance(program, str):
            continue
        if not pattern or not program.strip():
            continue
        rules.append(Association(pattern=pattern, program=program.strip()))
    return tuple(rules)


def describe(associations: Iterable[Association]) -> list[str]:
    return [f"{rule.pattern} -> {rule.program}" for rule in associations]


__all__ = [
    "Association",
    "DEFAULT_ASSOCIATIONS",
    "coerce_associations",
    "describe",
    "open_with",
]
