"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the browser chrome and entry rows, keyed by
entry kind.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    cwd: str
    total_size: str
    cursor: str
    entry_directory: str
    entry_symlink: str
    entry_executable: str
    entry_special: str
    entry_default: str
    entry_size: str
    status: str
    prompt: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    cwd="\033[1;38;5;81m",
    total_size="\033[38;5;109m",
    cursor="\033[1;38;5;229m",
    entry_directory="\033[1;34m",
    entry_symlink="\033[38;5;44m",
    entry_executable="\033[38;5;42m",
    entry_special="\033[38;5;214m",
    entry_default="\033[38;5;252m",
    entry_size="\033[38;5;109m",
    status="\033[38;5;214m",
    prompt="\033[1;38;5;81m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    cwd="\033[1;38;5;45m",
    total_size="\033[38;5;73m",
    cursor="\033[1;38;5;153m",
    entry_directory="\033[1;38;5;45m",
    entry_symlink="\033[38;5;117m",
    entry_executable="\033[38;5;84m",
    entry_special="\033[38;5;215m",
    entry_default="\033[38;5;252m",
    entry_size="\033[38;5;73m",
    status="\033[38;5;215m",
    prompt="\033[1;38;5;45m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    cwd="",
    total_size="",
    cursor="",
    entry_directory="",
    entry_symlink="",
    entry_executable="",
    entry_special="",
    entry_default="",
    entry_size="",
    status="",
    prompt="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
