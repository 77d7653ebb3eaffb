"""Read-only JSON config helpers.

Supplies opener associations, extra key bindings, idle settings, initial
sort order, and theme. Nothing is ever written back. Malformed or missing
config falls back to defaults key by key.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..associations import DEFAULT_ASSOCIATIONS, Association, coerce_associations
from ..input.bindings import DEFAULT_BINDINGS, KeyBinding, coerce_bindings

logger = logging.getLogger(__name__)

APP_NAME = "lazybrowse"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_IDLE_COMMAND = "rain"


@dataclass(frozen=True)
class IdleSettings:
    """Run ``command`` after ``timeout`` idle seconds; ``0`` disables it."""

    timeout: int = 0
    command: str = DEFAULT_IDLE_COMMAND


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_nonnegative_int(value: object) -> int:
    """Booleans and non-integers are treated as invalid and coerced to ``0``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(0, value)


def load_associations(config: dict[str, object] | None = None) -> tuple[Association, ...]:
    """Configured opener rules, or the built-in table when absent/invalid."""
    data = load_config() if config is None else config
    rules = coerce_associations(data.get("associations"))
    if rules is None:
        return DEFAULT_ASSOCIATIONS
    return rules


def load_bindings(config: dict[str, object] | None = None) -> tuple[KeyBinding, ...]:
    """User bindings first, then defaults, so user keys shadow built-ins."""
    data = load_config() if config is None else config
    return coerce_bindings(data.get("bindings")) + DEFAULT_BINDINGS


def load_idle_settings(config: dict[str, object] | None = None) -> IdleSettings:
    data = load_config() if config is None else config
    timeout = _coerce_nonnegative_int(data.get("idle_timeout", 0))
    command = data.get("idle_command")
    if not isinstance(command, str) or not command.strip():
        command = DEFAULT_IDLE_COMMAND
    return IdleSettings(timeout=timeout, command=command.strip())


def load_mtime_order(config: dict[str, object] | None = None) -> bool:
    """Only explicit boolean values are accepted; anything else is ``False``."""
    data = load_config() if config is None else config
    value = data.get("mtime_order")
    return value if isinstance(value, bool) else False


def load_theme_name(config: dict[str, object] | None = None) -> str | None:
    """Load configured UI theme name, returning ``None`` when unset/invalid."""
    data = load_config() if config is None else config
    value = data.get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_IDLE_COMMAND",
    "IdleSettings",
    "load_associations",
    "load_bindings",
    "load_config",
    "load_idle_settings",
    "load_mtime_order",
    "load_theme_name",
]
