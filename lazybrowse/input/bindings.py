"""Key-binding records and the first-match-wins lookup table."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

ACTION_QUIT = "quit"
ACTION_BACK = "back"
ACTION_GO_IN = "go_in"
ACTION_FILTER = "filter"
ACTION_TYPE = "type"
ACTION_NEXT = "next"
ACTION_PREV = "prev"
ACTION_PAGE_DOWN = "page_down"
ACTION_PAGE_UP = "page_up"
ACTION_HOME = "home"
ACTION_END = "end"
ACTION_CD = "cd"
ACTION_CD_HOME = "cd_home"
ACTION_TOGGLE_MTIME = "toggle_mtime"
ACTION_REDRAW = "redraw"
ACTION_RUN = "run"
ACTION_RUN_ARG = "run_arg"
ACTION_TOGGLE_DOT = "toggle_dot"

ACTIONS = frozenset(
    {
        ACTION_QUIT,
        ACTION_BACK,
        ACTION_GO_IN,
        ACTION_FILTER,
        ACTION_TYPE,
        ACTION_NEXT,
        ACTION_PREV,
        ACTION_PAGE_DOWN,
        ACTION_PAGE_UP,
        ACTION_HOME,
        ACTION_END,
        ACTION_CD,
        ACTION_CD_HOME,
        ACTION_TOGGLE_MTIME,
        ACTION_REDRAW,
        ACTION_RUN,
        ACTION_RUN_ARG,
        ACTION_TOGGLE_DOT,
    }
)

RUN_ACTIONS = frozenset({ACTION_RUN, ACTION_RUN_ARG})


@dataclass(frozen=True)
class KeyBinding:
    """Map key tokens to an action, with launch parameters for run actions.

    ``run`` is the default program, ``env`` names an environment variable
    that overrides it when set, and ``args`` holds extra arguments.
    """

    keys: tuple[str, ...]
    action: str
    run: str | None = None
    env: str | None = None
    args: str | None = None


DEFAULT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("q",), ACTION_QUIT),
    KeyBinding(("BACKSPACE", "LEFT", "h"), ACTION_BACK),
    KeyBinding(("ENTER", "RIGHT", "l"), ACTION_GO_IN),
    KeyBinding(("/", "&"), ACTION_FILTER),
    KeyBinding(("?",), ACTION_TYPE),
    KeyBinding(("j", "DOWN", "CTRL_N"), ACTION_NEXT),
    KeyBinding(("k", "UP", "CTRL_P"), ACTION_PREV),
    KeyBinding(("PGDN", "CTRL_D"), ACTION_PAGE_DOWN),
    KeyBinding(("PGUP", "CTRL_U"), ACTION_PAGE_UP),
    KeyBinding(("HOME", "ALT_<", "^"), ACTION_HOME),
    KeyBinding(("END", "ALT_>", "$"), ACTION_END),
    KeyBinding(("c",), ACTION_CD),
    KeyBinding(("~",), ACTION_CD_HOME),
    KeyBinding(("t",), ACTION_TOGGLE_MTIME),
    KeyBinding(("CTRL_L",), ACTION_REDRAW),
    KeyBinding(("!",), ACTION_RUN, run="sh", env="SHELL"),
    KeyBinding(("z",), ACTION_RUN, run="top"),
    KeyBinding(("e",), ACTION_RUN_ARG, run="vi", env="EDITOR"),
    KeyBinding(("p",), ACTION_RUN_ARG, run="less", env="PAGER"),
    KeyBinding((".",), ACTION_TOGGLE_DOT),
)


class BindingTable:
    """Key lookup over an ordered binding list; earlier bindings win."""

    def __init__(self, bindings: Iterable[KeyBinding] = DEFAULT_BINDINGS) -> None:
        self.bindings = tuple(bindings)
        self._by_key: dict[str, KeyBinding] = {}
        for binding in self.bindings:
            for key in binding.keys:
                self._by_key.setdefault(key, binding)

    def lookup(self, key: str) -> KeyBinding | None:
        """Return the binding for ``key`` or ``None`` when unbound."""
        return self._by_key.get(key)


def _optional_str(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def coerce_bindings(raw: object) -> tuple[KeyBinding, ...]:
    """Build bindings from JSON records, dropping anything malformed.

    Each record needs a non-empty ``keys`` list of strings and a known
    ``action``. Run actions also need a ``run`` program or an ``env`` name.
    """
    if not isinstance(raw, list):
        return ()
    bindings: list[KeyBinding] = []
    for record in raw:
        if not isinstance(record, dict):
            continue
        keys = record.get("keys")
        if isinstance(keys, str):
            keys = [keys]
        if not isinstance(keys, list) or not keys:
            continue
        if not all(isinstance(key, str) and key for key in keys):
            continue
        action = record.get("action")
        if action not in ACTIONS:
            continue
        run = _optional_str(record.get("run"))
        env = _optional_str(record.get("env"))
        args = _optional_str(record.get("args"))
        if action in RUN_ACTIONS and run is None and env is None:
            continue
        bindings.append(KeyBinding(tuple(keys), action, run=run, env=env, args=args))
    return tuple(bindings)


__all__ = [
    "ACTIONS",
    "ACTION_BACK",
    "ACTION_CD",
    "ACTION_CD_HOME",
    "ACTION_END",
    "ACTION_FILTER",
    "ACTION_GO_IN",
    "ACTION_HOME",
    "ACTION_NEXT",
    "ACTION_PAGE_DOWN",
    "ACTION_PAGE_UP",
    "ACTION_PREV",
    "ACTION_QUIT",
    "ACTION_REDRAW",
    "ACTION_RUN",
    "ACTION_RUN_ARG",
    "ACTION_TOGGLE_DOT",
    "ACTION_TOGGLE_MTIME",
    "ACTION_TYPE",
    "BindingTable",
    "DEFAULT_BINDINGS",
    "KeyBinding",
    "RUN_ACTIONS",
    "coerce_bindings",
]
