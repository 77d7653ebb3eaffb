"""Browser bootstrap: build state, wire collaborators, run the event loop."""

from __future__ import annotations

import logging
import shutil
import sys
from functools import partial

from ..associations import describe
from ..entries import compile_filter
from ..input import BindingTable
from ..launcher import spawn
from ..render import FrameContext, render_browser
from ..ui_theme import resolve_theme
from .config import (
    load_associations,
    load_bindings,
    load_config,
    load_idle_settings,
    load_mtime_order,
    load_theme_name,
)
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .navigation import Navigator, NavigatorOps
from .prompt import TerminalPrompt
from .state import BrowseState
from .terminal import TerminalController

logger = logging.getLogger(__name__)

INPUT_TIMEOUT_MS = 1000


def run_browser(
    path: str,
    default_filter: str,
    theme_name: str | None = None,
    no_color: bool = False,
) -> None:
    """Browse ``path`` until the user quits.

    ``default_filter`` must compile. ``StatError`` escapes after the terminal
    has been restored; the CLI turns it into an exit status.
    """
    config = load_config()
    theme = resolve_theme(theme_name or load_theme_name(config), no_color=no_color)
    associations = load_associations(config)
    bindings = BindingTable(load_bindings(config))
    idle_settings = load_idle_settings(config)
    logger.debug("associations: %s", describe(associations))

    initial_filter = compile_filter(default_filter)
    state = BrowseState(path=path, filter=initial_filter, mtime_order=load_mtime_order(config))

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    prompt = TerminalPrompt(stdin_fd, stdout_fd, theme=theme)

    def viewport_rows() -> int:
        return shutil.get_terminal_size((80, 24)).lines

    def render() -> None:
        term = shutil.get_terminal_size((80, 24))
        render_browser(
            FrameContext(
                path=state.path,
                entries=state.entries,
                cursor=state.cursor,
                total_size=state.total_size,
                status_message=state.status_message,
                width=term.columns,
                height=term.lines,
                theme=theme,
            ),
            stdout_fd,
        )

    navigator = Navigator(
        state,
        initial_filter,
        NavigatorOps(
            redraw=render,
            prompt_line=prompt.prompt_line,
            prompt_incremental=prompt.prompt_incremental,
            spawn=partial(spawn, suspend=terminal.suspended),
            viewport_rows=viewport_rows,
        ),
        associations=associations,
    )
    navigator.populate()

    run_main_loop(
        state,
        terminal,
        stdin_fd,
        RuntimeLoopTiming(
            input_timeout_ms=INPUT_TIMEOUT_MS,
            idle_timeout_ticks=idle_settings.timeout,
        ),
        RuntimeLoopCallbacks(
            render=render,
            lookup_binding=bindings.lookup,
            dispatch=navigator.dispatch,
            on_idle=partial(navigator.run_idle_command, idle_settings.command),
        ),
    )


__all__ = ["run_browser"]
