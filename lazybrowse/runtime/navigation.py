"""Navigation state machine for the directory browser.

``Navigator`` owns one ``BrowseState`` and interprets bound actions against
it. Directory changes go through a single commit step: the candidate
directory is listed and sorted first, and state is replaced only when that
succeeds. A failed transition leaves a status message and nothing else.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from ..associations import DEFAULT_ASSOCIATIONS, Association, open_with
from ..entries import (
    SHOW_ALL_FILTER,
    DirectoryListing,
    FilterPattern,
    compile_filter,
    list_entries,
    sort_entries,
)
from ..errors import DirectoryUnreadable, InvalidPattern, os_error_reason
from ..input.bindings import (
    ACTION_BACK,
    ACTION_CD,
    ACTION_CD_HOME,
    ACTION_END,
    ACTION_FILTER,
    ACTION_GO_IN,
    ACTION_HOME,
    ACTION_NEXT,
    ACTION_PAGE_DOWN,
    ACTION_PAGE_UP,
    ACTION_PREV,
    ACTION_QUIT,
    ACTION_REDRAW,
    ACTION_RUN,
    ACTION_RUN_ARG,
    ACTION_TOGGLE_DOT,
    ACTION_TOGGLE_MTIME,
    ACTION_TYPE,
    KeyBinding,
)
from ..launcher import resolve_program
from ..paths import ensure_readable_dir, has_parent, index_of, join_path, parent_of
from .prompt import PROMPT_APPEND, PROMPT_BACKSPACE, PromptKey
from .state import BrowseState

logger = logging.getLogger(__name__)

FILTER_PROMPT = "filter: "
TYPE_PROMPT = "type: "
CHDIR_PROMPT = "chdir: "


@dataclass(frozen=True)
class NavigatorOps:
    """Collaborators the navigator drives but does not own."""

    redraw: Callable[[], None]
    prompt_line: Callable[[str], str | None]
    prompt_incremental: Callable[[str, str], PromptKey]
    spawn: Callable[[str, str | None, str | None, str | None], str | None]
    viewport_rows: Callable[[], int]


def page_size(viewport_rows: int) -> int:
    """Half of the entry rows available below the header."""
    return max(1, (viewport_rows - 4) // 2)


class Navigator:
    """Interpret key-bound actions as ``BrowseState`` transitions."""

    def __init__(
        self,
        state: BrowseState,
        default_filter: FilterPattern,
        ops: NavigatorOps,
        associations: Sequence[Association] = DEFAULT_ASSOCIATIONS,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.state = state
        self.default_filter = default_filter
        self.ops = ops
        self.associations = tuple(associations)
        self.environ = os.environ if environ is None else environ
        self._handlers: dict[str, Callable[[KeyBinding], bool]] = {
            ACTION_QUIT: lambda _binding: True,
            ACTION_BACK: self._no_quit(self.ascend),
            ACTION_GO_IN: self._no_quit(self.open_selected),
            ACTION_FILTER: self._no_quit(self.set_filter),
            ACTION_TYPE: self._no_quit(self.type_filter),
            ACTION_NEXT: self._no_quit(lambda: self.move_cursor(1)),
            ACTION_PREV: self._no_quit(lambda: self.move_cursor(-1)),
            ACTION_PAGE_DOWN: self._no_quit(self.page_down),
            ACTION_PAGE_UP: self._no_quit(self.page_up),
            ACTION_HOME: self._no_quit(self.move_home),
            ACTION_END: self._no_quit(self.move_end),
            ACTION_CD: self._no_quit(self.change_directory),
            ACTION_CD_HOME: self._no_quit(self.jump_home),
            ACTION_TOGGLE_MTIME: self._no_quit(self.toggle_sort_order),
            ACTION_REDRAW: self._no_quit(self.refresh),
            ACTION_RUN: lambda binding: self._run(binding, with_selection=False),
            ACTION_RUN_ARG: lambda binding: self._run(binding, with_selection=True),
            ACTION_TOGGLE_DOT: self._no_quit(self.toggle_dotfiles),
        }

    @staticmethod
    def _no_quit(handler: Callable[[], object]) -> Callable[[KeyBinding], bool]:
        def run(_binding: KeyBinding) -> bool:
            handler()
            return False

        return run

    def dispatch(self, binding: KeyBinding) -> bool:
        """Run the action bound by ``binding``; return ``True`` to quit."""
        handler = self._handlers.get(binding.action)
        if handler is None:
            return False
        self.clear_status()
        logger.debug("action %s at %s", binding.action, self.state.path)
        return handler(binding)

    # Status line

    def clear_status(self) -> None:
        if self.state.status_message:
            self.state.status_message = ""
            self.state.dirty = True

    def warn(self, message: str) -> None:
        logger.debug("warning: %s", message)
        self.state.status_message = message
        self.state.dirty = True

    # Population

    def _list(self, path: str, pattern: FilterPattern, mtime_order: bool) -> DirectoryListing:
        ensure_readable_dir(path)
        listing = list_entries(path, pattern.matches)
        return DirectoryListing(
            entries=sort_entries(listing.entries, mtime_order),
            total_size=listing.total_size,
        )

    def _commit(
        self,
        path: str,
        pattern: FilterPattern,
        history: str | None,
        mtime_order: bool | None = None,
    ) -> bool:
        """List ``path`` and, on success, make it the current state.

        ``history`` is written to the history slot, used to place the cursor,
        then cleared. ``DirectoryUnreadable`` becomes a warning and leaves the
        state untouched; ``StatError`` propagates.
        """
        state = self.state
        order = state.mtime_order if mtime_order is None else mtime_order
        try:
            listing = self._list(path, pattern, order)
        except DirectoryUnreadable as exc:
            self.warn(exc.reason)
            return False

        state.previous_path = history
        state.path = path
        state.filter = pattern
        state.mtime_order = order
        state.entries = listing.entries
        state.total_size = listing.total_size
        state.cursor = index_of(state.entries, state.path, state.previous_path)
        state.previous_path = None
        state.dirty = True
        logger.debug(
            "populated %s filter=%r entries=%d cursor=%d",
            path,
            pattern.source,
            len(state.entries),
            state.cursor,
        )
        return True

    def populate(self) -> bool:
        """(Re)list the current directory with the current filter and order."""
        return self._commit(self.state.path, self.state.filter, self.state.previous_path)

    def selected_path(self) -> str | None:
        """Full path of the entry under the cursor, if any."""
        entry = self.state.selected_entry()
        if entry is None:
            return None
        return join_path(self.state.path, entry.name)

    # Directory transitions

    def ascend(self) -> None:
        path = self.state.path
        if not has_parent(path):
            return
        parent = parent_of(path)
        try:
            ensure_readable_dir(parent)
        except DirectoryUnreadable as exc:
            self.warn(exc.reason)
            return
        self._commit(parent, self.default_filter, history=path)

    def open_selected(self) -> None:
        target = self.selected_path()
        if target is None:
            return

        try:
            fd = os.open(target, os.O_RDONLY | os.O_NONBLOCK)
        except OSError as exc:
            self.warn(os_error_reason(exc))
            return
        try:
            st = os.fstat(fd)
        except OSError as exc:
            self.warn(os_error_reason(exc))
            return
        finally:
            os.close(fd)

        if stat.S_ISDIR(st.st_mode):
            try:
                ensure_readable_dir(target)
            except DirectoryUnreadable as exc:
                self.warn(exc.reason)
                return
            self._commit(target, self.default_filter, history=None)
            return

        if stat.S_ISREG(st.st_mode):
            program = open_with(os.path.basename(target), self.associations)
            if program is None:
                self.warn("No association")
                return
            error = self.ops.spawn(program, target, None, None)
            if error is not None:
                self.warn(error)
            self.state.dirty = True
            return

        self.warn("Unsupported file")

    def change_directory(self) -> None:
        answer = self.ops.prompt_line(CHDIR_PROMPT)
        if not answer:
            self.state.dirty = True
            return
        target = join_path(self.state.path, answer)
        try:
            ensure_readable_dir(target)
        except DirectoryUnreadable as exc:
            self.warn(exc.reason)
            return
        self._commit(target, self.default_filter, history=None)

    def jump_home(self) -> None:
        home = self.environ.get("HOME")
        if not home:
            self.warn("HOME is not set")
            return
        target = join_path(self.state.path, home)
        try:
            ensure_readable_dir(target)
        except DirectoryUnreadable as exc:
            self.warn(exc.reason)
            return
        self._commit(target, self.default_filter, history=self.state.path)

    # Filters

    def set_filter(self) -> None:
        answer = self.ops.prompt_line(FILTER_PROMPT)
        if not answer:
            pattern = self.default_filter
        else:
            try:
                pattern = compile_filter(answer)
            except InvalidPattern as exc:
                self.warn(exc.reason)
                return
        self._commit(self.state.path, pattern, history=self.selected_path())

    def type_filter(self) -> None:
        """Filter-as-you-type mode.

        Every keystroke recompiles the partial pattern. Valid partials (or the
        default filter once the partial is empty) repopulate immediately; an
        invalid partial keeps the mode open with the previous filter active.
        """
        partial = ""
        while True:
            self.ops.redraw()
            key = self.ops.prompt_incremental(TYPE_PROMPT, partial)
            if key.kind == PROMPT_APPEND:
                partial += key.char
            elif key.kind == PROMPT_BACKSPACE:
                partial = partial[:-1]
            finished = key.kind not in {PROMPT_APPEND, PROMPT_BACKSPACE}

            if partial:
                try:
                    pattern = compile_filter(partial)
                except InvalidPattern as exc:
                    self.warn(exc.reason)
                    if finished:
                        return
                    continue
            else:
                pattern = self.default_filter

            self.clear_status()
            self._commit(self.state.path, pattern, history=self.selected_path())
            if finished:
                return

    def toggle_dotfiles(self) -> None:
        if self.state.filter.source != self.default_filter.source:
            pattern = self.default_filter
        else:
            pattern = compile_filter(SHOW_ALL_FILTER)
        self._commit(self.state.path, pattern, history=None)

    def toggle_sort_order(self) -> None:
        self._commit(
            self.state.path,
            self.state.filter,
            history=self.selected_path(),
            mtime_order=not self.state.mtime_order,
        )

    def refresh(self) -> None:
        self._commit(self.state.path, self.state.filter, history=self.selected_path())

    # Cursor movement

    def _set_cursor(self, cursor: int) -> None:
        last = max(0, len(self.state.entries) - 1)
        cursor = max(0, min(cursor, last))
        if cursor != self.state.cursor:
            self.state.cursor = cursor
            self.state.dirty = True

    def move_cursor(self, delta: int) -> None:
        self._set_cursor(self.state.cursor + delta)

    def page_down(self) -> None:
        self.move_cursor(page_size(self.ops.viewport_rows()))

    def page_up(self) -> None:
        self.move_cursor(-page_size(self.ops.viewport_rows()))

    def move_home(self) -> None:
        self._set_cursor(0)

    def move_end(self) -> None:
        self._set_cursor(len(self.state.entries) - 1)

    # External programs

    def _run(self, binding: KeyBinding, with_selection: bool) -> bool:
        arg: str | None = None
        if with_selection:
            entry = self.state.selected_entry()
            if entry is None:
                return False
            arg = entry.name
        program = resolve_program(binding.run, binding.env, self.environ)
        if program is None:
            self.warn(f"Nothing to run: ${binding.env} is not set")
            return False
        error = self.ops.spawn(program, arg, self.state.path, binding.args)
        if error is not None:
            self.warn(error)
        self.state.dirty = True
        return False

    def run_idle_command(self, command: str) -> None:
        """Fire the idle command; browse state is untouched apart from redraw."""
        error = self.ops.spawn(command, None, None, None)
        if error is not None:
            self.warn(error)
        self.state.dirty = True


__all__ = [
    "CHDIR_PROMPT",
    "FILTER_PROMPT",
    "Navigator",
    "NavigatorOps",
    "TYPE_PROMPT",
    "page_size",
]
