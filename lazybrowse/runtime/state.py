from __future__ import annotations

from dataclasses import dataclass

from ..entries import Entry, FilterPattern


@dataclass
class BrowseState:
    """Mutable browser state, written only by ``Navigator``.

    ``previous_path`` is the one-slot history: the full path a transition
    wants the cursor restored to. The next successful repopulation consumes
    and clears it.
    """

    path: str
    filter: FilterPattern
    entries: tuple[Entry, ...] = ()
    cursor: int = 0
    total_size: int = 0
    previous_path: str | None = None
    mtime_order: bool = False
    status_message: str = ""
    dirty: bool = True

    def selected_entry(self) -> Entry | None:
        if not self.entries:
            return None
        return self.entries[self.cursor]
