"""Pure state transitions for the incremental-search pickers.

Nothing here touches the terminal: filtering, clamping and key handling are
plain functions over :class:`PickerState` so they can be tested directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from aliasx.config import Scope
from aliasx.tasks.model import TaskEntry
from aliasx.tui.keys import Key, KeyKind


class PickerAction(str, Enum):
    CONTINUE = "continue"
    ACCEPT = "accept"
    ABORT = "abort"


@dataclass
class PickerState:
    query: str = ""
    selected: int = 0
    scope: Scope = Scope.ALL
    show_details: bool = False

    def clamp(self, count: int) -> int | None:
        """Keep ``selected`` within ``count`` rows; ``None`` when nothing matches."""
        if count <= 0:
            self.selected = 0
            return None
        self.selected = max(0, min(self.selected, count - 1))
        return self.selected

    def apply(self, key: Key, count: int, *, task_mode: bool = False) -> PickerAction:
        """Apply one key event given ``count`` currently filtered rows."""
        if task_mode:
            match key.kind:
                case KeyKind.TAB:
                    self.scope = self.scope.next()
                    self.selected = 0
                    return PickerAction.CONTINUE
                case KeyKind.BACKTAB:
                    self.scope = self.scope.prev()
                    self.selected = 0
                    return PickerAction.CONTINUE
                case KeyKind.CHAR if key.char == "?":
                    self.show_details = not self.show_details
                    return PickerAction.CONTINUE

        match key.kind:
            case KeyKind.CHAR:
                self.query += key.char
                self.selected = 0
            case KeyKind.BACKSPACE:
                self.query = self.query[:-1]
                self.selected = 0
            case KeyKind.UP:
                if self.selected > 0:
                    self.selected -= 1
            case KeyKind.DOWN:
                if self.selected + 1 < count:
                    self.selected += 1
            case KeyKind.ENTER:
                if count > 0:
                    return PickerAction.ACCEPT
            case KeyKind.ESCAPE:
                return PickerAction.ABORT
        return PickerAction.CONTINUE


def matches(label: str, query: str) -> bool:
    return query.lower() in label.lower()


def filter_labels(candidates: Sequence[str], query: str) -> list[tuple[int, str]]:
    """``(original_position, label)`` for every candidate containing *query*."""
    return [(pos, label) for pos, label in enumerate(candidates) if matches(label, query)]


def in_scope(source_scope: Scope, scope: Scope) -> bool:
    """Whether a source of *source_scope* shows under the *scope* tab."""
    match scope:
        case Scope.LOCAL:
            return source_scope.include_local() and not source_scope.include_global()
        case Scope.GLOBAL:
            return source_scope.include_global() and not source_scope.include_local()
        case _:
            return True


def filter_tasks(
    tasks: Sequence[tuple[int, Scope, TaskEntry]],
    query: str,
    scope: Scope,
) -> list[tuple[int, TaskEntry]]:
    """``(global_index, entry)`` for tasks in *scope* whose label contains *query*."""
    return [
        (idx, entry)
        for idx, source_scope, entry in tasks
        if in_scope(source_scope, scope) and matches(entry.label, query)
    ]


def visible_window(count: int, selected: int, height: int) -> tuple[int, int]:
    """Slice ``[start, end)`` of at most *height* rows keeping *selected* visible."""
    if height <= 0 or count <= 0:
        return 0, 0
    if count <= height:
        return 0, count
    start = min(max(0, selected - height + 1), count - height)
    return start, start + height
