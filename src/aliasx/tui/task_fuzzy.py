"""Task fuzzy finder: scope tabs, global indices and an optional command pane."""

from __future__ import annotations

from rich.layout import Layout
from rich.panel import Panel
from rich.text import Text

from aliasx.errors import SelectionAborted
from aliasx.registry import TaskRegistry
from aliasx.tasks.model import TaskEntry
from aliasx.tui.picker import PickerAction, PickerState, filter_tasks, visible_window
from aliasx.tui.session import TerminalSession
from aliasx.tui.widgets import (
    ACCENT,
    CHROME_HEIGHT,
    DIM,
    footer,
    highlight_match,
    scope_tabs,
    search_box,
    selection_rows,
)


def input_hint(registry: TaskRegistry, index: int) -> str:
    """``  [env, region]`` naming the inputs task *index* needs, or ``""``."""
    names = [inp.display_name for inp in registry.required_inputs_for_task(index)]
    if not names:
        return ""
    return f"  [{', '.join(names)}]"


def _task_row(index: int, entry: TaskEntry, query: str, width: int) -> Text:
    row = Text(f"{index:0{width}d} ", style=DIM)
    row.append_text(highlight_match(entry.label, query))
    return row


def _details_pane(
    registry: TaskRegistry,
    visible: list[tuple[int, TaskEntry]],
    selected_index: int | None,
) -> Panel:
    lines = Text()
    for i, (idx, entry) in enumerate(visible):
        if i:
            lines.append("\n")
        lines.append(entry.command, style=ACCENT if idx == selected_index else "cyan")
        lines.append(input_hint(registry, idx), style=DIM)
    return Panel(lines, title="commands", title_align="left")


def render_task_frame(
    state: PickerState,
    filtered: list[tuple[int, TaskEntry]],
    registry: TaskRegistry,
    height: int,
) -> Layout:
    width = registry.index_width()
    start, end = visible_window(len(filtered), state.selected, height - CHROME_HEIGHT)
    visible = filtered[start:end]
    rows = [_task_row(idx, entry, state.query, width) for idx, entry in visible]
    selected = state.selected if filtered else None

    task_list = Panel(selection_rows(rows, selected, start), title=scope_tabs(state.scope), title_align="left")
    body = Layout(name="body")
    if state.show_details:
        selected_index = filtered[state.selected][0] if filtered else None
        body.split_row(
            Layout(task_list, name="list", minimum_size=40),
            Layout(_details_pane(registry, visible, selected_index), name="details", ratio=2),
        )
    else:
        body.update(task_list)

    hints = [("tab/⇧tab", "filter"), ("?", "hide details" if state.show_details else "show details")]
    layout = Layout()
    layout.split_column(
        Layout(search_box(state.query, "Search"), name="search", size=3),
        body,
        Layout(footer(hints), name="footer", size=1),
    )
    return layout


def task_fuzzy_finder(
    registry: TaskRegistry,
    session: TerminalSession,
    query: str = "",
    verbose: bool = False,
) -> int:
    """Pick a task; returns its global index.

    Details start visible in verbose mode. Raises :class:`SelectionAborted`
    on Escape.
    """
    tasks = registry.indexed_tasks()
    state = PickerState(query=query, show_details=verbose)

    while True:
        filtered = filter_tasks(tasks, state.query, state.scope)
        state.clamp(len(filtered))
        session.draw(render_task_frame(state, filtered, registry, session.height))

        action = state.apply(session.read_key(), len(filtered), task_mode=True)
        if action is PickerAction.ACCEPT:
            return filtered[state.selected][0]
        if action is PickerAction.ABORT:
            raise SelectionAborted()
