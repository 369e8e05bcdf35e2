"""Generic string fuzzy finder."""

from __future__ import annotations

from typing import Sequence

from rich.layout import Layout
from rich.panel import Panel

from aliasx.errors import SelectionAborted
from aliasx.tui.picker import PickerAction, PickerState, filter_labels, visible_window
from aliasx.tui.session import TerminalSession
from aliasx.tui.widgets import CHROME_HEIGHT, footer, highlight_match, search_box, selection_rows


def render_string_frame(
    state: PickerState,
    filtered: list[tuple[int, str]],
    prompt: str,
    height: int,
) -> Layout:
    start, end = visible_window(len(filtered), state.selected, height - CHROME_HEIGHT)
    rows = [highlight_match(label, state.query) for _, label in filtered[start:end]]
    selected = state.selected if filtered else None

    layout = Layout()
    layout.split_column(
        Layout(search_box(state.query, prompt), name="search", size=3),
        Layout(Panel(selection_rows(rows, selected, start), title="Selections", title_align="left"), name="list"),
        Layout(footer(), name="footer", size=1),
    )
    return layout


def string_fuzzy_finder(
    options: Sequence[str],
    prompt: str,
    session: TerminalSession,
    initial_query: str = "",
    initial_position: int = 0,
) -> tuple[int, str]:
    """Pick one of *options*; returns ``(original_position, value)``.

    Raises :class:`SelectionAborted` when the user presses Escape.
    """
    state = PickerState(query=initial_query, selected=initial_position)

    while True:
        filtered = filter_labels(options, state.query)
        state.clamp(len(filtered))
        session.draw(render_string_frame(state, filtered, prompt, session.height))

        action = state.apply(session.read_key(), len(filtered))
        if action is PickerAction.ACCEPT:
            return filtered[state.selected]
        if action is PickerAction.ABORT:
            raise SelectionAborted()
