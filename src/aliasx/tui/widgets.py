"""Rich renderables shared by the fuzzy-finder screens."""

from __future__ import annotations

from typing import Sequence

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from aliasx.config import VERSION, Scope

ACCENT = Style(color="yellow")
ACTIVE = Style(color="yellow", bold=True)
MATCH = Style(color="green", bold=True)
DIM = Style(color="bright_black")
PLACEHOLDER = Style(color="bright_black", italic=True)
POINTER = "❯ "

# Rows taken by everything except the list body: search box (3), list borders (2), footer (1).
CHROME_HEIGHT = 6


def highlight_match(text: str, query: str, base: Style | None = None) -> Text:
    """*text* with every case-insensitive occurrence of *query* highlighted."""
    line = Text(text, style=base or "")
    if not query:
        return line

    lower_text = text.lower()
    lower_query = query.lower()
    pos = 0
    while True:
        start = lower_text.find(lower_query, pos)
        if start == -1:
            break
        end = start + len(lower_query)
        line.stylize(MATCH, start, end)
        pos = end
    return line


def footer(extra_hints: Sequence[tuple[str, str]] = ()) -> Text:
    """Key-hint bar: version, navigation keys, then any picker-specific hints."""
    line = Text(justify="center")
    line.append(f" aliasx v{VERSION} ", style=DIM)
    line.append(" | ")
    for i, (key, label) in enumerate([("↑↓", "navigate"), ("↵", "select"), ("esc", "quit"), *extra_hints]):
        if i:
            line.append("  ")
        line.append(key, style=ACCENT)
        line.append(f" {label}")
    return line


def search_box(query: str, title: str) -> Panel:
    line = Text("> ", style=ACCENT)
    if query:
        line.append(query)
    else:
        line.append("type to search...", style=PLACEHOLDER)
    return Panel(line, title=Text(title), title_align="left", height=3)


def selection_rows(rows: Sequence[Text], selected: int | None, start: int) -> Group:
    """Stack *rows* (already windowed from *start*) with the active row marked."""
    rendered: list[RenderableType] = []
    for offset, row in enumerate(rows):
        if selected is not None and start + offset == selected:
            line = Text(POINTER, style=ACTIVE)
            # Base style only, so match spans stay highlighted on the active row.
            active = row.copy()
            active.style = ACTIVE
            line.append_text(active)
        else:
            line = Text(" " * len(POINTER))
            line.append_text(row)
        rendered.append(line)
    return Group(*rendered)


def scope_tabs(active: Scope) -> Text:
    line = Text(" ")
    for i, scope in enumerate((Scope.ALL, Scope.LOCAL, Scope.GLOBAL)):
        if i:
            line.append("  ")
        line.append(scope.value, style=ACTIVE if scope is active else DIM)
    line.append(" ")
    return line
