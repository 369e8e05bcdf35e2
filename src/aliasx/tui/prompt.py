"""Prompt for the inputs a task still needs before it can be resolved."""

from __future__ import annotations

from aliasx.errors import UnresolvedInput
from aliasx.registry import TaskRegistry
from aliasx.template import missing_inputs
from aliasx.tui.fuzzy import string_fuzzy_finder
from aliasx.tui.session import TerminalSession


def collect_inputs(
    registry: TaskRegistry,
    index: int,
    session: TerminalSession,
    selections: dict[str, str] | None = None,
) -> dict[str, str]:
    """Extend *selections* with a picked value for every unresolved input of task *index*.

    Pre-supplied selections are kept and never prompted for again.
    """
    selections = {} if selections is None else selections
    source, entry = registry.find_task(index)

    for inp in missing_inputs(entry.command, source, selections):
        if not inp.options:
            raise UnresolvedInput(inp.id)
        _, value = string_fuzzy_finder(
            inp.options,
            inp.prompt,
            session,
            initial_position=inp.default_position(),
        )
        selections[inp.id] = value
    return selections
