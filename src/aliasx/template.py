"""Template engine: resolve ``${input:..}`` and ``${mapping:..}`` placeholders.

The engine never prompts. Callers collect any missing selections first
(see :func:`missing_inputs`) and then call :func:`resolve_command`.
"""

from __future__ import annotations

from aliasx.errors import (
    NoMappingForSelection,
    UndefinedInput,
    UndefinedMapping,
    UndefinedMappingInput,
    UnresolvedInput,
    UnsupportedPlaceholderKind,
)
from aliasx.placeholder import Placeholder, PlaceholderKind, distinct_ids, extract, substitute
from aliasx.tasks.model import Input, TaskSet


def _reject_unsupported(placeholders: list[Placeholder]) -> None:
    for p in placeholders:
        if p.kind is PlaceholderKind.UNSUPPORTED:
            raise UnsupportedPlaceholderKind(p.raw_kind)


def missing_inputs(command: str, task_set: TaskSet, selections: dict[str, str]) -> list[Input]:
    """Return the inputs still lacking a selection, in first-reference order.

    Raises when a placeholder names something *task_set* does not declare, so
    callers can abort before prompting the user.
    """
    placeholders = extract(command)
    _reject_unsupported(placeholders)

    needed: list[str] = []
    for input_id in distinct_ids(placeholders, PlaceholderKind.INPUT):
        if task_set.get_input(input_id) is None and input_id not in selections:
            raise UndefinedInput(input_id)
        needed.append(input_id)

    for mapping_id in distinct_ids(placeholders, PlaceholderKind.MAPPING):
        mapping = task_set.get_mapping(mapping_id)
        if mapping is None:
            raise UndefinedMapping(mapping_id)
        if task_set.get_input(mapping.input) is None and mapping.input not in selections:
            raise UndefinedMappingInput(mapping_id, mapping.input)
        if mapping.input not in needed:
            needed.append(mapping.input)

    result: list[Input] = []
    for input_id in needed:
        if input_id in selections:
            continue
        inp = task_set.get_input(input_id)
        if inp is not None:
            result.append(inp)
    return result


def resolve_mappings(
    placeholders: list[Placeholder],
    task_set: TaskSet,
    selections: dict[str, str],
) -> dict[str, str]:
    """Derive the replacement for every distinct mapping id in *placeholders*."""
    derived: dict[str, str] = {}
    for mapping_id in distinct_ids(placeholders, PlaceholderKind.MAPPING):
        mapping = task_set.get_mapping(mapping_id)
        if mapping is None:
            raise UndefinedMapping(mapping_id)

        value = selections.get(mapping.input)
        if value is None:
            raise UnresolvedInput(mapping.input)

        replacement = mapping.options.get(value)
        if replacement is None:
            raise NoMappingForSelection(mapping_id, value)
        derived[mapping_id] = replacement
    return derived


def resolve_command(command: str, task_set: TaskSet, selections: dict[str, str]) -> str:
    """Substitute every placeholder in *command* and return the runnable string.

    Aborts on the first unsupported kind, unresolved input or undefined
    mapping; nothing is substituted in that case.
    """
    placeholders = extract(command)
    _reject_unsupported(placeholders)

    for p in placeholders:
        if p.kind is PlaceholderKind.INPUT and p.id not in selections:
            raise UnresolvedInput(p.id)

    derived = resolve_mappings(placeholders, task_set, selections)

    def _value(p: Placeholder) -> str:
        if p.kind is PlaceholderKind.INPUT:
            return selections[p.id]
        return derived[p.id]

    return substitute(command, _value)
