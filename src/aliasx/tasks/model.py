"""TaskEntry, TaskSet, Input and InputMapping models shared by loaders, registry and resolution."""

from __future__ import annotations

from dataclasses import dataclass, field

from aliasx.config import Scope
from aliasx.placeholder import PlaceholderKind, distinct_ids, extract


@dataclass(frozen=True)
class TaskEntry:
    label: str
    command: str

    def format(self, verbose: bool = False) -> str:
        if verbose:
            return f"{self.label} -> {self.command}"
        return self.label


@dataclass
class Input:
    id: str
    options: list[str] = field(default_factory=list)
    description: str | None = None
    default: str | None = None

    @property
    def prompt(self) -> str:
        return f"input | {self.description or self.id}:"

    @property
    def display_name(self) -> str:
        return self.description or self.id

    def default_position(self) -> int:
        """Position of ``default`` within ``options``; 0 when unset or unknown."""
        if self.default is not None and self.default in self.options:
            return self.options.index(self.default)
        return 0


@dataclass
class InputMapping:
    id: str
    input: str
    options: dict[str, str] = field(default_factory=dict)

    def covers(self, inp: Input) -> bool:
        return all(option in self.options for option in inp.options)

    def missing_options(self, inp: Input) -> list[str]:
        return [option for option in inp.options if option not in self.options]


@dataclass
class TaskSet:
    """One source of task definitions (a file or a synthesized alias set)."""

    tasks: list[TaskEntry] = field(default_factory=list)
    inputs: list[Input] = field(default_factory=list)
    mappings: list[InputMapping] = field(default_factory=list)
    version: str | None = None
    scope: Scope = Scope.ALL
    origin: str = ""

    def __post_init__(self) -> None:
        # Duplicate (label, command) pairs collapse to their first occurrence.
        self.tasks = list(dict.fromkeys(self.tasks))

    def __len__(self) -> int:
        return len(self.tasks)

    def get_input(self, input_id: str) -> Input | None:
        for inp in self.inputs:
            if inp.id == input_id:
                return inp
        return None

    def get_mapping(self, mapping_id: str) -> InputMapping | None:
        for mapping in self.mappings:
            if mapping.id == mapping_id:
                return mapping
        return None

    def required_inputs_for_command(self, command: str) -> list[Input]:
        """Inputs *command* references directly or through mappings, in order.

        Undeclared ids are skipped; use the validator to report them.
        """
        placeholders = extract(command)
        ids = distinct_ids(placeholders, PlaceholderKind.INPUT)
        for mapping_id in distinct_ids(placeholders, PlaceholderKind.MAPPING):
            mapping = self.get_mapping(mapping_id)
            if mapping is not None and mapping.input not in ids:
                ids.append(mapping.input)

        required: list[Input] = []
        for input_id in ids:
            inp = self.get_input(input_id)
            if inp is not None:
                required.append(inp)
        return required
