"""Error taxonomy shared by resolution, validation, selection and execution."""

from __future__ import annotations


class AliasxError(Exception):
    """Base class for every failure aliasx reports to the user."""


class InvalidIndex(AliasxError):
    def __init__(self, requested: int, total: int) -> None:
        super().__init__(f"invalid index '{requested}' (valid range: 0..{max(total - 1, 0)}, {total} tasks)")
        self.requested = requested
        self.total = total


class UnresolvedInput(AliasxError):
    """No selection is available for an input referenced by a command."""

    def __init__(self, input_id: str) -> None:
        super().__init__(f"no selection provided for input '{input_id}'")
        self.input_id = input_id


class UndefinedInput(AliasxError):
    def __init__(self, input_id: str) -> None:
        super().__init__(f"input '{input_id}' not defined")
        self.input_id = input_id


class UndefinedMapping(AliasxError):
    def __init__(self, mapping_id: str) -> None:
        super().__init__(f"mapping '{mapping_id}' not defined")
        self.mapping_id = mapping_id


class UndefinedMappingInput(AliasxError):
    """A mapping references an input its task set does not declare."""

    def __init__(self, mapping_id: str, input_id: str) -> None:
        super().__init__(f"mapping '{mapping_id}' references undefined input '{input_id}'")
        self.mapping_id = mapping_id
        self.input_id = input_id


class IncompleteMappingCoverage(AliasxError):
    """A mapping omits an option its input declares (validation finding)."""

    def __init__(self, mapping_id: str, missing_option: str) -> None:
        super().__init__(f"mapping '{mapping_id}' doesn't define option for input '{missing_option}'")
        self.mapping_id = mapping_id
        self.missing_option = missing_option


class NoMappingForSelection(AliasxError):
    def __init__(self, mapping_id: str, value: str) -> None:
        super().__init__(f"no mapping found for selection '{value}' in mapping '{mapping_id}'")
        self.mapping_id = mapping_id
        self.value = value


class UnsupportedPlaceholderKind(AliasxError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"unsupported placeholder kind '{kind}'")
        self.kind = kind


class SelectionAborted(AliasxError):
    def __init__(self) -> None:
        super().__init__("no selection made")


class CommandFailed(AliasxError):
    """The spawned shell command exited non-zero or was interrupted."""

    def __init__(self, exit_code: int | None) -> None:
        status = "interrupted" if exit_code is None else str(exit_code)
        super().__init__(f"command exited with non-zero status (err={status})")
        self.exit_code = exit_code

    @property
    def interrupted(self) -> bool:
        return self.exit_code is None


class TaskFileError(AliasxError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"failed to load tasks from '{path}': {reason}")
        self.path = path
        self.reason = reason


class AliasLoadError(AliasxError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"calling 'alias' failed ({reason})")
        self.reason = reason


class NoTerminal(AliasxError):
    """Interactive selection was requested but stdin is not a terminal."""

    def __init__(self) -> None:
        super().__init__("interactive selection needs a terminal (use --index with --input to run non-interactively)")
