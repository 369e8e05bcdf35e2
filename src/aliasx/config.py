"""Configuration defaults, env vars, and runtime options for aliasx."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


VERSION = "0.4.0"

LOCAL_TASKS_FILE = ".aliasx.yaml"
VSCODE_TASKS_FILE = ".vscode/tasks.json"
GLOBAL_TASKS_FILE = "~/.aliasx.yaml"
DEFAULT_SHELL = "/bin/sh"


class Scope(str, Enum):
    """Which task sources are loaded or displayed."""

    ALL = "all"
    LOCAL = "local"
    GLOBAL = "global"

    def include_local(self) -> bool:
        return self in (Scope.ALL, Scope.LOCAL)

    def include_global(self) -> bool:
        return self in (Scope.ALL, Scope.GLOBAL)

    def next(self) -> Scope:
        return _SCOPE_CYCLE[(_SCOPE_CYCLE.index(self) + 1) % len(_SCOPE_CYCLE)]

    def prev(self) -> Scope:
        return _SCOPE_CYCLE[(_SCOPE_CYCLE.index(self) - 1) % len(_SCOPE_CYCLE)]

    @classmethod
    def parse(cls, text: str) -> Scope:
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid value for scope: {text}") from None

    def __str__(self) -> str:
        return self.value


_SCOPE_CYCLE = (Scope.ALL, Scope.LOCAL, Scope.GLOBAL)


@dataclass
class Config:
    """Runtime configuration mirroring the CLI flags."""

    # Sources
    scope: Scope = Scope.ALL
    native: bool = False
    local_file: str = LOCAL_TASKS_FILE
    vscode_tasks_file: str = VSCODE_TASKS_FILE
    global_file: str = ""

    # Execution
    shell: str = ""

    # Misc
    verbose: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.scope, str) and not isinstance(self.scope, Scope):
            self.scope = Scope.parse(self.scope)
        if not self.global_file:
            self.global_file = os.environ.get("ALIASX_GLOBAL_FILE") or GLOBAL_TASKS_FILE
        if not self.shell:
            self.shell = os.environ.get("SHELL") or DEFAULT_SHELL

    def local_path(self) -> Path:
        return Path(self.local_file)

    def vscode_tasks_path(self) -> Path:
        return Path(self.vscode_tasks_file)

    def global_path(self) -> Path:
        return Path(self.global_file).expanduser()
