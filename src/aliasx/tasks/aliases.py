"""Import the user's shell aliases as a task source."""

from __future__ import annotations

import subprocess

from aliasx import log
from aliasx.config import Config, Scope
from aliasx.errors import AliasLoadError
from aliasx.tasks.model import TaskEntry, TaskSet

ALIAS_ORIGIN = "aliases"


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        value = value[1:-1]
    # bash prints embedded single quotes as '\''
    return value.replace("'\\''", "'")


def parse_aliases(output: str) -> TaskSet:
    """Parse ``alias`` output (bash ``alias x='..'`` or zsh ``x=..``) into a task set."""
    tasks: list[TaskEntry] = []
    for line in output.splitlines():
        line = line.strip()
        if line.startswith("alias "):
            line = line[len("alias "):]
        name, sep, command = line.partition("=")
        if not sep or not name.strip() or " " in name.strip():
            continue
        tasks.append(TaskEntry(label=name.strip(), command=_unquote(command)))
    return TaskSet(tasks=tasks, scope=Scope.ALL, origin=ALIAS_ORIGIN)


def load_alias_source(cfg: Config) -> TaskSet:
    """Ask an interactive ``$SHELL`` for its aliases."""
    log.debug(f"Reading aliases from {cfg.shell}")
    try:
        proc = subprocess.run(
            [cfg.shell, "-ic", "alias"],
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except FileNotFoundError:
        raise AliasLoadError(f"{cfg.shell} not found") from None

    if proc.returncode < 0:
        raise AliasLoadError("interrupted")
    if proc.returncode != 0:
        raise AliasLoadError(f"exit code {proc.returncode}")
    return parse_aliases(proc.stdout)
