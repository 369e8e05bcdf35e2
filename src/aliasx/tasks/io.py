"""Load task sources from ``.aliasx.yaml`` and VS Code ``tasks.json`` files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from aliasx import log
from aliasx.config import Config, Scope
from aliasx.errors import TaskFileError
from aliasx.io_utils import read_text
from aliasx.tasks.model import Input, InputMapping, TaskEntry, TaskSet


def _as_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _optional_str(value: Any) -> str | None:
    return None if value is None else _as_str(value)


def _require_list(raw: Any, key: str, path: str) -> list[Any]:
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TaskFileError(path, f"'{key}' must be a list")
    return value


def _parse_option(option: Any) -> str:
    # VS Code pickString options may be {"label": ..., "value": ...}.
    if isinstance(option, dict):
        return _as_str(option.get("value", option.get("label", "")))
    return _as_str(option)


def _parse_input(raw: Any, path: str) -> Input:
    if not isinstance(raw, dict) or "id" not in raw:
        raise TaskFileError(path, "every input needs an 'id'")
    options = raw.get("options") or []
    if not isinstance(options, list):
        raise TaskFileError(path, f"options of input '{raw['id']}' must be a list")
    return Input(
        id=_as_str(raw["id"]),
        options=[_parse_option(o) for o in options],
        description=_optional_str(raw.get("description")),
        default=_optional_str(raw.get("default")),
    )


def _parse_mapping(raw: Any, path: str) -> InputMapping:
    if not isinstance(raw, dict) or "id" not in raw or "input" not in raw:
        raise TaskFileError(path, "every mapping needs an 'id' and an 'input'")
    options = raw.get("options") or {}
    if not isinstance(options, dict):
        raise TaskFileError(path, f"options of mapping '{raw['id']}' must be a mapping")
    return InputMapping(
        id=_as_str(raw["id"]),
        input=_as_str(raw["input"]),
        options={_as_str(k): _as_str(v) for k, v in options.items()},
    )


def parse_task_set(raw: Any, *, path: str, scope: Scope) -> TaskSet:
    """Build a :class:`TaskSet` from already-deserialized data.

    Tasks without a ``command`` (e.g. VS Code tasks of another type) are skipped.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise TaskFileError(path, "top level must be a mapping")

    tasks: list[TaskEntry] = []
    for item in _require_list(raw, "tasks", path):
        if not isinstance(item, dict) or "label" not in item:
            raise TaskFileError(path, "every task needs a 'label'")
        command = item.get("command")
        if command is None:
            log.debug(f"{path}: skipping task '{item['label']}' without command")
            continue
        tasks.append(TaskEntry(label=_as_str(item["label"]), command=_as_str(command)))

    return TaskSet(
        tasks=tasks,
        inputs=[_parse_input(i, path) for i in _require_list(raw, "inputs", path)],
        mappings=[_parse_mapping(m, path) for m in _require_list(raw, "mappings", path)],
        version=_optional_str(raw.get("version")),
        scope=scope,
        origin=path,
    )


def _skip_blank(text: str, i: int) -> int:
    """Index of the first character at or after *i* that is not whitespace or a comment."""
    n = len(text)
    while i < n:
        if text[i] in " \t\r\n":
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
        else:
            break
    return i


def strip_jsonc(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments and trailing commas outside strings."""
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue
        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
        elif ch == ",":
            j = _skip_blank(text, i + 1)
            if j < n and text[j] in "]}":
                i += 1
                continue
            out.append(ch)
            i += 1
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def load_yaml_tasks(path: Path, scope: Scope) -> TaskSet:
    try:
        raw = yaml.safe_load(read_text(path))
    except yaml.YAMLError as e:
        raise TaskFileError(str(path), f"invalid YAML: {e}") from e
    except OSError as e:
        raise TaskFileError(str(path), e.strerror or str(e)) from e
    return parse_task_set(raw, path=str(path), scope=scope)


def load_json_tasks(path: Path, scope: Scope) -> TaskSet:
    try:
        raw = json.loads(strip_jsonc(read_text(path)))
    except json.JSONDecodeError as e:
        raise TaskFileError(str(path), f"invalid JSON: {e}") from e
    except OSError as e:
        raise TaskFileError(str(path), e.strerror or str(e)) from e
    return parse_task_set(raw, path=str(path), scope=scope)


def load_sources(cfg: Config) -> list[TaskSet]:
    """Load every task file the configured scope allows, in canonical order.

    Order: local ``.aliasx.yaml``, local VS Code tasks, global ``~/.aliasx.yaml``.
    Missing files are skipped.
    """
    sources: list[TaskSet] = []

    if cfg.scope.include_local():
        local = cfg.local_path()
        if local.is_file():
            log.debug(f"Loading local tasks from {local}")
            sources.append(load_yaml_tasks(local, Scope.LOCAL))
        vscode = cfg.vscode_tasks_path()
        if vscode.is_file():
            log.debug(f"Loading VS Code tasks from {vscode}")
            sources.append(load_json_tasks(vscode, Scope.LOCAL))

    if cfg.scope.include_global():
        global_path = cfg.global_path()
        if global_path.is_file():
            log.debug(f"Loading global tasks from {global_path}")
            sources.append(load_yaml_tasks(global_path, Scope.GLOBAL))

    return sources
