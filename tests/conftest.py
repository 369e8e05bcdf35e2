"""Shared fixtures for aliasx tests.

File handling in tests:
- Use tmp_path for any task file creation so tests are isolated and cleaned up.
- Use aliasx.io_utils write_text for consistent UTF-8 I/O.
- Interactive loops run against FakeSession: scripted keys in, frames out.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable

import pytest
from rich.console import Console, RenderableType

from aliasx.config import Scope
from aliasx.tasks.model import Input, InputMapping, TaskEntry, TaskSet
from aliasx.tui.keys import Key


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register opt-in switch for tests that spawn a real shell."""
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run end-to-end tests marked with 'e2e'.",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip e2e tests unless explicitly enabled."""
    if config.getoption("--run-e2e"):
        return

    skip_e2e = pytest.mark.skip(
        reason="E2E tests are skipped by default. Use --run-e2e to include them.",
    )
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


class FakeSession:
    """Stand-in for TerminalSession: replays keys and records drawn frames."""

    def __init__(self, keys: Iterable[Key], height: int = 24) -> None:
        self._keys = deque(keys)
        self.frames: list[RenderableType] = []
        self.height = height

    def draw(self, renderable: RenderableType) -> None:
        self.frames.append(renderable)

    def read_key(self) -> Key:
        if not self._keys:
            raise AssertionError("picker asked for more keys than scripted")
        return self._keys.popleft()

    def render_last(self, width: int = 100) -> str:
        """Plain-text rendering of the last frame."""
        console = Console(width=width, height=self.height, record=True, color_system=None)
        with console.capture() as capture:
            console.print(self.frames[-1])
        return capture.get()


def _make_entry(label: str, command: str = "") -> TaskEntry:
    return TaskEntry(label=label, command=command or f"echo {label}")


def _make_task_set(
    entries: list[tuple[str, str]] | None = None,
    inputs: list[Input] | None = None,
    mappings: list[InputMapping] | None = None,
    scope: Scope = Scope.ALL,
) -> TaskSet:
    return TaskSet(
        tasks=[TaskEntry(label=label, command=command) for label, command in entries or []],
        inputs=inputs or [],
        mappings=mappings or [],
        scope=scope,
    )


def _make_input(id: str, options: list[str], description: str | None = None, default: str | None = None) -> Input:
    return Input(id=id, options=options, description=description, default=default)


@pytest.fixture
def make_entry():
    """Factory fixture that creates TaskEntry instances."""
    return _make_entry


@pytest.fixture
def make_task_set():
    """Factory fixture that creates TaskSet instances from (label, command) pairs."""
    return _make_task_set


@pytest.fixture
def make_input():
    """Factory fixture that creates Input instances."""
    return _make_input


@pytest.fixture
def fake_session():
    """Factory fixture that builds a FakeSession from scripted keys."""
    return FakeSession
