"""Task registry: merge task sources into one globally indexed collection.

Every task receives a global index equal to its position in the
concatenation of all sources, counted before deduplication::

    reg = TaskRegistry([local, workspace, global_])
    reg.find_task(3)          # (owning source, entry)
    reg.indexed_tasks()       # deduplicated, original indices preserved
    reg.execute(3, {"env": "prod"})
"""

from __future__ import annotations

from typing import Iterator

from rich.markup import escape

from aliasx import log
from aliasx.config import Config, Scope
from aliasx.errors import InvalidIndex
from aliasx.runner import run_command
from aliasx.tasks.model import Input, TaskEntry, TaskSet
from aliasx.template import resolve_command
from aliasx.validator import ValidationReport, ValidationSummary, Validator


class TaskRegistry:
    def __init__(self, sources: list[TaskSet], cfg: Config | None = None) -> None:
        self.sources = list(sources)
        self.cfg = cfg or Config()

    # ── addressing ───────────────────────────────────────────────

    def total_count(self) -> int:
        return sum(len(source.tasks) for source in self.sources)

    def index_width(self) -> int:
        return len(str(self.total_count()))

    def all_tasks_with_source(self) -> Iterator[tuple[int, TaskSet, TaskEntry]]:
        """Yield ``(global_index, source, entry)`` for every physical occurrence."""
        offset = 0
        for source in self.sources:
            for local_idx, entry in enumerate(source.tasks):
                yield offset + local_idx, source, entry
            offset += len(source.tasks)

    def indexed_tasks(self) -> list[tuple[int, Scope, TaskEntry]]:
        """Deduplicated ``(global_index, scope, entry)``; first occurrence wins."""
        seen: set[TaskEntry] = set()
        result: list[tuple[int, Scope, TaskEntry]] = []
        for idx, source, entry in self.all_tasks_with_source():
            if entry in seen:
                continue
            seen.add(entry)
            result.append((idx, source.scope, entry))
        return result

    def all_tasks(self) -> list[TaskEntry]:
        return [entry for _, _, entry in self.indexed_tasks()]

    def find_task(self, index: int) -> tuple[TaskSet, TaskEntry]:
        """Return the owning source and entry for global *index*."""
        if index < 0:
            raise InvalidIndex(index, self.total_count())
        start = 0
        for source in self.sources:
            end = start + len(source.tasks)
            if index < end:
                return source, source.tasks[index - start]
            start = end
        raise InvalidIndex(index, self.total_count())

    def required_inputs_for_task(self, index: int) -> list[Input]:
        source, entry = self.find_task(index)
        return source.required_inputs_for_command(entry.command)

    # ── listing ──────────────────────────────────────────────────

    def format_line(self, index: int, entry: TaskEntry, verbose: bool) -> str:
        return f"[{index:0{self.index_width()}d}] {entry.format(verbose)}"

    def list_all(self, verbose: bool = False) -> None:
        for idx, _, entry in self.indexed_tasks():
            log.console.print(escape(self.format_line(idx, entry, verbose)))

    def list_at(self, index: int, verbose: bool = False) -> None:
        _, entry = self.find_task(index)
        log.console.print(escape(self.format_line(index, entry, verbose)))

    # ── validation ───────────────────────────────────────────────

    def validate_all(self, verbose: bool = False) -> ValidationSummary:
        """Validate every physical occurrence, printing reports and a summary."""
        validator = Validator(verbose=verbose)
        reports: list[ValidationReport] = []

        Validator.print_header()
        for _idx, source, entry in self.all_tasks_with_source():
            report = validator.validate_task(entry, source)
            report.print(verbose=verbose)
            reports.append(report)

        summary = ValidationSummary.from_reports(reports)
        summary.print()
        return summary

    def validate_at(self, index: int, verbose: bool = False) -> ValidationReport:
        source, entry = self.find_task(index)
        report = Validator(verbose=True).validate_task(entry, source)
        # A single task always gets the full report, else there may be no output.
        report.print(verbose=True)
        return report

    # ── execution ────────────────────────────────────────────────

    def resolve(self, index: int, selections: dict[str, str]) -> str:
        source, entry = self.find_task(index)
        return resolve_command(entry.command, source, selections)

    def execute(self, index: int, selections: dict[str, str], verbose: bool = False) -> int:
        """Resolve task *index* and run it; raises ``CommandFailed`` on failure."""
        _, entry = self.find_task(index)
        command = self.resolve(index, selections)

        log.console.print(f"[bold]aliasx[/bold] | {escape(entry.format(verbose))}")
        log.console.print()
        log.debug(f"Resolved command: {command}")
        return run_command(command, self.cfg)
