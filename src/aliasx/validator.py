"""Static validation of task commands against their owning task set."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.markup import escape

from aliasx import log
from aliasx.errors import (
    AliasxError,
    IncompleteMappingCoverage,
    UndefinedInput,
    UndefinedMapping,
    UndefinedMappingInput,
    UnsupportedPlaceholderKind,
)
from aliasx.placeholder import PlaceholderKind, distinct_ids, extract
from aliasx.tasks.model import InputMapping, TaskEntry, TaskSet

PASS_GLYPH = "✔"
FAIL_GLYPH = "✘"


@dataclass(frozen=True)
class ValidationStatus:
    passed: bool
    message: str
    error: AliasxError | None = None

    @classmethod
    def ok(cls, message: str) -> ValidationStatus:
        return cls(True, message)

    @classmethod
    def fail(cls, error: AliasxError) -> ValidationStatus:
        return cls(False, str(error), error)


@dataclass
class ValidationReport:
    validation_id: str
    statuses: list[ValidationStatus] = field(default_factory=list)

    def has_failures(self) -> bool:
        return any(not s.passed for s in self.statuses)

    def failures(self) -> list[ValidationStatus]:
        return [s for s in self.statuses if not s.passed]

    def print(self, verbose: bool = False) -> None:
        """Print the badge line and one line per status."""
        self.print_compact()
        for status in self.statuses:
            if status.passed and not verbose:
                continue
            if status.passed:
                log.console.print(f"    [green]{PASS_GLYPH}[/green] {escape(status.message)}")
            else:
                log.console.print(f"    [red]{FAIL_GLYPH}[/red] {escape(status.message)}")

    def print_compact(self) -> None:
        if self.has_failures():
            issues = len(self.failures())
            log.console.print(
                f"[bold red]FAIL[/bold red] {escape(self.validation_id)} "
                f"[dim]({issues} issue{'s' if issues != 1 else ''})[/dim]"
            )
        else:
            log.console.print(f"[bold green]PASS[/bold green] {escape(self.validation_id)}")


@dataclass
class ValidationSummary:
    passed: int = 0
    failed: int = 0
    issues: int = 0

    @classmethod
    def from_reports(cls, reports: list[ValidationReport]) -> ValidationSummary:
        summary = cls()
        for report in reports:
            failures = len(report.failures())
            if failures:
                summary.failed += 1
                summary.issues += failures
            else:
                summary.passed += 1
        return summary

    @property
    def total(self) -> int:
        return self.passed + self.failed

    def print(self) -> None:
        log.console.print()
        log.console.print(
            f"[bold]Summary:[/bold] {self.total} tasks, "
            f"[green]{self.passed} passed[/green], "
            f"[red]{self.failed} failed[/red], "
            f"{self.issues} issue{'s' if self.issues != 1 else ''}"
        )


class Validator:
    """Checks that every placeholder of a command resolves within its task set.

    Never stops at the first problem: every finding lands in the report.
    """

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def validate_task(self, entry: TaskEntry, source: TaskSet) -> ValidationReport:
        report = ValidationReport(validation_id=entry.label)
        placeholders = extract(entry.command)

        for p in placeholders:
            if p.kind is PlaceholderKind.UNSUPPORTED:
                report.statuses.append(ValidationStatus.fail(UnsupportedPlaceholderKind(p.raw_kind)))

        self._validate_inputs(report, [p.id for p in placeholders if p.kind is PlaceholderKind.INPUT], source)
        self._validate_mappings(report, distinct_ids(placeholders, PlaceholderKind.MAPPING), source)
        return report

    def _validate_inputs(self, report: ValidationReport, input_ids: list[str], source: TaskSet) -> None:
        for input_id in input_ids:
            if source.get_input(input_id) is None:
                report.statuses.append(ValidationStatus.fail(UndefinedInput(input_id)))
            elif self.verbose:
                report.statuses.append(ValidationStatus.ok(f"input '{input_id}' defined"))

    def _validate_mappings(self, report: ValidationReport, mapping_ids: list[str], source: TaskSet) -> None:
        for mapping_id in mapping_ids:
            mapping = source.get_mapping(mapping_id)
            if mapping is None:
                report.statuses.append(ValidationStatus.fail(UndefinedMapping(mapping_id)))
                continue
            if self.verbose:
                report.statuses.append(ValidationStatus.ok(f"mapping '{mapping_id}' defined"))
            self._validate_mapping_coverage(report, mapping, source)

    def _validate_mapping_coverage(self, report: ValidationReport, mapping: InputMapping, source: TaskSet) -> None:
        inp = source.get_input(mapping.input)
        if inp is None:
            report.statuses.append(ValidationStatus.fail(UndefinedMappingInput(mapping.id, mapping.input)))
            return
        for option in mapping.missing_options(inp):
            report.statuses.append(ValidationStatus.fail(IncompleteMappingCoverage(mapping.id, option)))

    @staticmethod
    def print_header() -> None:
        log.console.print("[bold]Validating task configuration[/bold]")
        log.console.print()
