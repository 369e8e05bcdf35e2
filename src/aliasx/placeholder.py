"""Placeholder grammar: ``${<kind>:<id>}`` tokens embedded in command templates."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable

PLACEHOLDER_RE = re.compile(r"\$\{(?P<kind>[^:{}$]+):(?P<id>[A-Za-z0-9_.\-]+)\}")


class PlaceholderKind(str, Enum):
    INPUT = "input"
    MAPPING = "mapping"
    UNSUPPORTED = "unsupported"

    @classmethod
    def classify(cls, raw_kind: str) -> PlaceholderKind:
        """Map the raw kind text onto the closed set of supported kinds."""
        match raw_kind:
            case "input":
                return cls.INPUT
            case "mapping":
                return cls.MAPPING
            case _:
                return cls.UNSUPPORTED


@dataclass(frozen=True)
class Placeholder:
    """One placeholder occurrence and the span it covers in its template."""

    kind: PlaceholderKind
    id: str
    raw_kind: str
    start: int
    end: int

    @property
    def token(self) -> str:
        return f"${{{self.raw_kind}:{self.id}}}"


def extract(text: str) -> list[Placeholder]:
    """Return every placeholder in *text*, left to right, one per occurrence."""
    return [
        Placeholder(
            kind=PlaceholderKind.classify(m.group("kind")),
            id=m.group("id"),
            raw_kind=m.group("kind"),
            start=m.start(),
            end=m.end(),
        )
        for m in PLACEHOLDER_RE.finditer(text)
    ]


def distinct_ids(placeholders: list[Placeholder], kind: PlaceholderKind) -> list[str]:
    """Ids of *kind* in order of first appearance, without repeats."""
    seen: set[str] = set()
    ordered: list[str] = []
    for p in placeholders:
        if p.kind is not kind or p.id in seen:
            continue
        seen.add(p.id)
        ordered.append(p.id)
    return ordered


def replace_next(text: str, replacement: str) -> str:
    """Replace the first placeholder span in *text* with *replacement*."""
    m = PLACEHOLDER_RE.search(text)
    if m is None:
        return text
    return text[: m.start()] + replacement + text[m.end():]


def substitute(text: str, replace: Callable[[Placeholder], str | None]) -> str:
    """Splice replacements into *text* span by span.

    *replace* returns the value for a placeholder, or ``None`` to keep the
    token as is. Inserted values are never re-scanned.
    """
    parts: list[str] = []
    pos = 0
    for p in extract(text):
        value = replace(p)
        if value is None:
            continue
        parts.append(text[pos:p.start])
        parts.append(value)
        pos = p.end
    parts.append(text[pos:])
    return "".join(parts)
