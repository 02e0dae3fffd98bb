"""Agent definition types: parsed definitions, issues, and the registry."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class AgentDefinition:
    """A validated agent definition from one markdown file.

    Holds the metadata from the frontmatter header, the opaque body that
    follows it, and the file it was read from.  Header keys outside the
    schema (``model``, ``color``, ...) are kept verbatim in ``extra``.
    """

    identifier: str
    description: str
    declared_tools: tuple[str, ...] = ()
    body_content: str = ""
    source_path: Path = field(default_factory=lambda: Path("."))
    extra: dict[str, Any] = field(default_factory=dict)


# ── Issues ───────────────────────────────────────────────────────────

class Severity(enum.Enum):
    ERROR = "error"
    WARNING = "warning"


class IssueKind(enum.Enum):
    EMPTY_DOCUMENT = "empty-document"
    MALFORMED_HEADER = "malformed-header"
    MISSING_FIELD = "missing-field"
    TYPE_MISMATCH = "type-mismatch"
    INVALID_IDENTIFIER = "invalid-identifier"
    EMPTY_DESCRIPTION = "empty-description"
    UNKNOWN_TOOL = "unknown-tool"
    DUPLICATE_TOOL = "duplicate-tool"
    DUPLICATE_IDENTIFIER = "duplicate-identifier"
    UNREADABLE_FILE = "unreadable-file"
    MISSING_SECTION = "missing-section"

    @property
    def severity(self) -> Severity:
        if self in _WARNING_KINDS:
            return Severity.WARNING
        return Severity.ERROR


_WARNING_KINDS = frozenset({
    IssueKind.UNKNOWN_TOOL,
    IssueKind.DUPLICATE_TOOL,
    IssueKind.MISSING_SECTION,
})


@dataclass(frozen=True, slots=True)
class Issue:
    """A single error or warning recorded while building a registry.

    Only the attributes relevant to ``kind`` are set: ``field_name`` for
    schema problems, ``expected``/``actual`` for type mismatches,
    ``value`` for the offending identifier or tool name, and
    ``other_path`` for the first-seen file of a duplicate identifier.
    """

    kind: IssueKind
    source_path: Path
    message: str
    field_name: str | None = None
    expected: str | None = None
    actual: str | None = None
    value: str | None = None
    other_path: Path | None = None

    @property
    def severity(self) -> Severity:
        return self.kind.severity

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def format(self) -> str:
        return (
            f"{self.source_path}: {self.severity.value} "
            f"[{self.kind.value}] {self.message}"
        )


# ── Registry ─────────────────────────────────────────────────────────

@dataclass(slots=True)
class Registry:
    """The definitions and issues collected by one load pass.

    ``entries`` preserves discovery order; catalogs sort on output.
    """

    entries: dict[str, AgentDefinition] = field(default_factory=dict)
    errors: list[Issue] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def get(self, identifier: str) -> AgentDefinition | None:
        return self.entries.get(identifier)

    def __len__(self) -> int:
        return len(self.entries)
