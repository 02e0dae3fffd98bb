"""Schema validation: checks a parsed header and builds an AgentDefinition."""
from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from agentdeck_definitions.types import AgentDefinition, Issue, IssueKind

_IDENTIFIER_PATTERN = re.compile(r"[a-z0-9]+(-[a-z0-9]+)*")

REQUIRED_FIELDS: tuple[str, ...] = ("name", "description")
SCHEMA_FIELDS: frozenset[str] = frozenset({"name", "description", "tools"})

KNOWN_TOOLS: frozenset[str] = frozenset({
    "AskUserQuestion",
    "Bash",
    "Edit",
    "Glob",
    "Grep",
    "LS",
    "MultiEdit",
    "NotebookEdit",
    "NotebookRead",
    "Read",
    "Task",
    "TodoWrite",
    "WebFetch",
    "WebSearch",
    "Write",
})


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating one header.

    ``definition`` is set only when ``errors`` is empty; ``warnings``
    never block construction.
    """

    definition: AgentDefinition | None = None
    errors: list[Issue] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.definition is not None


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    return type(value).__name__


class SchemaValidator:
    """Validates a frontmatter header against the agent definition schema.

    Every rule is evaluated so one header can carry several errors.
    Unknown and repeated tool names are reported as warnings.
    """

    def __init__(self, extra_tools: Iterable[str] = ()) -> None:
        self._known_tools = KNOWN_TOOLS | frozenset(extra_tools)

    @property
    def known_tools(self) -> frozenset[str]:
        return self._known_tools

    def validate(
        self,
        header: dict[str, Any],
        source_path: Path,
        body: str = "",
    ) -> ValidationResult:
        errors: list[Issue] = []
        warnings: list[Issue] = []

        for name in REQUIRED_FIELDS:
            if header.get(name) is None:
                errors.append(Issue(
                    kind=IssueKind.MISSING_FIELD,
                    source_path=source_path,
                    message=f"Missing required field '{name}'",
                    field_name=name,
                ))

        name = self._check_str(header, "name", source_path, errors)
        if name is not None and not _IDENTIFIER_PATTERN.fullmatch(name):
            errors.append(Issue(
                kind=IssueKind.INVALID_IDENTIFIER,
                source_path=source_path,
                message=(
                    f"Identifier must be lowercase alphanumeric words "
                    f"joined by single hyphens: '{name}'"
                ),
                field_name="name",
                value=name,
            ))

        description = self._check_str(header, "description", source_path, errors)
        if description is not None and not description.strip():
            errors.append(Issue(
                kind=IssueKind.EMPTY_DESCRIPTION,
                source_path=source_path,
                message="Description is empty",
                field_name="description",
            ))

        tools = self._check_tools(header.get("tools"), source_path, errors, warnings)

        if errors:
            return ValidationResult(errors=errors, warnings=warnings)

        definition = AgentDefinition(
            identifier=str(name),
            description=str(description).strip(),
            declared_tools=tools,
            body_content=body,
            source_path=source_path,
            extra={k: v for k, v in header.items() if k not in SCHEMA_FIELDS},
        )
        return ValidationResult(definition=definition, warnings=warnings)

    def _check_str(
        self,
        header: dict[str, Any],
        name: str,
        source_path: Path,
        errors: list[Issue],
    ) -> str | None:
        """Return the string value of *name*, or None if absent or mistyped."""
        value = header.get(name)
        if value is None:
            return None
        if not isinstance(value, str):
            errors.append(Issue(
                kind=IssueKind.TYPE_MISMATCH,
                source_path=source_path,
                message=(
                    f"Field '{name}' must be a string, got {_type_name(value)}"
                ),
                field_name=name,
                expected="str",
                actual=_type_name(value),
            ))
            return None
        return value

    def _check_tools(
        self,
        value: Any,
        source_path: Path,
        errors: list[Issue],
        warnings: list[Issue],
    ) -> tuple[str, ...]:
        if value is None:
            return ()
        if not isinstance(value, list):
            errors.append(Issue(
                kind=IssueKind.TYPE_MISMATCH,
                source_path=source_path,
                message=f"Field 'tools' must be a list, got {_type_name(value)}",
                field_name="tools",
                expected="list[str]",
                actual=_type_name(value),
            ))
            return ()

        tools: list[str] = []
        for item in value:
            if not isinstance(item, str):
                errors.append(Issue(
                    kind=IssueKind.TYPE_MISMATCH,
                    source_path=source_path,
                    message=(
                        f"Field 'tools' entries must be strings, "
                        f"got {_type_name(item)} ({item!r})"
                    ),
                    field_name="tools",
                    expected="str",
                    actual=_type_name(item),
                ))
                continue
            if item in tools:
                warnings.append(Issue(
                    kind=IssueKind.DUPLICATE_TOOL,
                    source_path=source_path,
                    message=f"Tool '{item}' is declared more than once",
                    field_name="tools",
                    value=item,
                ))
                continue
            if item not in self._known_tools:
                warnings.append(Issue(
                    kind=IssueKind.UNKNOWN_TOOL,
                    source_path=source_path,
                    message=f"Unknown tool '{item}'",
                    field_name="tools",
                    value=item,
                ))
            tools.append(item)
        return tuple(tools)
