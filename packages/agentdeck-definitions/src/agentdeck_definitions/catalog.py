"""Catalog rendering: turns a Registry into listings and issue reports."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agentdeck_definitions.types import Registry


@dataclass(frozen=True, slots=True)
class Catalog:
    """Sorted ``(identifier, description)`` pairs plus formatted issues."""

    entries: list[tuple[str, str]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def render_catalog(registry: Registry) -> Catalog:
    """Render *registry* into a Catalog.

    Entries are always rendered, even when the registry holds errors.
    """
    entries = sorted(
        (agent.identifier, agent.description)
        for agent in registry.entries.values()
    )
    return Catalog(
        entries=entries,
        errors=[issue.format() for issue in registry.errors],
        warnings=[issue.format() for issue in registry.warnings],
    )


def to_text(catalog: Catalog) -> str:
    """One ``identifier: description`` line per entry."""
    return "".join(
        f"{identifier}: {description}\n"
        for identifier, description in catalog.entries
    )


def _md_cell(value: str) -> str:
    return " ".join(value.split()).replace("|", "\\|")


def to_markdown(catalog: Catalog) -> str:
    """Markdown table suitable for pasting into a README."""
    lines = ["| Agent | Description |", "| --- | --- |"]
    lines.extend(
        f"| `{identifier}` | {_md_cell(description)} |"
        for identifier, description in catalog.entries
    )
    return "\n".join(lines) + "\n"


def to_json(catalog: Catalog) -> str:
    payload = {
        "agents": [
            {"identifier": identifier, "description": description}
            for identifier, description in catalog.entries
        ],
        "errors": catalog.errors,
        "warnings": catalog.warnings,
    }
    return json.dumps(payload, indent=2, sort_keys=True) + "\n"


RENDERERS = {
    "text": to_text,
    "markdown": to_markdown,
    "json": to_json,
}
