"""Agent definition system: frontmatter parsing, validation, registry, and catalog."""
from __future__ import annotations

from agentdeck_definitions.catalog import (
    Catalog,
    render_catalog,
    to_json,
    to_markdown,
    to_text,
)
from agentdeck_definitions.frontmatter import ParsedFrontmatter, parse_frontmatter
from agentdeck_definitions.linter import BodyLinter
from agentdeck_definitions.loader import discover_documents, load_registry
from agentdeck_definitions.registry import RegistryBuilder, build_registry
from agentdeck_definitions.types import (
    AgentDefinition,
    Issue,
    IssueKind,
    Registry,
    Severity,
)
from agentdeck_definitions.validator import (
    KNOWN_TOOLS,
    SchemaValidator,
    ValidationResult,
)

__all__ = [
    "KNOWN_TOOLS",
    "AgentDefinition",
    "BodyLinter",
    "Catalog",
    "Issue",
    "IssueKind",
    "ParsedFrontmatter",
    "Registry",
    "RegistryBuilder",
    "SchemaValidator",
    "Severity",
    "ValidationResult",
    "build_registry",
    "discover_documents",
    "load_registry",
    "parse_frontmatter",
    "render_catalog",
    "to_json",
    "to_markdown",
    "to_text",
]
