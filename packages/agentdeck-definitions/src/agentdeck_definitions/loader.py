"""Agent definition discovery and loading from the filesystem."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from agentdeck_core.config import AgentdeckConfig
from agentdeck_core.errors import DiscoveryError

from agentdeck_definitions.linter import BodyLinter
from agentdeck_definitions.registry import RegistryBuilder
from agentdeck_definitions.types import Issue, IssueKind
from agentdeck_definitions.validator import SchemaValidator

if TYPE_CHECKING:
    from agentdeck_definitions.types import Registry

logger = logging.getLogger("agentdeck.definitions.loader")


def discover_documents(
    root: Path | str,
    config: AgentdeckConfig | None = None,
) -> list[Path]:
    """Recursively find candidate agent definition files under *root*.

    Files are matched against ``discovery.pattern``; names listed in
    ``discovery.exclude`` and anything inside a hidden directory are
    skipped.  The result is sorted so discovery order is reproducible.

    Raises:
        DiscoveryError: If *root* does not exist or is not a directory.
    """
    config = config or AgentdeckConfig()
    resolved = Path(root).expanduser().resolve()
    if not resolved.is_dir():
        msg = f"Discovery root is not a directory: {resolved}"
        raise DiscoveryError(msg)

    exclude = set(config.discovery.exclude)
    found: list[Path] = []
    for path in sorted(resolved.rglob(config.discovery.pattern)):
        if not path.is_file() or path.name in exclude:
            continue
        relative = path.relative_to(resolved)
        if any(part.startswith(".") for part in relative.parts[:-1]):
            logger.debug("Skipping file in hidden directory: %s", path)
            continue
        found.append(path)

    logger.info("Discovered %d candidate file(s) under %s", len(found), resolved)
    return found


def load_registry(
    root: Path | str,
    config: AgentdeckConfig | None = None,
    required_sections: list[str] | None = None,
) -> Registry:
    """Discover, read, and validate every agent definition under *root*.

    Unreadable files are recorded as ``unreadable-file`` errors.  When
    *required_sections* (or ``lint.required_sections``) is non-empty the
    body linter runs over every registered definition.

    Raises:
        DiscoveryError: If *root* does not exist or is not a directory.
    """
    config = config or AgentdeckConfig()
    builder = RegistryBuilder(
        validator=SchemaValidator(extra_tools=config.validation.extra_tools),
        list_fields=config.validation.list_fields,
    )

    for path in discover_documents(root, config):
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read %s: %s", path, exc)
            builder.add_issue(Issue(
                kind=IssueKind.UNREADABLE_FILE,
                source_path=path,
                message=f"Cannot read file: {exc}",
            ))
            continue
        builder.add(path, text)

    registry = builder.build()

    sections = (
        required_sections
        if required_sections is not None
        else config.lint.required_sections
    )
    if sections:
        linter = BodyLinter(sections)
        for agent in registry.entries.values():
            registry.warnings.extend(linter.lint(agent))

    return registry
