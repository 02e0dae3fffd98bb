"""Registry builder: folds per-file parse and validation results into a Registry."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from agentdeck_core.errors import EmptyDocumentError, MalformedHeaderError

from agentdeck_definitions.frontmatter import DEFAULT_LIST_FIELDS, parse_frontmatter
from agentdeck_definitions.types import Issue, IssueKind, Registry
from agentdeck_definitions.validator import SchemaValidator

logger = logging.getLogger("agentdeck.definitions.registry")


class RegistryBuilder:
    """Accumulates agent definitions from documents in discovery order.

    No single bad document stops the fold: parse failures and schema
    errors are recorded against the document's path and the builder
    moves on.  When two documents declare the same identifier the first
    one is kept and a ``duplicate-identifier`` error is recorded.
    """

    def __init__(
        self,
        validator: SchemaValidator | None = None,
        list_fields: Iterable[str] = DEFAULT_LIST_FIELDS,
    ) -> None:
        self._validator = validator or SchemaValidator()
        self._list_fields = frozenset(list_fields)
        self._registry = Registry()

    def add(self, source_path: Path | str, text: str) -> bool:
        """Parse, validate, and register one document.

        Returns:
            True if the document produced a new registry entry.
        """
        source_path = Path(source_path)
        logger.debug("Loading agent definition from %s", source_path)

        try:
            parsed = parse_frontmatter(text, self._list_fields)
        except EmptyDocumentError as exc:
            self.add_issue(Issue(
                kind=IssueKind.EMPTY_DOCUMENT,
                source_path=source_path,
                message=str(exc),
            ))
            return False
        except MalformedHeaderError as exc:
            self.add_issue(Issue(
                kind=IssueKind.MALFORMED_HEADER,
                source_path=source_path,
                message=str(exc),
            ))
            return False

        result = self._validator.validate(parsed.header, source_path, parsed.body)
        for issue in (*result.errors, *result.warnings):
            self.add_issue(issue)

        definition = result.definition
        if definition is None:
            return False

        first = self._registry.entries.get(definition.identifier)
        if first is not None:
            logger.warning(
                "Duplicate agent name '%s' at %s (keeping %s)",
                definition.identifier,
                source_path,
                first.source_path,
            )
            self.add_issue(Issue(
                kind=IssueKind.DUPLICATE_IDENTIFIER,
                source_path=source_path,
                message=(
                    f"Identifier '{definition.identifier}' is already "
                    f"defined in {first.source_path}"
                ),
                field_name="name",
                value=definition.identifier,
                other_path=first.source_path,
            ))
            return False

        self._registry.entries[definition.identifier] = definition
        return True

    def add_issue(self, issue: Issue) -> None:
        """Record an issue found outside the parse/validate pipeline."""
        if issue.is_error:
            self._registry.errors.append(issue)
        else:
            self._registry.warnings.append(issue)

    def build(self) -> Registry:
        """Return the accumulated registry."""
        registry = self._registry
        logger.info(
            "Registry built: %d agent(s), %d error(s), %d warning(s)",
            len(registry.entries),
            len(registry.errors),
            len(registry.warnings),
        )
        return registry


def build_registry(
    documents: Iterable[tuple[Path | str, str]],
    validator: SchemaValidator | None = None,
    list_fields: Iterable[str] = DEFAULT_LIST_FIELDS,
) -> Registry:
    """Build a Registry from ``(source_path, text)`` pairs.

    Inputs are processed in the order given; sort them first if the
    source does not guarantee a stable order.
    """
    builder = RegistryBuilder(validator=validator, list_fields=list_fields)
    for source_path, text in documents:
        builder.add(source_path, text)
    return builder.build()
