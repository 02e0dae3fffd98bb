"""Body linter: optional content checks over an agent's instruction body."""
from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from agentdeck_definitions.types import Issue, IssueKind

if TYPE_CHECKING:
    from agentdeck_definitions.types import AgentDefinition

_HEADING_PATTERN = re.compile(r"^ {0,3}#{1,6}[ \t]+(.+?)[ \t#\r]*$", re.MULTILINE)
_FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")


def _outside_fences(body: str) -> str:
    """Return *body* with fenced code blocks removed."""
    kept: list[str] = []
    fence = ""
    for line in body.splitlines():
        match = _FENCE_PATTERN.match(line)
        if not fence:
            if match:
                fence = match.group(1)
            else:
                kept.append(line)
        elif (
            match
            and match.group(1)[0] == fence[0]
            and len(match.group(1)) >= len(fence)
            and not match.group(2).strip()
        ):
            fence = ""
    return "\n".join(kept)


class BodyLinter:
    """Checks that an agent body contains a set of markdown headings.

    Runs separately from schema validation and only emits warnings.
    """

    def __init__(self, required_sections: Iterable[str]) -> None:
        self._required = [s.strip() for s in required_sections if s.strip()]

    def lint(self, agent: AgentDefinition) -> list[Issue]:
        text = _outside_fences(agent.body_content)
        headings = {
            match.group(1).casefold()
            for match in _HEADING_PATTERN.finditer(text)
        }
        return [
            Issue(
                kind=IssueKind.MISSING_SECTION,
                source_path=agent.source_path,
                message=f"Agent '{agent.identifier}' has no '{section}' section",
                value=section,
            )
            for section in self._required
            if section.casefold() not in headings
        ]
