"""Tests for filesystem discovery and the body linter."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from agentdeck_core.config import (
    AgentdeckConfig,
    DiscoveryConfig,
    LintConfig,
    ValidationConfig,
)
from agentdeck_core.errors import DiscoveryError
from agentdeck_definitions.linter import BodyLinter
from agentdeck_definitions.loader import discover_documents, load_registry
from agentdeck_definitions.types import AgentDefinition, IssueKind

# ── Helpers ──────────────────────────────────────────────────────────


def _write_agent(path: Path, content: str) -> Path:
    """Write an agent document, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


def _agent(name: str, body: str = "You are an agent.\n") -> str:
    return f"---\nname: {name}\ndescription: The {name} agent\n---\n{body}"


@pytest.fixture
def corpus(tmp_path: Path) -> Path:
    """A small agent corpus with nested directories and non-agent files."""
    root = tmp_path / "agents"
    _write_agent(root / "business" / "market-research.md", _agent("market-research"))
    _write_agent(root / "business" / "pricing-strategy.md", _agent("pricing-strategy"))
    _write_agent(root / "engineering" / "frontend.md", _agent("frontend-developer"))
    _write_agent(root / "README.md", "# Agents\n")
    _write_agent(root / "CLAUDE.md", "Maintenance notes\n")
    _write_agent(root / "notes.txt", "not markdown\n")
    _write_agent(root / ".drafts" / "draft.md", _agent("draft"))
    return root


# ── Discovery ────────────────────────────────────────────────────────


class TestDiscoverDocuments:
    """Tests for discover_documents."""

    def test_discovers_recursively_and_sorted(self, corpus: Path) -> None:
        found = discover_documents(corpus)

        relative = [p.relative_to(corpus.resolve()).as_posix() for p in found]
        assert relative == [
            "business/market-research.md",
            "business/pricing-strategy.md",
            "engineering/frontend.md",
        ]

    def test_custom_pattern_and_exclude(self, corpus: Path) -> None:
        config = AgentdeckConfig(
            discovery=DiscoveryConfig(pattern="*.md", exclude=["frontend.md"]),
        )

        names = [p.name for p in discover_documents(corpus, config)]

        assert "frontend.md" not in names
        assert "README.md" in names
        assert "CLAUDE.md" in names

    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(DiscoveryError, match="not a directory"):
            discover_documents(tmp_path / "nope")

    def test_root_is_a_file(self, tmp_path: Path) -> None:
        path = _write_agent(tmp_path / "single.md", _agent("single"))

        with pytest.raises(DiscoveryError):
            discover_documents(path)


# ── Loading ──────────────────────────────────────────────────────────


class TestLoadRegistry:
    """Tests for load_registry."""

    def test_loads_corpus(self, corpus: Path) -> None:
        registry = load_registry(corpus)

        assert registry.ok
        assert sorted(registry.entries) == [
            "frontend-developer",
            "market-research",
            "pricing-strategy",
        ]
        agent = registry.entries["market-research"]
        assert agent.source_path.name == "market-research.md"
        assert agent.body_content == "You are an agent.\n"

    def test_first_path_wins_on_duplicates(self, tmp_path: Path) -> None:
        root = tmp_path / "agents"
        first = _write_agent(root / "a" / "lead.md", _agent("lead"))
        second = _write_agent(root / "b" / "lead.md", _agent("lead"))

        registry = load_registry(root)

        assert registry.entries["lead"].source_path == first.resolve()
        (error,) = registry.errors
        assert error.kind is IssueKind.DUPLICATE_IDENTIFIER
        assert error.source_path == second.resolve()
        assert error.other_path == first.resolve()

    def test_bad_file_is_isolated(self, corpus: Path) -> None:
        _write_agent(corpus / "broken.md", "---\nname: broken\n")

        registry = load_registry(corpus)

        assert len(registry) == 3
        (error,) = registry.errors
        assert error.kind is IssueKind.MALFORMED_HEADER
        assert error.source_path.name == "broken.md"

    def test_unreadable_file_is_recorded(self, corpus: Path) -> None:
        (corpus / "latin1.md").write_bytes(b"---\nname: caf\xe9\n---\n")

        registry = load_registry(corpus)

        assert len(registry) == 3
        (error,) = registry.errors
        assert error.kind is IssueKind.UNREADABLE_FILE
        assert error.source_path.name == "latin1.md"

    def test_config_extra_tools(self, tmp_path: Path) -> None:
        root = tmp_path / "agents"
        _write_agent(
            root / "a.md",
            "---\nname: a\ndescription: d\ntools: Read, Figma\n---\n",
        )

        plain = load_registry(root)
        extended = load_registry(
            root,
            AgentdeckConfig(validation=ValidationConfig(extra_tools=["Figma"])),
        )

        assert [w.value for w in plain.warnings] == ["Figma"]
        assert extended.warnings == []

    def test_lint_sections_from_argument(self, tmp_path: Path) -> None:
        root = tmp_path / "agents"
        _write_agent(root / "a.md", _agent("a", body="## Methodology\n\nSteps.\n"))
        _write_agent(root / "b.md", _agent("b", body="No headings here.\n"))

        registry = load_registry(root, required_sections=["Methodology"])

        assert registry.ok
        (warning,) = registry.warnings
        assert warning.kind is IssueKind.MISSING_SECTION
        assert warning.source_path.name == "b.md"
        assert len(registry) == 2

    def test_lint_sections_from_config(self, tmp_path: Path) -> None:
        root = tmp_path / "agents"
        _write_agent(root / "a.md", _agent("a"))
        config = AgentdeckConfig(lint=LintConfig(required_sections=["Output Format"]))

        registry = load_registry(root, config)

        assert [w.value for w in registry.warnings] == ["Output Format"]

    def test_no_lint_by_default(self, corpus: Path) -> None:
        assert load_registry(corpus).warnings == []


# ── Body Linter ──────────────────────────────────────────────────────


class TestBodyLinter:
    """Tests for BodyLinter."""

    @staticmethod
    def _agent_with_body(body: str) -> AgentDefinition:
        return AgentDefinition(
            identifier="linted",
            description="Linted agent",
            body_content=body,
            source_path=Path("linted.md"),
        )

    def test_heading_match_is_case_insensitive(self) -> None:
        agent = self._agent_with_body("# Role\n\n### output format ##\n")

        issues = BodyLinter(["Role", "Output Format"]).lint(agent)

        assert issues == []

    def test_missing_section(self) -> None:
        agent = self._agent_with_body("# Role\n\nText mentioning Methodology.\n")

        (issue,) = BodyLinter(["Methodology"]).lint(agent)

        assert issue.kind is IssueKind.MISSING_SECTION
        assert issue.value == "Methodology"
        assert issue.source_path == Path("linted.md")
        assert "linted" in issue.message

    def test_hash_without_space_is_not_a_heading(self) -> None:
        agent = self._agent_with_body("#Methodology\n")

        assert len(BodyLinter(["Methodology"]).lint(agent)) == 1

    def test_heading_inside_code_fence_is_ignored(self) -> None:
        body = textwrap.dedent("""\
            # Role

            Example layout:

            ```markdown
            ## Methodology
            ```
        """)
        agent = self._agent_with_body(body)

        (issue,) = BodyLinter(["Methodology", "Role"]).lint(agent)

        assert issue.value == "Methodology"

    def test_heading_after_tilde_fence_counts(self) -> None:
        body = "~~~~\n## Methodology\n```\n~~~~\n## Methodology\n"
        agent = self._agent_with_body(body)

        assert BodyLinter(["Methodology"]).lint(agent) == []

    def test_no_required_sections(self) -> None:
        assert BodyLinter(["", "  "]).lint(self._agent_with_body("")) == []
