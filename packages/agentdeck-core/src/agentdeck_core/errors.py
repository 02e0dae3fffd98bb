from __future__ import annotations


class AgentdeckError(Exception):
    """Base exception for all agentdeck errors."""


# ── Config Errors ────────────────────────────────────────────────────

class ConfigError(AgentdeckError):
    """Invalid or unreadable configuration."""


# ── Discovery Errors ─────────────────────────────────────────────────

class DiscoveryError(AgentdeckError):
    """The discovery root does not exist or is not a directory."""


# ── Definition Errors ────────────────────────────────────────────────

class DefinitionError(AgentdeckError):
    """Base for agent-definition errors."""


class FrontmatterError(DefinitionError):
    """The frontmatter header could not be extracted or parsed."""


class EmptyDocumentError(FrontmatterError):
    """The document is empty or contains only whitespace."""


class MalformedHeaderError(FrontmatterError):
    """The header delimiters are missing or the header is not a flat mapping."""
