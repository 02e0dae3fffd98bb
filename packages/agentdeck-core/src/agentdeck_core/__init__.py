"""agentdeck core: shared config, errors, and logging."""
from __future__ import annotations

from agentdeck_core._version import __version__
from agentdeck_core.config import (
    AgentdeckConfig,
    DiscoveryConfig,
    LintConfig,
    LoggingConfig,
    ValidationConfig,
)
from agentdeck_core.errors import (
    AgentdeckError,
    ConfigError,
    DefinitionError,
    DiscoveryError,
    EmptyDocumentError,
    FrontmatterError,
    MalformedHeaderError,
)
from agentdeck_core.logging import get_logger, setup_logging

__all__ = [
    # Config
    "AgentdeckConfig",
    # Errors
    "AgentdeckError",
    "ConfigError",
    "DefinitionError",
    "DiscoveryConfig",
    "DiscoveryError",
    "EmptyDocumentError",
    "FrontmatterError",
    "LintConfig",
    "LoggingConfig",
    "MalformedHeaderError",
    "ValidationConfig",
    # Version
    "__version__",
    # Logging
    "get_logger",
    "setup_logging",
]
