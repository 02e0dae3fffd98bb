from __future__ import annotations

import dataclasses
import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from agentdeck_core.errors import ConfigError

logger = logging.getLogger("agentdeck.config")

ROOT_ENV_VAR = "AGENTDECK_ROOT"


def _load_toml(path: Path, *, strict: bool = False) -> dict:
    """Load a TOML file, returning empty dict if missing.

    With *strict*, an unreadable or malformed file raises ConfigError;
    otherwise it is logged and treated as empty.
    """
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        if strict:
            msg = f"Invalid config file {path}: {exc}"
            raise ConfigError(msg) from exc
        logger.warning("Ignoring unreadable config file %s: %s", path, exc)
        return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base (1 level deep for TOML sections)."""
    merged = dict(base)
    for key, val in override.items():
        if (
            key in merged
            and isinstance(merged[key], dict)
            and isinstance(val, dict)
        ):
            merged[key] = {**merged[key], **val}
        else:
            merged[key] = val
    return merged


@dataclass(frozen=True, slots=True)
class DiscoveryConfig:
    root: str = "."
    pattern: str = "*.md"
    exclude: list[str] = field(
        default_factory=lambda: ["README.md", "CLAUDE.md"]
    )


@dataclass(frozen=True, slots=True)
class ValidationConfig:
    extra_tools: list[str] = field(default_factory=list)
    list_fields: list[str] = field(default_factory=lambda: ["tools"])
    strict: bool = False  # warnings fail `validate`


@dataclass(frozen=True, slots=True)
class LintConfig:
    required_sections: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level: str = "WARNING"
    json: bool = False


@dataclass(frozen=True, slots=True)
class AgentdeckConfig:
    """Top-level configuration, parsed from agentdeck.toml."""
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    lint: LintConfig = field(default_factory=LintConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_toml(
        cls, path: Path | str = "agentdeck.toml"
    ) -> AgentdeckConfig:
        """Load a single config file.

        Raises:
            ConfigError: If the file exists but is not valid TOML or a
                section has the wrong shape.
        """
        path = Path(path)
        raw = _load_toml(path, strict=True)
        return cls._from_raw(raw)

    @classmethod
    def load(
        cls, project_dir: Path | str | None = None
    ) -> AgentdeckConfig:
        """Load config with global → project → environment layering.

        Resolution order (later wins):
        1. Built-in defaults
        2. ~/.agentdeck/config.toml (global)
        3. .agentdeck/config.toml or agentdeck.toml (project)
        4. ``AGENTDECK_ROOT`` for the discovery root

        An unreadable layer is skipped, but a value of the wrong type in
        the merged result raises ConfigError.
        """
        global_path = Path.home() / ".agentdeck" / "config.toml"

        project_dir = (
            Path.cwd() if project_dir is None else Path(project_dir)
        )

        # Project config: .agentdeck/config.toml takes priority
        project_path = project_dir / ".agentdeck" / "config.toml"
        if not project_path.exists():
            project_path = project_dir / "agentdeck.toml"

        global_raw = _load_toml(global_path)
        project_raw = _load_toml(project_path)
        merged = _deep_merge(global_raw, project_raw)

        config = cls._from_raw(merged)

        env_root = os.environ.get(ROOT_ENV_VAR)
        if env_root:
            config = config.with_root(env_root)
        return config

    def with_root(self, root: Path | str) -> AgentdeckConfig:
        """Return a copy with the discovery root replaced."""
        discovery = dataclasses.replace(self.discovery, root=str(root))
        return dataclasses.replace(self, discovery=discovery)

    @classmethod
    def _from_raw(cls, raw: dict) -> AgentdeckConfig:
        """Build AgentdeckConfig from a raw TOML dict."""

        def _section(name: str) -> dict:
            section = raw.get(name, {})
            if not isinstance(section, dict):
                msg = f"Config section [{name}] must be a table"
                raise ConfigError(msg)
            return section

        def _pick(name: str, dc: type) -> dict:
            fields = dc.__dataclass_fields__
            picked = {
                k: v for k, v in _section(name).items() if k in fields
            }
            for key, value in picked.items():
                _check_type(f"[{name}].{key}", value, _default_of(fields[key]))
            return picked

        return cls(
            discovery=DiscoveryConfig(**_pick("discovery", DiscoveryConfig)),
            validation=ValidationConfig(
                **_pick("validation", ValidationConfig)
            ),
            lint=LintConfig(**_pick("lint", LintConfig)),
            logging=LoggingConfig(**_pick("logging", LoggingConfig)),
        )


def _default_of(f: dataclasses.Field) -> object:
    if f.default_factory is not dataclasses.MISSING:
        return f.default_factory()
    return f.default


def _check_type(key: str, value: object, default: object) -> None:
    """Raise ConfigError unless *value* has the same shape as *default*.

    Every field is a str, a bool, or a list of str.
    """
    if isinstance(default, list):
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return
        expected = "a list of strings"
    elif isinstance(default, bool):
        if isinstance(value, bool):
            return
        expected = "true or false"
    else:
        if isinstance(value, str):
            return
        expected = "a string"
    msg = f"Config key {key} must be {expected}, got {value!r}"
    raise ConfigError(msg)
