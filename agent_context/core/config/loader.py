"""
Configuration loader — reads .agent-context.yml into settings.

The file is optional.  When it is absent every setting keeps its
default; when it is present it must be a YAML mapping that validates
against ``AgentContextSettings``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from agent_context.core.errors import ConfigError
from agent_context.core.models.target import DEFAULT_TARGET, target_names

logger = logging.getLogger(__name__)

# Default config filename (relative to the repository root)
SETTINGS_FILE = ".agent-context.yml"


class AgentContextSettings(BaseModel):
    """Per-repository settings."""

    model_config = ConfigDict(extra="forbid")

    specs_dir: str = "specs"
    template: str = "templates/agent-file-template.md"
    project_name: str = ""
    default_target: str = DEFAULT_TARGET

    @field_validator("default_target")
    @classmethod
    def _known_target(cls, value: str) -> str:
        if value not in target_names():
            raise ValueError(
                f"unknown target '{value}' (expected one of: {', '.join(target_names())})"
            )
        return value

    def plan_path(self, repo_root: Path, branch: str) -> Path:
        """Location of the plan document for ``branch``."""
        return repo_root / self.specs_dir / branch / "plan.md"

    def template_path(self, repo_root: Path) -> Path:
        """Location of the template used for new targets."""
        return repo_root / self.template

    def display_name(self, repo_root: Path) -> str:
        """Project name substituted for ``[PROJECT NAME]``."""
        return self.project_name or repo_root.resolve().name


def settings_path(repo_root: Path) -> Path:
    """Get the default settings file path for a repository."""
    return repo_root / SETTINGS_FILE


def load_settings(repo_root: Path, path: Path | None = None) -> AgentContextSettings:
    """Load settings for a repository.

    Args:
        repo_root: Repository root directory.
        path: Explicit settings file. If None, ``.agent-context.yml``
            in ``repo_root`` is used when it exists.

    Returns:
        Validated settings (defaults when no file is present).

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = settings_path(repo_root)
        if not path.is_file():
            logger.debug("No %s in %s, using defaults", SETTINGS_FILE, repo_root)
            return AgentContextSettings()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    # An empty file is the same as no file
    if data is None:
        return AgentContextSettings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = AgentContextSettings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
