"""
Agent targets — the closed set of context files this tool maintains.

Each target is one file consumed by an editor or assistant.  Paths
are relative to the repository root.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from agent_context.core.errors import UnknownTargetError


class AgentTarget(BaseModel):
    """One agent context file."""

    model_config = ConfigDict(frozen=True)

    name: str
    display_name: str
    relative_path: str

    def path(self, repo_root: Path) -> Path:
        """Absolute location of this target inside ``repo_root``."""
        return repo_root / self.relative_path


TARGETS: tuple[AgentTarget, ...] = (
    AgentTarget(name="claude", display_name="Claude Code", relative_path="CLAUDE.md"),
    AgentTarget(name="gemini", display_name="Gemini CLI", relative_path="GEMINI.md"),
    AgentTarget(
        name="copilot",
        display_name="GitHub Copilot",
        relative_path=".github/copilot-instructions.md",
    ),
    AgentTarget(
        name="cursor",
        display_name="Cursor",
        relative_path=".cursor/rules/specify-rules.mdc",
    ),
    AgentTarget(name="roo", display_name="Roo Code", relative_path="AGENTS.md"),
)

DEFAULT_TARGET = "roo"


def target_names() -> list[str]:
    """Known target names, in processing order."""
    return [t.name for t in TARGETS]


def get_target(name: str) -> AgentTarget:
    """Look up a target by name.

    Raises:
        UnknownTargetError: If ``name`` is not one of the known targets.
    """
    for target in TARGETS:
        if target.name == name:
            return target
    raise UnknownTargetError(
        f"Unknown agent type '{name}'. Use: {', '.join(target_names())}."
    )
