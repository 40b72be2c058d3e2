"""
Update use case — refresh agent context files from the branch's plan.md.

Flow:
    1. Resolve requested target names (unknown name → nothing touched)
    2. Read plan.md once; its fields are shared by every target
    3. Per target: create from the template, or merge into the existing
       file around its Manual Additions block
    4. Atomic write of each result

Targets are processed in order and the first fatal error stops the
run.  Files already written stay written.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from pathlib import Path

from agent_context.core.config.loader import AgentContextSettings
from agent_context.core.errors import AgentContextError, FileAccessError
from agent_context.core.models.plan import PlanFields
from agent_context.core.models.target import TARGETS, AgentTarget, get_target
from agent_context.core.persistence.atomic_write import write_text_atomic
from agent_context.core.services.context_merge import merge_context
from agent_context.core.services.manual_section import (
    append_manual_block,
    find_manual_block,
    remove_manual_block,
    strip_stale_sentinels,
)
from agent_context.core.services.plan_fields import load_plan_fields
from agent_context.core.services.template_render import read_template, render_template

logger = logging.getLogger(__name__)


@dataclass
class TargetOutcome:
    """What happened to one target."""

    target: AgentTarget
    path: Path
    action: str  # "created" | "updated"
    manual_preserved: bool = False
    written: bool = True

    def to_dict(self) -> dict:
        return {
            "name": self.target.name,
            "display_name": self.target.display_name,
            "path": str(self.path),
            "action": self.action,
            "manual_preserved": self.manual_preserved,
            "written": self.written,
        }


@dataclass
class UpdateResult:
    """Result of an update run."""

    branch: str = ""
    plan_path: Path | None = None
    fields: PlanFields | None = None
    outcomes: list[TargetOutcome] = field(default_factory=list)
    created_default: bool = False
    dry_run: bool = False
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def summary(self) -> list[str]:
        """Human-readable lines describing the fields that were applied."""
        lines: list[str] = []
        if self.fields is None:
            return lines
        if self.fields.language:
            lines.append(f"Added language: {self.fields.language}")
        if self.fields.framework:
            lines.append(f"Added framework: {self.fields.framework}")
        if self.fields.storage and self.fields.storage != "N/A":
            lines.append(f"Added database: {self.fields.storage}")
        if self.fields.testing:
            lines.append(f"Testing updates: {self.fields.testing}")
        return lines

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict = {
            "branch": self.branch,
            "plan_path": str(self.plan_path) if self.plan_path else None,
            "fields": self.fields.model_dump() if self.fields else None,
            "targets": [o.to_dict() for o in self.outcomes],
            "created_default": self.created_default,
            "dry_run": self.dry_run,
            "summary": self.summary(),
        }
        if self.error:
            result["error"] = self.error
            result["error_type"] = self.error_type
        return result


def resolve_targets(
    names: list[str],
    repo_root: Path,
    default_target: str,
) -> tuple[list[AgentTarget], bool]:
    """Pick the targets to process.

    Explicit names are validated up front.  With no names, every target
    whose file exists is used; if none exist, only ``default_target``.

    Returns:
        ``(targets, created_default)``

    Raises:
        UnknownTargetError: If any name is not a known target.
    """
    if names:
        return [get_target(name) for name in names], False

    existing = [t for t in TARGETS if t.path(repo_root).is_file()]
    if existing:
        return existing, False

    logger.info("No existing agent context files, defaulting to %s", default_target)
    return [get_target(default_target)], True


def build_target_content(
    target: AgentTarget,
    repo_root: Path,
    fields: PlanFields,
    branch: str,
    settings: AgentContextSettings,
    today: dt.date | None = None,
) -> tuple[str, TargetOutcome]:
    """Compute the new content of one target without writing it.

    Raises:
        TemplateMissingError: If the target must be created and there is
            no template.
        FileAccessError: If the existing target cannot be read.
    """
    path = target.path(repo_root)

    if not path.is_file():
        template = read_template(settings.template_path(repo_root))
        content = render_template(
            template,
            fields,
            branch=branch,
            project_name=settings.display_name(repo_root),
            today=today,
        )
        return content, TargetOutcome(target=target, path=path, action="created")

    try:
        current = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(f"Cannot read {path}: {e}") from e

    block = find_manual_block(current)
    body = remove_manual_block(current, block) if block else current
    content = merge_context(body, fields, branch, today=today)
    if block:
        content = append_manual_block(strip_stale_sentinels(content), block)

    outcome = TargetOutcome(
        target=target,
        path=path,
        action="updated",
        manual_preserved=block is not None,
    )
    return content, outcome


def update_target(
    target: AgentTarget,
    repo_root: Path,
    fields: PlanFields,
    branch: str,
    settings: AgentContextSettings,
    today: dt.date | None = None,
    dry_run: bool = False,
) -> TargetOutcome:
    """Create or merge one target and write it atomically."""
    logger.info("Updating %s context file: %s", target.display_name, target.path(repo_root))
    content, outcome = build_target_content(
        target, repo_root, fields, branch, settings, today=today,
    )
    if dry_run:
        outcome.written = False
        return outcome
    write_text_atomic(outcome.path, content)
    return outcome


def run_update(
    agents: list[str] | None,
    *,
    repo_root: Path,
    branch: str,
    settings: AgentContextSettings | None = None,
    today: dt.date | None = None,
    dry_run: bool = False,
) -> UpdateResult:
    """Update the requested agent context files.

    Args:
        agents: Target names; empty or None means all existing targets
            (or the default target when none exist).
        repo_root: Repository root.
        branch: Current branch name, which locates the plan.
        settings: Repository settings (default: built-in defaults).
        today: Date to stamp (default: today).
        dry_run: Compute results without writing files.

    Returns:
        UpdateResult.  Fatal errors are reported in ``error`` rather than
        raised; ``outcomes`` lists the targets handled before the error.
    """
    settings = settings or AgentContextSettings()
    result = UpdateResult(branch=branch, dry_run=dry_run)
    result.plan_path = settings.plan_path(repo_root, branch)

    try:
        targets, result.created_default = resolve_targets(
            list(agents or []), repo_root, settings.default_target,
        )
        result.fields = load_plan_fields(result.plan_path)

        for target in targets:
            result.outcomes.append(
                update_target(
                    target,
                    repo_root,
                    result.fields,
                    branch,
                    settings,
                    today=today,
                    dry_run=dry_run,
                )
            )
    except AgentContextError as e:
        logger.debug("Update aborted: %s", e)
        result.error = str(e)
        result.error_type = type(e).__name__
        return result

    logger.info("Updated %d target(s) for %s", len(result.outcomes), branch)
    return result


def plan_fields_for(
    repo_root: Path,
    branch: str,
    settings: AgentContextSettings | None = None,
) -> tuple[Path, PlanFields]:
    """Read the plan of ``branch`` and return its path and fields.

    Raises:
        NotFoundError: If the plan is missing.
    """
    settings = settings or AgentContextSettings()
    plan_path = settings.plan_path(repo_root, branch)
    return plan_path, load_plan_fields(plan_path)
