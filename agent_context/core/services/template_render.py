"""
Template instantiation — build a brand-new agent context file.

Used when a target does not exist yet.  Each placeholder is replaced
at its first occurrence only, so repeated literal text elsewhere in
the template is left alone.
"""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path

from agent_context.core.errors import FileAccessError, TemplateMissingError
from agent_context.core.models.plan import PlanFields

logger = logging.getLogger(__name__)

PROJECT_NAME = "[PROJECT NAME]"
DATE = "[DATE]"
TECHNOLOGIES = "[EXTRACTED FROM ALL PLAN.MD FILES]"
STRUCTURE = "[ACTUAL STRUCTURE FROM PLANS]"
COMMANDS = "[ONLY COMMANDS FOR ACTIVE TECHNOLOGIES]"
CONVENTIONS = "[LANGUAGE-SPECIFIC, ONLY FOR LANGUAGES IN USE]"
RECENT_CHANGES = "[LAST 3 FEATURES AND WHAT THEY ADDED]"

WEB_STRUCTURE = "backend/\nfrontend/\ntests/"
DEFAULT_STRUCTURE = "src/\ntests/"

# Checked in order; first substring match on the language wins
LANGUAGE_COMMANDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("Python",), "cd src && pytest && ruff check ."),
    (("Rust",), "cargo test && cargo clippy"),
    (("JavaScript", "TypeScript"), "npm test && npm run lint"),
)


def project_structure(project_type: str) -> str:
    """Directory layout lines for the project type."""
    return WEB_STRUCTURE if "web" in project_type else DEFAULT_STRUCTURE


def language_commands(language: str) -> str:
    """Test and lint commands for ``language``.

    Unknown languages get a comment for a human to fill in.
    """
    for markers, commands in LANGUAGE_COMMANDS:
        if any(marker in language for marker in markers):
            return commands
    return f"# Add commands for {language}"


def testing_conventions(fields: PlanFields) -> str:
    if fields.testing:
        return f"{fields.language}: {fields.testing}"
    return f"{fields.language}: Follow standard conventions"


def render_template(
    template: str,
    fields: PlanFields,
    branch: str,
    project_name: str,
    today: dt.date | None = None,
) -> str:
    """Substitute plan values into the template text.

    Args:
        template: Template document text.
        fields: Extracted plan fields.
        branch: Current branch name.
        project_name: Repository display name.
        today: Date to stamp (default: today).

    Returns:
        Full content for the new target file.
    """
    today = today or dt.date.today()

    substitutions = (
        (PROJECT_NAME, project_name),
        (DATE, today.isoformat()),
        (TECHNOLOGIES, f"- {fields.tech_entry} ({branch})"),
        (STRUCTURE, project_structure(fields.project_type)),
        (COMMANDS, language_commands(fields.language)),
        (CONVENTIONS, testing_conventions(fields)),
        (RECENT_CHANGES, f"- {branch}: Added {fields.tech_entry}"),
    )

    content = template
    for placeholder, value in substitutions:
        if placeholder not in content:
            logger.debug("Template has no %s placeholder", placeholder)
            continue
        content = content.replace(placeholder, value, 1)
    return content


def read_template(path: Path) -> str:
    """Read the template document.

    Raises:
        TemplateMissingError: If the template does not exist.
        FileAccessError: If it exists but cannot be read.
    """
    if not path.is_file():
        raise TemplateMissingError(f"Template not found at {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(f"Cannot read template {path}: {e}") from e
