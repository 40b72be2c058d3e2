"""
Plan field extraction — lift labeled metadata lines out of plan.md.

Plan documents carry one line per field, for example::

    **Language/Version**: Python 3.12
    **Primary Dependencies**: FastAPI

Only the first line per label counts.  A value containing
``NEEDS CLARIFICATION`` (or a storage value of exactly ``N/A``) is
treated as absent.  Values are otherwise taken verbatim.
"""

from __future__ import annotations

import logging
from pathlib import Path

from agent_context.core.errors import NotFoundError
from agent_context.core.models.plan import PlanFields

logger = logging.getLogger(__name__)

NEEDS_CLARIFICATION = "NEEDS CLARIFICATION"
NOT_APPLICABLE = "N/A"

# field name → exact line prefix
FIELD_PREFIXES: dict[str, str] = {
    "language": "**Language/Version**: ",
    "framework": "**Primary Dependencies**: ",
    "testing": "**Testing**: ",
    "storage": "**Storage**: ",
    "project_type": "**Project Type**: ",
}


def _first_value(lines: list[str], prefix: str) -> str | None:
    for line in lines:
        if line.startswith(prefix):
            return line[len(prefix):]
    return None


def extract_plan_fields(text: str) -> PlanFields:
    """Extract ``PlanFields`` from the full text of a plan document.

    Never raises for missing or malformed fields; they come back empty.
    """
    # Lines end at "\n" only
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    values: dict[str, str] = {}

    for field, prefix in FIELD_PREFIXES.items():
        value = _first_value(lines, prefix)
        if value is None:
            continue
        if NEEDS_CLARIFICATION in value:
            logger.debug("Plan field %s needs clarification, ignoring", field)
            continue
        if field == "storage" and value == NOT_APPLICABLE:
            continue
        values[field] = value

    fields = PlanFields(**values)
    logger.debug("Extracted plan fields: %s", fields.model_dump())
    return fields


def read_plan(path: Path) -> str:
    """Read the plan document.

    Raises:
        NotFoundError: If the plan is missing or unreadable.
    """
    if not path.is_file():
        raise NotFoundError(f"No plan.md found at {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise NotFoundError(f"Cannot read plan {path}: {e}") from e


def load_plan_fields(path: Path) -> PlanFields:
    """Read ``path`` and extract its fields."""
    logger.info("Reading plan from %s", path)
    return extract_plan_fields(read_plan(path))
