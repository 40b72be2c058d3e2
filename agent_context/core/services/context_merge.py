"""
Context merging — refresh an existing agent context file in place.

Three edits, each best-effort:

    ## Active Technologies   append new entries unless an identical line exists
    ## Recent Changes        prepend the current feature, keep the newest 3
    Last updated: <date>     restamp every occurrence with today's date

A section runs from the line after its header up to the first blank
line, or to the end of the document.  A missing header leaves that
section alone.  The Manual Additions block must be removed before
calling ``merge_context`` (see ``manual_section``).
"""

from __future__ import annotations

import datetime as dt
import logging
import re

from agent_context.core.models.plan import PlanFields

logger = logging.getLogger(__name__)

ACTIVE_TECHNOLOGIES = "## Active Technologies"
RECENT_CHANGES = "## Recent Changes"
MAX_RECENT_CHANGES = 3

_LAST_UPDATED_RE = re.compile(r"Last updated: \d{4}-\d{2}-\d{2}")


def _find_section(lines: list[str], header: str) -> tuple[int, int] | None:
    """Return ``(first, stop)`` line indexes of the section body.

    ``lines[first:stop]`` is the body; ``stop`` is the index of the
    terminating blank line or ``len(lines)``.
    """
    for index, line in enumerate(lines):
        if line.rstrip() == header:
            first = index + 1
            stop = first
            while stop < len(lines) and lines[stop].strip():
                stop += 1
            return first, stop
    return None


def technology_entries(fields: PlanFields, branch: str) -> list[str]:
    """Active Technologies lines the current plan contributes."""
    entries = []
    if fields.language:
        entries.append(f"- {fields.tech_entry} ({branch})")
    if fields.storage and fields.storage != "N/A":
        entries.append(f"- {fields.storage} ({branch})")
    return entries


def change_entry(fields: PlanFields, branch: str) -> str:
    """Recent Changes line for the current feature."""
    return f"- {branch}: Added {fields.tech_entry}"


def update_active_technologies(lines: list[str], fields: PlanFields, branch: str) -> list[str]:
    span = _find_section(lines, ACTIVE_TECHNOLOGIES)
    if span is None:
        logger.debug("No '%s' section, skipping", ACTIVE_TECHNOLOGIES)
        return lines

    first, stop = span
    existing = lines[first:stop]
    additions = [
        entry for entry in technology_entries(fields, branch) if entry not in existing
    ]
    if not additions:
        return lines

    logger.info("Adding %d Active Technologies entries", len(additions))
    return lines[:stop] + additions + lines[stop:]


def update_recent_changes(lines: list[str], fields: PlanFields, branch: str) -> list[str]:
    span = _find_section(lines, RECENT_CHANGES)
    if span is None:
        logger.debug("No '%s' section, skipping", RECENT_CHANGES)
        return lines

    first, stop = span
    entries = [line for line in lines[first:stop] if line.strip()]
    entries.insert(0, change_entry(fields, branch))
    dropped = len(entries) - MAX_RECENT_CHANGES
    if dropped > 0:
        logger.debug("Dropping %d old Recent Changes entries", dropped)
    return lines[:first] + entries[:MAX_RECENT_CHANGES] + lines[stop:]


def stamp_last_updated(text: str, today: dt.date) -> str:
    """Replace the date of every ``Last updated: YYYY-MM-DD``."""
    return _LAST_UPDATED_RE.sub(f"Last updated: {today.isoformat()}", text)


def merge_context(
    text: str,
    fields: PlanFields,
    branch: str,
    today: dt.date | None = None,
) -> str:
    """Merge plan fields into existing context file text.

    Args:
        text: Current file content, Manual Additions block removed.
        fields: Extracted plan fields.
        branch: Current branch name.
        today: Date for ``Last updated`` stamps (default: today).

    Returns:
        Updated content, in the document's own line ending (CRLF when
        the input contains any CRLF, LF otherwise).
    """
    today = today or dt.date.today()
    newline = "\r\n" if "\r\n" in text else "\n"

    # Lines end at the newline only
    lines = text.split(newline)
    lines = update_active_technologies(lines, fields, branch)
    lines = update_recent_changes(lines, fields, branch)

    return stamp_last_updated(newline.join(lines), today)
