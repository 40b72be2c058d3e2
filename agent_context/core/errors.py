"""
Error taxonomy — every fatal condition the tool can report.

Extraction and merging never raise for a malformed or missing field;
only file-level, name-resolution, VCS and configuration failures end
up here.  The CLI catches ``AgentContextError`` and prints
``ERROR: <message>`` on stderr.
"""

from __future__ import annotations


class AgentContextError(Exception):
    """Base class for errors surfaced to the user."""


class NotFoundError(AgentContextError):
    """Raised when the plan document for the current branch is absent."""


class TemplateMissingError(AgentContextError):
    """Raised when a target must be created but the template is absent."""


class UnknownTargetError(AgentContextError):
    """Raised when a requested target name is not in the known set."""


class FileAccessError(AgentContextError):
    """Raised when a target or template cannot be read or written."""


class GitError(AgentContextError):
    """Raised when the repository root or branch cannot be determined."""


class ConfigError(AgentContextError):
    """Raised when the settings file is present but invalid."""
