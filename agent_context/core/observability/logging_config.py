"""
Logging setup for the agent-context CLI.

Log records go to stderr so they never mix with the summary printed
on stdout.  The console level is the first of:

    --debug  >  --verbose  >  --quiet  >  AGENT_CONTEXT_LOG_LEVEL  >  WARNING

Setting AGENT_CONTEXT_LOG_FILE adds a file handler, at
AGENT_CONTEXT_LOG_FILE_LEVEL when given, else at the console level.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

ENV_LEVEL = "AGENT_CONTEXT_LOG_LEVEL"
ENV_FILE = "AGENT_CONTEXT_LOG_FILE"
ENV_FILE_LEVEL = "AGENT_CONTEXT_LOG_FILE_LEVEL"

# (highest level, format); first match wins, messages alone above INFO
_CONSOLE_FORMATS = (
    (logging.DEBUG, "%(levelname)s %(name)s:%(lineno)d %(message)s"),
    (logging.INFO, "[%(name)s] %(message)s"),
)
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def level_from_name(name: str | None, default: int = logging.WARNING) -> int:
    """Numeric level for a name like ``"debug"``; ``default`` if unknown."""
    numeric = getattr(logging, name.upper(), None) if name else None
    return numeric if isinstance(numeric, int) else default


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Console level from the CLI flags, falling back to the environment."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    environ = os.environ if environ is None else environ
    return level_from_name(environ.get(ENV_LEVEL))


def configure_logging(level: int, environ: Mapping[str, str] | None = None) -> None:
    """Install the stderr handler (and optional file handler) on the root logger."""
    environ = os.environ if environ is None else environ

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    fmt = next((f for ceiling, f in _CONSOLE_FORMATS if level <= ceiling), "%(message)s")
    console.setFormatter(logging.Formatter(fmt))
    handlers: list[logging.Handler] = [console]

    log_file = environ.get(ENV_FILE)
    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(level_from_name(environ.get(ENV_FILE_LEVEL), default=level))
        fh.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(fh)

    root = logging.getLogger()
    root.handlers[:] = handlers
    root.setLevel(min(h.level for h in handlers))
