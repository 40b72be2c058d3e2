"""
Git lookups — repository root and current branch.

Uses the git CLI.  Both lookups can be bypassed from the CLI with
``--repo-root`` and ``--branch``.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from agent_context.core.errors import GitError

logger = logging.getLogger(__name__)


def run_git(
    *args: str,
    cwd: Path,
    timeout: int = 15,
) -> subprocess.CompletedProcess[str]:
    """Run a git command and return the result."""
    if shutil.which("git") is None:
        raise GitError("git executable not found on PATH")
    try:
        return subprocess.run(
            ["git", *args],
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise GitError(f"git {args[0]} failed: {e}") from e


def repo_root(start: Path | None = None) -> Path:
    """Top-level directory of the repository containing ``start``.

    Raises:
        GitError: If ``start`` is not inside a git work tree.
    """
    r = run_git("rev-parse", "--show-toplevel", cwd=start or Path.cwd())
    if r.returncode != 0:
        raise GitError("Not inside a git repository")
    root = Path(r.stdout.strip()).resolve()
    logger.debug("Repository root: %s", root)
    return root


def current_branch(root: Path) -> str:
    """Name of the checked-out branch.

    Raises:
        GitError: If the lookup fails or HEAD is detached.
    """
    # symbolic-ref also works on a branch with no commits yet
    r = run_git("symbolic-ref", "--quiet", "--short", "HEAD", cwd=root)
    branch = r.stdout.strip()
    if r.returncode != 0 or not branch:
        raise GitError("Detached HEAD: pass --branch explicitly")
    logger.debug("Current branch: %s", branch)
    return branch
