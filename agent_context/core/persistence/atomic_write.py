"""
Atomic text writes for agent context files.

Writes go to a temp file in the target's directory and are then
renamed over the target, so a crash mid-write leaves the original
file untouched and readers never see a half-written file.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from agent_context.core.errors import FileAccessError

logger = logging.getLogger(__name__)


def write_text_atomic(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` (atomic write).

    Missing parent directories are created.

    Raises:
        FileAccessError: If the temp file cannot be written or renamed.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
                fh.write(content)
            # mkstemp creates 0600; keep the mode readers expect
            mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else 0o644
            tmp.chmod(mode)
            tmp.replace(path)
            logger.debug("Wrote %s (%d bytes)", path, len(content))
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error("Failed to write %s: %s", path, e)
        raise FileAccessError(f"Cannot write {path}: {e}") from e
