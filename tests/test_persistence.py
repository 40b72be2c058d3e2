"""
Tests for atomic writes of agent context files.
"""

import stat
from pathlib import Path

import pytest

from agent_context.core.errors import FileAccessError
from agent_context.core.persistence.atomic_write import write_text_atomic


class TestWriteTextAtomic:
    """Tests for write_text_atomic()."""

    def test_creates_file(self, tmp_path: Path):
        path = tmp_path / "CLAUDE.md"
        write_text_atomic(path, "# hello\n")
        assert path.read_text() == "# hello\n"

    def test_replaces_existing(self, tmp_path: Path):
        path = tmp_path / "CLAUDE.md"
        path.write_text("old\n")
        write_text_atomic(path, "new\n")
        assert path.read_text() == "new\n"

    def test_creates_directories(self, tmp_path: Path):
        path = tmp_path / ".cursor" / "rules" / "specify-rules.mdc"
        write_text_atomic(path, "x\n")
        assert path.is_file()

    def test_no_temp_files_left(self, tmp_path: Path):
        path = tmp_path / "AGENTS.md"
        write_text_atomic(path, "x\n")
        write_text_atomic(path, "y\n")
        assert [p.name for p in tmp_path.iterdir()] == ["AGENTS.md"]

    def test_newlines_written_verbatim(self, tmp_path: Path):
        path = tmp_path / "AGENTS.md"
        write_text_atomic(path, "a\r\nb\n")
        assert path.read_bytes() == b"a\r\nb\n"

    def test_keeps_existing_mode(self, tmp_path: Path):
        path = tmp_path / "AGENTS.md"
        path.write_text("old\n")
        path.chmod(0o640)
        write_text_atomic(path, "new\n")
        assert stat.S_IMODE(path.stat().st_mode) == 0o640

    def test_new_file_is_not_private(self, tmp_path: Path):
        path = tmp_path / "AGENTS.md"
        write_text_atomic(path, "new\n")
        assert stat.S_IMODE(path.stat().st_mode) == 0o644

    def test_failure_wrapped(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        with pytest.raises(FileAccessError, match="Cannot write"):
            write_text_atomic(blocker / "CLAUDE.md", "x\n")
