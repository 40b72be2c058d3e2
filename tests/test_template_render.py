"""
Tests for template instantiation of new agent context files.
"""

import datetime as dt
from pathlib import Path

import pytest

from conftest import TEMPLATE
from agent_context.core.errors import TemplateMissingError
from agent_context.core.models.plan import PlanFields
from agent_context.core.services.template_render import (
    language_commands,
    project_structure,
    read_template,
    render_template,
)

DAY = dt.date(2025, 3, 14)


def _render(fields: PlanFields, template: str = TEMPLATE, branch: str = "002-api") -> str:
    return render_template(template, fields, branch=branch, project_name="demo", today=DAY)


class TestRenderTemplate:
    """Tests for render_template()."""

    def test_full_render(self):
        fields = PlanFields(
            language="Python 3.12",
            framework="FastAPI",
            testing="pytest",
            project_type="web",
        )
        content = _render(fields)
        assert content.startswith("# demo Development Guidelines\n")
        assert "Last updated: 2025-03-14" in content
        assert "## Active Technologies\n- Python 3.12 + FastAPI (002-api)\n" in content
        assert "```\nbackend/\nfrontend/\ntests/\n```" in content
        assert "## Commands\ncd src && pytest && ruff check .\n" in content
        assert "## Code Style\nPython 3.12: pytest\n" in content
        assert "## Recent Changes\n- 002-api: Added Python 3.12 + FastAPI\n" in content
        assert "[DATE]" not in content

    def test_rust_commands(self):
        """A Rust plan resolves the commands placeholder to cargo."""
        content = _render(PlanFields(language="Rust 1.75", framework="tokio"))
        assert "## Commands\ncargo test && cargo clippy\n" in content
        assert "- Rust 1.75 + tokio (002-api)" in content

    def test_single_project_structure(self):
        content = _render(PlanFields(language="Go", project_type="single"))
        assert "```\nsrc/\ntests/\n```" in content

    def test_absent_language_not_special_cased(self):
        content = _render(PlanFields())
        assert "- " + " + " + " (002-api)" in content
        assert "## Code Style\n: Follow standard conventions\n" in content
        assert "# Add commands for \n" in content

    def test_testing_default_convention(self):
        content = _render(PlanFields(language="Go 1.22"))
        assert "Go 1.22: Follow standard conventions" in content

    def test_first_occurrence_only(self):
        template = "[PROJECT NAME] and [PROJECT NAME]\n"
        assert _render(PlanFields(), template=template) == "demo and [PROJECT NAME]\n"

    def test_template_without_placeholders(self):
        assert _render(PlanFields(language="Python"), template="plain\n") == "plain\n"


class TestLanguageCommands:
    """Tests for language_commands()."""

    @pytest.mark.parametrize(
        "language, expected",
        [
            ("Python 3.12", "cd src && pytest && ruff check ."),
            ("Rust 1.75", "cargo test && cargo clippy"),
            ("JavaScript (Node 20)", "npm test && npm run lint"),
            ("TypeScript 5.4", "npm test && npm run lint"),
            ("Kotlin 1.9", "# Add commands for Kotlin 1.9"),
            ("", "# Add commands for "),
        ],
    )
    def test_commands(self, language: str, expected: str):
        assert language_commands(language) == expected

    def test_match_is_case_sensitive(self):
        assert language_commands("python") == "# Add commands for python"


class TestProjectStructure:
    """Tests for project_structure()."""

    def test_web_substring(self):
        assert project_structure("web application") == "backend/\nfrontend/\ntests/"

    def test_other(self):
        assert project_structure("mobile") == "src/\ntests/"
        assert project_structure("") == "src/\ntests/"


class TestReadTemplate:
    """Tests for read_template()."""

    def test_missing_template_raises(self, tmp_path: Path):
        with pytest.raises(TemplateMissingError, match="Template not found"):
            read_template(tmp_path / "templates" / "agent-file-template.md")

    def test_reads_template(self, tmp_path: Path):
        path = tmp_path / "t.md"
        path.write_text("# [PROJECT NAME]\n", encoding="utf-8")
        assert read_template(path) == "# [PROJECT NAME]\n"
