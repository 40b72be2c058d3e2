"""
Shared test fixtures and configuration.
"""

import datetime as dt
import textwrap
from pathlib import Path

import pytest

BRANCH = "001-user-auth"
TODAY = dt.date(2025, 3, 14)

TEMPLATE = textwrap.dedent("""\
    # [PROJECT NAME] Development Guidelines

    Auto-generated from all feature plans. Last updated: [DATE]

    ## Active Technologies
    [EXTRACTED FROM ALL PLAN.MD FILES]

    ## Project Structure
    ```
    [ACTUAL STRUCTURE FROM PLANS]
    ```

    ## Commands
    [ONLY COMMANDS FOR ACTIVE TECHNOLOGIES]

    ## Code Style
    [LANGUAGE-SPECIFIC, ONLY FOR LANGUAGES IN USE]

    ## Recent Changes
    [LAST 3 FEATURES AND WHAT THEY ADDED]

    <!-- MANUAL ADDITIONS START -->
    <!-- MANUAL ADDITIONS END -->
""")

PLAN = textwrap.dedent("""\
    # Implementation Plan: User Auth

    ## Technical Context

    **Language/Version**: Python 3.12
    **Primary Dependencies**: FastAPI
    **Storage**: PostgreSQL
    **Testing**: pytest
    **Target Platform**: Linux server
    **Project Type**: web
""")


@pytest.fixture
def today() -> dt.date:
    """Fixed date stamped into generated files."""
    return TODAY


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """A repository root with a template and a plan for ``BRANCH``."""
    root = tmp_path / "demo-repo"
    (root / "templates").mkdir(parents=True)
    (root / "templates" / "agent-file-template.md").write_text(TEMPLATE, encoding="utf-8")
    write_plan(root, PLAN)
    return root


def write_plan(root: Path, text: str, branch: str = BRANCH) -> Path:
    """Write ``plan.md`` for ``branch`` under ``root``."""
    plan = root / "specs" / branch / "plan.md"
    plan.parent.mkdir(parents=True, exist_ok=True)
    plan.write_text(text, encoding="utf-8")
    return plan
