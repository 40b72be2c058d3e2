"""
Agent Context Sync — CLI entrypoint.

Usage:
    agent-context --help
    agent-context update
    agent-context update claude
    agent-context show --json
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from agent_context import __version__
from agent_context.core.errors import AgentContextError
from agent_context.core.observability.logging_config import configure_logging, resolve_level


@click.group()
@click.version_option(version=__version__, prog_name="agent-context")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--repo-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Repository root (default: git top-level).",
)
@click.option("--branch", default=None, help="Feature branch (default: current git branch).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Path to settings file (default: <repo-root>/.agent-context.yml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    repo_root: Path | None,
    branch: str | None,
    config_path: Path | None,
) -> None:
    """Agent Context Sync — keep agent context files in step with plan.md."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["repo_root"] = repo_root
    ctx.obj["branch"] = branch
    ctx.obj["config_path"] = config_path

    # ── Logging setup (once, at process start) ──────────────────
    configure_logging(resolve_level(debug=debug, verbose=verbose, quiet=quiet))


def _fail(message: str) -> None:
    click.secho(f"ERROR: {message}", fg="red", err=True)
    sys.exit(1)


def _resolve_repo_root(ctx: click.Context) -> Path:
    """Repo root from --repo-root or git."""
    root: Path | None = ctx.obj.get("repo_root")
    if root is not None:
        return root.resolve()
    from agent_context.core.services.git_ops import repo_root

    return repo_root()


def _resolve_branch(ctx: click.Context, root: Path) -> str:
    """Branch from --branch or git."""
    branch: str | None = ctx.obj.get("branch")
    if branch:
        return branch.strip()
    from agent_context.core.services.git_ops import current_branch

    return current_branch(root)


def _resolve_settings(ctx: click.Context, root: Path):
    from agent_context.core.config.loader import load_settings

    return load_settings(root, ctx.obj.get("config_path"))


# ── Update ──────────────────────────────────────────────────────


@cli.command()
@click.argument("agent", required=False, default="")
@click.option("--dry-run", is_flag=True, help="Compute changes but don't write files.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def update(ctx: click.Context, agent: str, dry_run: bool, as_json: bool) -> None:
    """Update agent context files from the current branch's plan.md.

    AGENT is one of claude, gemini, copilot, cursor, roo.  Without it,
    every existing context file is updated (or AGENTS.md is created
    when none exist).

    Examples:

        agent-context update

        agent-context update claude

        agent-context --branch 001-auth update --dry-run
    """
    from agent_context.core.use_cases.update import run_update

    try:
        root = _resolve_repo_root(ctx)
        branch = _resolve_branch(ctx, root)
        settings = _resolve_settings(ctx, root)
    except AgentContextError as e:
        _fail(str(e))
        return

    result = run_update(
        [agent] if agent else [],
        repo_root=root,
        branch=branch,
        settings=settings,
        dry_run=dry_run,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            sys.exit(1)
        return

    quiet = ctx.obj.get("quiet", False)

    if not quiet and result.fields is not None:
        mode_label = "[dry-run] " if dry_run else ""
        click.secho(
            f"=== {mode_label}Updating agent context files for feature {branch} ===",
            fg="cyan",
            bold=True,
        )
        if result.created_default and result.outcomes:
            default = result.outcomes[0].target
            click.echo(
                "No existing agent context files found. "
                f"Creating {default.display_name} {default.relative_path} by default."
            )

    for outcome in result.outcomes:
        verb = "would be " if not outcome.written else ""
        manual = " (manual additions preserved)" if outcome.manual_preserved else ""
        click.secho(f"✅ {outcome.target.display_name} ", fg="green", nl=False)
        click.echo(f"context file {verb}{outcome.action}{manual}  → {outcome.path}")

    if not result.ok:
        _fail(result.error or "update failed")
        return

    if not quiet:
        click.echo()
        click.secho("Summary of changes:", bold=True)
        summary = result.summary()
        if result.fields is None or result.fields.is_empty():
            click.echo("   (no plan fields found)")
        elif not summary:
            click.echo("   (no technology fields to apply)")
        for line in summary:
            click.echo(f"- {line}")
        click.echo()


# ── Inspect ─────────────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """Show the fields extracted from the current branch's plan.md."""
    from agent_context.core.use_cases.update import plan_fields_for

    try:
        root = _resolve_repo_root(ctx)
        branch = _resolve_branch(ctx, root)
        settings = _resolve_settings(ctx, root)
        plan_path, fields = plan_fields_for(root, branch, settings)
    except AgentContextError as e:
        _fail(str(e))
        return

    if as_json:
        click.echo(json.dumps(
            {"branch": branch, "plan_path": str(plan_path), "fields": fields.model_dump()},
            indent=2,
        ))
        return

    click.secho(f"📋 Plan: {plan_path}", fg="cyan", bold=True)
    for label, value in [
        ("Language", fields.language),
        ("Framework", fields.framework),
        ("Testing", fields.testing),
        ("Storage", fields.storage),
        ("Project type", fields.project_type),
    ]:
        if value:
            click.echo(f"   {label}: {value}")
        else:
            click.secho(f"   {label}: (not set)", fg="yellow")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def targets(ctx: click.Context, as_json: bool) -> None:
    """List the known agent context files."""
    from agent_context.core.models.target import TARGETS

    try:
        root = _resolve_repo_root(ctx)
    except AgentContextError as e:
        _fail(str(e))
        return

    rows = [
        {
            "name": t.name,
            "display_name": t.display_name,
            "path": t.relative_path,
            "exists": t.path(root).is_file(),
        }
        for t in TARGETS
    ]

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    for row in rows:
        marker = "✓" if row["exists"] else "·"
        click.echo(f"   {marker} {row['name']:<8} {row['display_name']:<15} {row['path']}")


if __name__ == "__main__":
    cli()
