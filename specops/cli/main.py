"""Main CLI commands for running specops."""

from pathlib import Path
from typing import Optional

import typer

from specops import __version__
from specops.cli.outputs import write_outputs
from specops.cli.utils import prepare_environment, resolve_repo_root
from specops.config import ConfigError, EventKind, RepositoryContext, load_settings
from specops.git import GitError, get_changed_files, resolve_base
from specops.issues import IssueError
from specops.matching import filter_changed_files
from specops.pipeline import run_pipeline
from specops.templates import TemplateError


def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """specops: open issues for changed specification files."""
    if version:
        typer.echo(f"specops {__version__}")
        raise typer.Exit(0)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


def run_command(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Render issues and log them without creating anything",
    ),
    repo_root: Optional[Path] = typer.Option(
        None,
        "--repo-root",
        help="Repository root (defaults to $GITHUB_WORKSPACE or the current git repo)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Show debug logging",
    ),
) -> None:
    """Detect changed specification files and open an issue for each."""
    environ = prepare_environment(debug)

    try:
        context = RepositoryContext.from_environ(environ)
        root = resolve_repo_root(repo_root, context)
        settings = load_settings(root, environ)
        if dry_run:
            settings = settings.model_copy(update={"dry_run": True})
        result = run_pipeline(settings, context, root)
    except (GitError, ConfigError, TemplateError, IssueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    write_outputs(result.outputs(), environ.get("GITHUB_OUTPUT"))

    if result.is_total_failure:
        typer.echo("Error: Failed to create any issues. Check the logs for details.", err=True)
        raise typer.Exit(1)


def detect_command(
    repo_root: Optional[Path] = typer.Option(
        None,
        "--repo-root",
        help="Repository root (defaults to $GITHUB_WORKSPACE or the current git repo)",
    ),
    base: Optional[str] = typer.Option(
        None,
        "--base",
        help="Pull request base branch to compare against (default: previous commit)",
    ),
) -> None:
    """List changed files that match the configured patterns."""
    environ = prepare_environment()

    try:
        context = RepositoryContext.from_environ(environ)
        root = resolve_repo_root(repo_root, context)
        settings = load_settings(root, environ)
        if base is None and context.event_kind == EventKind.PULL_REQUEST:
            base = context.base_ref
        comparison = resolve_base(base, cwd=root)
        files = filter_changed_files(get_changed_files(comparison, cwd=root), settings.match_options())
    except (GitError, ConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not files:
        typer.echo("No matching files changed.")
        return

    for f in files:
        if f.previous_path:
            typer.echo(f"{f.change_type.value:<9} {f.previous_path} -> {f.path}")
        else:
            typer.echo(f"{f.change_type.value:<9} {f.path}")
    typer.echo()
    typer.echo(f"Total: {len(files)} file(s)")
