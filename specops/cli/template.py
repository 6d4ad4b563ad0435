"""CLI commands for issue templates."""

import typer

from specops.templates import get_default_template

# Subcommand group for template inspection
template_app = typer.Typer(
    name="template",
    help="Inspect issue templates",
    add_completion=False,
)


@template_app.command("show")
def template_show() -> None:
    """Print the built-in issue body template."""
    typer.echo(get_default_template())
