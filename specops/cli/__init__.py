"""CLI entry point for specops.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from specops.cli.main import detect_command, main_callback, run_command
from specops.cli.template import template_app

# Main application
app = typer.Typer(
    name="specops",
    help="specops: open issues for changed specification files",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(template_app, name="template")

# Add individual commands
app.command("run")(run_command)
app.command("detect")(detect_command)

app.callback(invoke_without_command=True)(main_callback)


__all__ = [
    "app",
    "template_app",
    "main_callback",
    "run_command",
    "detect_command",
]
