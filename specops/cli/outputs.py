"""Run output writing."""

from pathlib import Path
from typing import Optional

import typer


def write_outputs(outputs: dict[str, str], output_file: Optional[str] = None) -> None:
    """Write run outputs.

    Inside GitHub Actions outputs are appended to the $GITHUB_OUTPUT file as
    `name=value` lines; elsewhere they are echoed.

    Args:
        outputs: Output values keyed by name.
        output_file: Path of the $GITHUB_OUTPUT file, if any.
    """
    lines = [f"{name}={value}" for name, value in outputs.items()]
    if output_file:
        with open(Path(output_file), "a", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
        return
    for line in lines:
        typer.echo(line)
