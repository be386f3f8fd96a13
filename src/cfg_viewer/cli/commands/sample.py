"""Sample command: emit one of the bundled example CFGs."""

from pathlib import Path

import typer

from ...samples import SAMPLE_NAMES, get_sample_bytes
from ..output import print_error, print_success


def sample(
    name: str = typer.Argument(
        ..., help=f"Sample to emit: {', '.join(SAMPLE_NAMES)}"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the sample here instead of stdout"
    ),
) -> None:
    """📄 Print a bundled example CFG (sequential or conditional)."""
    try:
        content = get_sample_bytes(name)
    except KeyError as e:
        print_error(str(e.args[0]))
        raise typer.Exit(1)

    if output is None:
        typer.echo(content.decode())
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(content)
    print_success(f"{name.capitalize()} example written to {output}")
