"""cfg-viewer command line interface."""

import sys

import typer
from loguru import logger

from .. import __version__
from .commands.inspect_cmd import inspect_graph
from .commands.layout import layout
from .commands.sample import sample
from .commands.select_cmd import select_node

app = typer.Typer(
    name="cfg-viewer",
    help="🕸️  Inspect and lay out control-flow graphs from JSON",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def setup_logging(verbose: bool) -> None:
    """Route cfg_viewer logs to stderr; debug detail only with --verbose."""
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG")
        logger.debug("Verbose logging enabled")
    else:
        logger.add(sys.stderr, level="WARNING")


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cfg-viewer {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    setup_logging(verbose)
    ctx.obj = {"verbose": verbose}


app.command("inspect")(inspect_graph)
app.command("layout")(layout)
app.command("select")(select_node)
app.command("sample")(sample)


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
