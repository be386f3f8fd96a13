"""Headless layout command: run the force simulation and dump positions."""

from pathlib import Path

import typer
from loguru import logger

from ...config.defaults import DEFAULT_HEADLESS_STEPS
from ...config.settings import ViewerConfig
from ...core.exceptions import CFGViewerError
from ...core.loader import read_graph_file
from ...session import CFGSession
from ..output import dump_json, print_error, print_success


def layout(
    file: Path = typer.Argument(
        ..., help="CFG JSON file", exists=True, dir_okay=False, readable=True
    ),
    steps: int = typer.Option(
        DEFAULT_HEADLESS_STEPS,
        "--steps",
        "-n",
        help="Relaxation steps to run",
        min=0,
        max=100_000,
    ),
    show_details: bool = typer.Option(
        False, "--show-details", help="Include Detail (sub-expression) nodes"
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="YAML settings file", dir_okay=False
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write positions JSON here instead of stdout"
    ),
) -> None:
    """📐 Lay out a CFG without a display and print the final positions.

    [bold cyan]Examples:[/bold cyan]

        $ cfg-viewer layout cfg.json --steps 500

        $ cfg-viewer layout cfg.json --show-details -o positions.json
    """
    try:
        viewer_config = ViewerConfig.load(config) if config else ViewerConfig()
        if show_details:
            viewer_config.show_details = True
        session = CFGSession(config=viewer_config)
        graph = session.load(read_graph_file(file))
        snapshot = session.run_layout(steps)
    except CFGViewerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if snapshot is None:
        print_error("Layout produced no positions")
        raise typer.Exit(1)

    logger.debug(f"Layout finished after {snapshot.tick} ticks, alpha={snapshot.alpha:.4f}")

    data = {
        "name": graph.name,
        "show_details": session.show_details,
        "canvas": {
            "width": viewer_config.layout.canvas_width,
            "height": viewer_config.layout.canvas_height,
        },
        **snapshot.to_dict(),
    }

    if output is None:
        typer.echo(dump_json(data).decode())
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(dump_json(data))
    print_success(f"Positions for {len(snapshot.nodes)} nodes written to {output}")
