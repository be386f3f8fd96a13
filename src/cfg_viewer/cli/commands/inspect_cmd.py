"""Inspect command: node roles and edge counts of a CFG file."""

from pathlib import Path

import typer
from loguru import logger
from rich.table import Table

from ...core.exceptions import CFGViewerError
from ...core.graph_builder import build_graph
from ...core.loader import read_graph_file
from ...core.models import NodeRole
from ..output import console, print_error

ROLE_STYLES = {
    NodeRole.START: "bold cyan",
    NodeRole.END: "bold magenta",
    NodeRole.MAIN: "green",
    NodeRole.DETAIL: "dim",
}


def inspect_graph(
    file: Path = typer.Argument(
        ..., help="CFG JSON file", exists=True, dir_okay=False, readable=True
    ),
    main_only: bool = typer.Option(
        False, "--main-only", help="Hide Detail (sub-expression) nodes"
    ),
) -> None:
    """🔍 Show node roles, sub nodes and edge counts of a CFG."""
    try:
        graph = build_graph(read_graph_file(file))
    except CFGViewerError as e:
        logger.debug(f"Inspect failed: {e.context}")
        print_error(str(e))
        raise typer.Exit(1)

    table = Table(title=graph.name or "Control Flow Graph")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Role")
    table.add_column("Text")
    table.add_column("Sub nodes", style="dim")
    table.add_column("Described", justify="center")

    for node in graph.nodes.values():
        if main_only and node.is_detail:
            continue
        table.add_row(
            str(node.id),
            f"[{ROLE_STYLES[node.role]}]{node.role.value}[/]",
            node.text,
            ", ".join(str(i) for i in node.sub_node_ids),
            "✓" if node.description is not None else "",
        )

    console.print(table)
    console.print(
        f"Flow edges: [green]{len(graph.flow_edges)}[/green]  "
        f"Detail edges: [dim]{len(graph.detail_edges)}[/dim]"
    )
