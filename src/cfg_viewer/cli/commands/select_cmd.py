"""Select command: show a node's analysis state with highlighted entries."""

from pathlib import Path

import typer
from rich.panel import Panel
from rich.table import Table

from ...core.exceptions import CFGViewerError
from ...core.loader import read_graph_file
from ...selection import SelectionView, StateSection
from ...session import CFGSession
from ..output import console, dump_json, print_error


def select_node(
    file: Path = typer.Argument(
        ..., help="CFG JSON file", exists=True, dir_okay=False, readable=True
    ),
    node_id: int = typer.Argument(..., help="Node id to select"),
    show_all: bool = typer.Option(
        False, "--all", "-a", help="List every state entry, not just the preview"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output the view as JSON"),
) -> None:
    """🎯 Show the description of a node, highlighting entries of live expressions."""
    try:
        session = CFGSession()
        session.load(read_graph_file(file))
        view = session.select(node_id)
    except CFGViewerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if json_output:
        typer.echo(dump_json(view).decode())
        return

    _print_view(view, show_all)


def _print_view(view: SelectionView, show_all: bool) -> None:
    header = f"[bold]Node {view.node_id}[/bold] {view.caption}\n[cyan]{view.text}[/cyan]"
    if not view.has_description:
        console.print(Panel(f"{header}\n\nNo detailed description available."))
        return

    console.print(Panel(header))
    if view.expressions:
        console.print(
            "[bold]Current Expressions:[/bold] "
            + ", ".join(f"[yellow]{expr}[/yellow]" for expr in view.expressions)
        )

    for section in view.sections:
        console.print(_section_table(section, show_all))
        if not show_all and section.hidden_count:
            console.print(f"[dim]… {section.hidden_count} more items (use --all)[/dim]")


def _section_table(section: StateSection, show_all: bool) -> Table:
    table = Table(title=section.title, title_justify="left", show_header=False)
    table.add_column("", width=1)
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for entry in section.entries if show_all else section.preview:
        style = "bold yellow" if entry.highlighted else None
        table.add_row(
            "★" if entry.highlighted else "",
            entry.key,
            str(entry.value),
            style=style,
        )
    return table
