"""Rich console helpers shared by CLI commands."""

from typing import Any

import orjson
from rich.console import Console
from rich.syntax import Syntax

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    err_console.print(f"[bold red]✗[/bold red] {message}")


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def print_info(message: str) -> None:
    console.print(f"[blue]ℹ[/blue] {message}")


def dump_json(data: Any) -> bytes:
    return orjson.dumps(data, option=orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS)


def print_json(data: Any, title: str | None = None) -> None:
    if title:
        console.print(f"[bold blue]{title}[/bold blue]")
    console.print(Syntax(dump_json(data).decode(), "json", word_wrap=True))
