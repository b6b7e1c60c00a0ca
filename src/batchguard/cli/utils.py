"""
CLI utility helpers: output formatting.
"""

from __future__ import annotations

import json
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from batchguard.verification.registry import VerificationResult

console = Console()
err_console = Console(stderr=True)

# exit codes for `batchguard check`
EXIT_ACCEPTED = 0
EXIT_REJECTED = 1
EXIT_FATAL = 2


def output_verdict(result: VerificationResult, *, as_json: bool = False) -> None:
    """Render a verdict and exit with its code."""
    if as_json:
        console.print_json(json.dumps(result.to_dict()))
    elif result.accepted:
        console.print(f"[bold green]Accepted[/bold green]: {result.value}")
    else:
        label = "Fatal" if result.fatal else "Rejected"
        message = result.message or (str(result.error) if result.error else "")
        err_console.print(f"[bold red]{label}[/bold red] ({int(result.code)}): {message}")

    if result.fatal:
        raise typer.Exit(code=EXIT_FATAL)
    if result.rejected:
        raise typer.Exit(code=EXIT_REJECTED)


def print_table(rows: list[dict[str, Any]], *, title: str = "") -> None:
    """Render a list of dicts as a Rich table."""
    if not rows:
        console.print("[dim]No items.[/dim]")
        return
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in rows[0]:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(str(v) for v in row.values()))
    console.print(table)
