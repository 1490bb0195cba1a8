"""List command for CLI."""

from __future__ import annotations

import typer
from rich.console import Console

from contentstash.cli.formatting import records_table
from contentstash.cli.main import app
from contentstash.core.exceptions import ContentStashError


@app.command(name="list")
def list_records(
    full: bool = typer.Option(
        False,
        "--full",
        "-f",
        help="Show full identifiers and storage paths.",
    ),
) -> None:
    """List recorded files."""
    from contentstash.adapters.records import SqliteRecordRepository
    from contentstash.config import load_settings

    try:
        settings = load_settings()
        if not settings.database.exists():
            typer.echo("No records found. Run 'contentstash init' to get started.")
            return
        records = SqliteRecordRepository(settings.database).list_records()
    except ContentStashError as e:
        typer.echo(f"Error: {e}", err=True)
        if e.recovery_hint:
            typer.echo(f"Hint: {e.recovery_hint}", err=True)
        raise typer.Exit(1) from None

    if not records:
        typer.echo("No records found.")
        return

    # Force terminal output to ensure tables render correctly in all environments
    console = Console(force_terminal=True, width=200 if full else None)
    console.print(records_table(records, full=full))
