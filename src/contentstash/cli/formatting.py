"""Shared formatting helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table


if TYPE_CHECKING:
    from contentstash.core.models import FileRecord


def _format_size(size_bytes: int) -> str:
    """Format size in bytes to human-readable format."""
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} TB"


def _short_identifier(identifier: str, length: int = 12) -> str:
    return identifier[:length]


def records_table(records: list[FileRecord], full: bool = False) -> Table:
    """Build a Rich table of recorded files.

    Args:
        records: Records to display.
        full: Show full identifiers and paths instead of shortened names.
    """
    table = Table()
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Size", justify="right")
    table.add_column("Created")
    if full:
        table.add_column("Path")

    for record in records:
        name = (
            record.name
            if full
            else _short_identifier(record.identifier) + record.extension
        )
        row = [
            name,
            record.content_type,
            _format_size(record.size),
            record.created_at.strftime("%Y-%m-%d %H:%M:%S"),
        ]
        if full:
            row.append(record.path)
        table.add_row(*row)

    return table
