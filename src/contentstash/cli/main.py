"""CLI commands for contentstash."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import typer

from contentstash.core.exceptions import ContentStashError


app = typer.Typer(
    name="contentstash",
    help="Content-addressed storage with content-type checks and recorded ingests.",
    no_args_is_help=True,
)


DEFAULT_CONFIG_TEMPLATE = """\
# contentstash settings. Relative paths resolve against the project root.

storage_dir = ".contentstash/objects"
database = ".contentstash/records.db"
allowed_types = ["image/jpeg", "image/png"]
"""


def _fail(error: ContentStashError, prefix: str = "Error") -> typer.Exit:
    """Print an error with its recovery hint and return an Exit to raise."""
    typer.echo(f"{prefix}: {error}", err=True)
    if error.recovery_hint:
        typer.echo(f"Hint: {error.recovery_hint}", err=True)
    return typer.Exit(1)


def _require_file(path: Path) -> None:
    if not path.is_file():
        typer.echo(f"Error: file not found: {path}", err=True)
        raise typer.Exit(1)


@app.command()
def init(
    directory: str | None = typer.Argument(
        None,
        help="Directory to initialize. Defaults to current directory.",
    ),
) -> None:
    """Initialize a contentstash project: settings, storage dir and database."""
    from contentstash.adapters.records import SqliteRecordRepository
    from contentstash.config import CONFIG_FILENAME, STASH_DIR, load_settings

    target = Path(directory) if directory else Path.cwd()
    target = target.resolve()

    stash_dir = target / STASH_DIR
    if not stash_dir.exists():
        stash_dir.mkdir(parents=True)
        typer.echo(f"Created {stash_dir.relative_to(target)}/")

    config_path = stash_dir / CONFIG_FILENAME
    if not config_path.exists():
        config_path.write_text(DEFAULT_CONFIG_TEMPLATE)
        typer.echo(f"Created {config_path.relative_to(target)}")

    try:
        settings = load_settings(target)
        if not settings.storage_dir.exists():
            settings.storage_dir.mkdir(parents=True)
            typer.echo(f"Created {settings.storage_dir}/")
        SqliteRecordRepository(settings.database).initialize()
    except ContentStashError as e:
        raise _fail(e) from None


@app.command()
def ingest(
    files: list[Path] = typer.Argument(..., help="Files to ingest."),
    allow: list[str] | None = typer.Option(
        None,
        "--allow",
        "-a",
        help="Allowed MIME type (repeatable). Overrides the configured list.",
    ),
    workers: int = typer.Option(
        1,
        "--workers",
        "-w",
        min=1,
        help="Number of files to ingest in parallel.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log each stored and rejected file.",
    ),
) -> None:
    """Sniff, store and record files. Prints name, type and outcome per file."""
    from contentstash import (
        Ingestor,
        RichProgressReporter,
        ThreadPoolExecutorAdapter,
        configure_logging,
        load_settings,
    )

    configure_logging(logging.INFO if verbose else logging.WARNING)

    for path in files:
        _require_file(path)

    try:
        settings = load_settings()
        if allow:
            settings = replace(settings, allowed_types=tuple(allow))
        executor = ThreadPoolExecutorAdapter(max_workers=workers) if workers > 1 else None
        ingestor = Ingestor.from_settings(settings, executor=executor)
    except ContentStashError as e:
        raise _fail(e) from None

    with RichProgressReporter() as progress:
        results = ingestor.ingest_paths(files, progress=progress, max_workers=workers)

    failed = 0
    for path, result in results.items():
        if isinstance(result, ContentStashError):
            failed += 1
            typer.echo(f"Error: {path}: {result}", err=True)
            if result.recovery_hint:
                typer.echo(f"Hint: {result.recovery_hint}", err=True)
            continue
        outcome = "stored" if result.stored.created else "duplicate"
        typer.echo(f"{result.stored.name}\t{result.content_type}\t{outcome}")

    if failed:
        raise typer.Exit(1)


@app.command(name="hash")
def hash_file(
    file: Path = typer.Argument(..., help="File to hash."),
    ext: str = typer.Option(
        "",
        "--ext",
        "-e",
        help="Extension appended to the identifier (e.g. '.png').",
    ),
) -> None:
    """Print the content identifier a file would be stored under."""
    from contentstash.core.addressing import compute_identifier

    _require_file(file)
    try:
        with file.open("rb") as f:
            typer.echo(compute_identifier(f, ext))
    except ContentStashError as e:
        raise _fail(e) from None


@app.command()
def sniff(
    file: Path = typer.Argument(..., help="File to inspect."),
    allow: list[str] | None = typer.Option(
        None,
        "--allow",
        "-a",
        help="Allowed MIME type (repeatable). Exit 1 if the file isn't one.",
    ),
) -> None:
    """Print the content type detected from a file's leading bytes."""
    from contentstash.core.sniffing import classify

    _require_file(file)
    try:
        with file.open("rb") as f:
            result = classify(f, *(allow or ()))
    except ContentStashError as e:
        raise _fail(e) from None

    typer.echo(result.detected_type)
    if allow and not result.accepted:
        typer.echo(f"Rejected: not one of {', '.join(allow)}", err=True)
        raise typer.Exit(1)


def main() -> None:
    """Entry point for the CLI."""
    app()
