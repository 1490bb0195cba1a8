"""Rich-based progress reporter for terminal output."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TaskID,
    TextColumn,
    TransferSpeedColumn,
)


if TYPE_CHECKING:
    from types import TracebackType

    from rich.console import Console

    from contentstash.core.ports import ProgressCallback


class RichProgressReporter:
    """Progress reporter using Rich for terminal display.

    Shows one bar per file being copied into the store. Safe to use from
    several ingest workers at once.

    Example:
        with RichProgressReporter() as reporter:
            ingestor.ingest_paths(paths, progress=reporter)
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the progress display."""
        self._progress = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=console,
            transient=True,
        )
        self._tasks: dict[str, list[TaskID]] = {}
        self._lock = threading.Lock()
        self._started = False

    def __enter__(self) -> RichProgressReporter:
        """Start the progress display."""
        self._progress.start()
        self._started = True
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Stop the progress display."""
        self._progress.stop()
        self._started = False

    def start_task(self, name: str, total: int) -> ProgressCallback:
        """Start tracking a copy task.

        Args:
            name: Human-readable name for the task.
            total: Total bytes to copy.

        Returns:
            A callback to update progress.
        """
        with self._lock:
            # Auto-start if not in context manager
            if not self._started:
                self._progress.start()
                self._started = True
            task_id = self._progress.add_task(name, total=total)
            self._tasks.setdefault(name, []).append(task_id)

        def callback(written: int, _total: int) -> None:
            self._progress.update(task_id, completed=written)

        return callback

    def finish_task(self, name: str) -> None:
        """Mark a task as complete.

        Tasks sharing a name are finished oldest first.

        Args:
            name: The task name.
        """
        with self._lock:
            pending = self._tasks.get(name)
            if not pending:
                return
            task_id = pending.pop(0)
            if not pending:
                del self._tasks[name]
        task = self._progress.tasks[task_id]
        self._progress.update(task_id, completed=task.total)
