"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    import builtins
    from concurrent.futures import Future

    from contentstash.core.models import FileRecord

ProgressCallback = Callable[[int, int], None]


@runtime_checkable
class ContentStream(Protocol):
    """Externally owned, seekable binary stream.

    The library never closes it and never writes to it.
    """

    def read(self, size: int = -1, /) -> bytes:
        """Read up to size bytes; empty bytes at EOF."""
        ...

    def seek(self, offset: int, whence: int = 0, /) -> int:
        """Move to an absolute offset."""
        ...

    def tell(self) -> int:
        """Return the current offset."""
        ...


@runtime_checkable
class TransactionHandle(Protocol):
    """Anything with commit/rollback, e.g. sqlite3.Connection."""

    def commit(self) -> None:
        """Apply all pending changes."""
        ...

    def rollback(self) -> None:
        """Discard all pending changes."""
        ...


@runtime_checkable
class RecordSession(TransactionHandle, Protocol):
    """A transactional session of the metadata repository."""

    def add(self, record: FileRecord) -> bool:
        """Insert a record unless one with the same name exists.

        Returns:
            True if a row was inserted.
        """
        ...

    def close(self) -> None:
        """Release the session. Pending changes are discarded."""
        ...


@runtime_checkable
class RecordRepository(Protocol):
    """Metadata store for ingested files."""

    def session(self) -> RecordSession:
        """Open a new session owned by a single unit of work."""
        ...

    def get(self, name: str) -> FileRecord | None:
        """Get a record by stored filename, or None."""
        ...

    def list_records(self) -> builtins.list[FileRecord]:
        """List all records, oldest first."""
        ...


@runtime_checkable
class ProgressReporter(Protocol):
    """Reports copy progress to the user.

    The core domain uses this to report progress without depending
    on any specific UI library.
    """

    def start_task(self, name: str, total: int) -> ProgressCallback:
        """Start tracking a copy task.

        Args:
            name: Human-readable name for the task (source filename).
            total: Total bytes to copy.

        Returns:
            A ProgressCallback to call with (bytes_written, total_bytes).
        """
        ...

    def finish_task(self, name: str) -> None:
        """Mark a task as complete.

        Args:
            name: The task name passed to start_task().
        """
        ...


class NullProgressReporter:
    """A ProgressReporter that produces no output.

    Used as the default when no progress reporting is desired.
    """

    def start_task(self, name: str, total: int) -> ProgressCallback:  # noqa: ARG002
        """Return a no-op callback."""
        return lambda _written, _total: None

    def finish_task(self, name: str) -> None:
        """Do nothing."""
        _ = name  # Unused but required by protocol


@runtime_checkable
class ExecutorPort(Protocol):
    """Executor for parallel task execution.

    Abstracts over concurrent.futures executors to allow dependency injection
    and testing.
    """

    def submit(
        self, fn: Callable[..., object], *args: object, **kwargs: object
    ) -> Future[object]:  # type: ignore[name-defined, unused-ignore]
        """Submit a function for execution."""
        ...

    def __enter__(self) -> ExecutorPort:
        """Enter context manager."""
        ...

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        """Exit context manager."""
        ...
