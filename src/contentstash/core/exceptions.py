"""Domain exceptions for contentstash.

All library errors inherit from ContentStashError, allowing users to catch
any library exception with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


class ContentStashError(Exception):
    """Base class for all contentstash exceptions.

    Catch this to handle any error from the library.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class StreamError(ContentStashError):
    """Base class for errors raised while reading or positioning a stream.

    Attributes:
        operation: The stream operation that failed (e.g. "tell", "hash").
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        operation: str,
        cause: BaseException | None = None,
    ) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(message)


class StreamPositionError(StreamError):
    """Raised when the stream position can't be determined or restored."""

    @property
    def recovery_hint(self) -> str:
        """Suggest passing a seekable stream."""
        return "Pass an open, seekable binary stream (seek() and tell() must work)"


class StreamReadError(StreamError):
    """Raised when reading the stream fails part way through."""

    @property
    def recovery_hint(self) -> str:
        """Suggest retrying with a fresh stream."""
        return f"Reading failed during '{self.operation}'; reopen the source and retry"


class StoreError(ContentStashError):
    """Base class for content store errors.

    Attributes:
        path: The destination path involved in the failure.
        operation: The filesystem operation that failed.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        path: Path,
        operation: str,
        cause: BaseException | None = None,
    ) -> None:
        self.path = path
        self.operation = operation
        self.cause = cause
        super().__init__(message)


class StoreAccessError(StoreError):
    """Raised when the existence of a stored file can't be checked."""

    @property
    def recovery_hint(self) -> str:
        """Suggest checking directory permissions."""
        return f"Check that {self.path.parent} exists and is readable"


class StoreWriteError(StoreError):
    """Raised when content can't be written into the store directory."""

    @property
    def recovery_hint(self) -> str:
        """Suggest checking permissions and free space."""
        return f"Check that {self.path.parent} is writable and has free space"


class ContentTypeRejectedError(ContentStashError):
    """Raised when sniffed content is not in the allowed set of types.

    This is a validation outcome, not an I/O failure: callers usually map it
    to a client-facing rejection.

    Attributes:
        detected_type: The MIME type detected from the content.
        allowed: The MIME types that would have been accepted.
    """

    def __init__(self, detected_type: str, allowed: Iterable[str]) -> None:
        self.detected_type = detected_type
        self.allowed = tuple(allowed)
        super().__init__(f"Content type '{detected_type}' is not permitted")

    @property
    def recovery_hint(self) -> str:
        """List the accepted types."""
        if self.allowed:
            return f"Allowed types: {', '.join(self.allowed)}"
        return "No content types are allowed; pass at least one allowed type"


class TransactionError(ContentStashError):
    """Base class for unit-of-work finalization errors."""

    pass


class CommitError(TransactionError):
    """Raised when committing a transaction fails.

    Attributes:
        cause: The exception raised by commit().
    """

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"failed to commit transaction: {cause}")


class RollbackError(TransactionError):
    """Raised when rolling back after a failure also fails.

    Both failures stay inspectable.

    Attributes:
        cause: The original error that triggered the rollback.
        rollback_error: The exception raised by rollback().
    """

    def __init__(self, cause: BaseException, rollback_error: BaseException) -> None:
        self.cause = cause
        self.rollback_error = rollback_error
        super().__init__(
            f"failed to rollback transaction: {rollback_error}: {cause}"
        )

    @property
    def recovery_hint(self) -> str:
        """Warn that the transaction state is unknown."""
        return "The database may hold partial changes; inspect it before retrying"


class TransactionStateError(TransactionError):
    """Raised when a unit of work is reused or finalized twice."""

    pass


class SourceError(ContentStashError):
    """Raised when a source file can't be opened for ingest.

    Attributes:
        path: The source file.
        cause: The underlying OSError.
    """

    def __init__(
        self,
        message: str,
        path: Path,
        cause: BaseException | None = None,
    ) -> None:
        self.path = path
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest checking the source path."""
        return f"Check that {self.path} is a regular file you can read"


class RecordError(ContentStashError):
    """Raised when the metadata repository fails.

    Attributes:
        database: Path to the database file.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        database: Path,
        cause: BaseException | None = None,
    ) -> None:
        self.database = database
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest initializing the database."""
        return f"Run 'contentstash init' or check {self.database}"


class ConfigurationError(ContentStashError):
    """Raised for configuration problems (unreadable or invalid settings).

    Attributes:
        path: The settings file, if the error came from one.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.path = path
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str | None:
        """Point at the settings file."""
        if self.path is not None:
            return f"Check {self.path} for syntax or type errors"
        return None
