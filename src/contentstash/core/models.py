"""Core domain models for contentstash.

These models are pure Python dataclasses with no I/O dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ContentDigest:
    """SHA-256 digest of a stream read to EOF.

    Attributes:
        hexdigest: Lowercase hexadecimal digest.
        size: Number of bytes hashed.
    """

    hexdigest: str
    size: int


@dataclass(frozen=True, slots=True)
class StoredFile:
    """A file placed in a content-addressed store directory.

    Derived on demand; the file on disk is the only persisted state.

    Attributes:
        identifier: SHA-256 hex digest of the content.
        extension: Extension appended verbatim to the identifier.
        directory: Store directory holding the file.
        size: Content size in bytes.
        created: True if this call wrote the file, False if it already existed.

    Example:
        >>> stored = StoredFile("ab12", ".png", Path("/objects"), size=4)
        >>> stored.name
        'ab12.png'
    """

    identifier: str
    extension: str
    directory: Path
    size: int = 0
    created: bool = False

    @property
    def name(self) -> str:
        """Generated filename: identifier followed by extension."""
        return self.identifier + self.extension

    @property
    def path(self) -> Path:
        """Full path of the stored file."""
        return self.directory / self.name


@dataclass(frozen=True, slots=True)
class Classification:
    """Result of sniffing a stream's leading bytes.

    Attributes:
        detected_type: MIME type detected from content.
        accepted: Whether detected_type is in the allowed set.
    """

    detected_type: str
    accepted: bool


class TransactionState(Enum):
    """Lifecycle of a unit of work. OPEN is the only non-terminal state."""

    OPEN = "open"
    COMMITTED = "committed"
    COMMIT_FAILED = "commit_failed"
    ROLLED_BACK = "rolled_back"
    ROLLBACK_FAILED = "rollback_failed"

    @property
    def is_terminal(self) -> bool:
        """True once the unit of work has been finalized."""
        return self is not TransactionState.OPEN


@dataclass(frozen=True, slots=True)
class FileRecord:
    """Metadata row describing an ingested file.

    Attributes:
        name: Stored filename (identifier + extension), the primary key.
        identifier: SHA-256 hex digest of the content.
        extension: Extension used when storing.
        content_type: Sniffed MIME type.
        size: Content size in bytes.
        path: Full path of the stored file.
        request_id: Request scope that ingested the file, if any.
        created_at: When the record was created.
    """

    name: str
    identifier: str
    extension: str
    content_type: str
    size: int
    path: str
    request_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_stored(
        cls,
        stored: StoredFile,
        content_type: str,
        request_id: str | None = None,
    ) -> FileRecord:
        """Build a record for a stored file."""
        return cls(
            name=stored.name,
            identifier=stored.identifier,
            extension=stored.extension,
            content_type=content_type,
            size=stored.size,
            path=str(stored.path),
            request_id=request_id,
        )


@dataclass(frozen=True, slots=True)
class IngestResult:
    """Outcome of ingesting one stream.

    Attributes:
        stored: The stored file.
        content_type: Sniffed MIME type.
        recorded: False when a record for this file already existed.
    """

    stored: StoredFile
    content_type: str
    recorded: bool
