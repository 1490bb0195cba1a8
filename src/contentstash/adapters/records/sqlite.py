"""SQLite-backed metadata repository implementing RecordRepository."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import TYPE_CHECKING

from contentstash.core.exceptions import RecordError
from contentstash.core.models import FileRecord


if TYPE_CHECKING:
    import builtins
    from pathlib import Path


_SCHEMA = """
CREATE TABLE IF NOT EXISTS stored_files (
    name         TEXT PRIMARY KEY,
    identifier   TEXT NOT NULL,
    extension    TEXT NOT NULL,
    content_type TEXT NOT NULL,
    size         INTEGER NOT NULL,
    path         TEXT NOT NULL,
    request_id   TEXT,
    created_at   TEXT NOT NULL
)
"""

_COLUMNS = (
    "name, identifier, extension, content_type, size, path, request_id, created_at"
)


def _row_to_record(row: sqlite3.Row) -> FileRecord:
    return FileRecord(
        name=row["name"],
        identifier=row["identifier"],
        extension=row["extension"],
        content_type=row["content_type"],
        size=row["size"],
        path=row["path"],
        request_id=row["request_id"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class SqliteSession:
    """One connection, one transaction at a time.

    Satisfies TransactionHandle, so it can be finalized by a UnitOfWork.
    Must not be shared across threads.
    """

    def __init__(self, connection: sqlite3.Connection, database: Path) -> None:
        self._connection = connection
        self._database = database

    def add(self, record: FileRecord) -> bool:
        """Insert a record unless one with the same name exists.

        Returns:
            True if a row was inserted.

        Raises:
            RecordError: If the insert fails.
        """
        try:
            cursor = self._connection.execute(
                f"INSERT OR IGNORE INTO stored_files ({_COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    record.name,
                    record.identifier,
                    record.extension,
                    record.content_type,
                    record.size,
                    record.path,
                    record.request_id,
                    record.created_at.isoformat(),
                ),
            )
        except sqlite3.Error as e:
            raise RecordError(
                f"can't insert record '{record.name}': {e}",
                database=self._database,
                cause=e,
            ) from e
        return cursor.rowcount == 1

    def commit(self) -> None:
        """Commit the pending transaction."""
        self._connection.commit()

    def rollback(self) -> None:
        """Roll back the pending transaction."""
        self._connection.rollback()

    def close(self) -> None:
        """Close the connection, discarding uncommitted changes."""
        self._connection.close()


class SqliteRecordRepository:
    """Stores FileRecords in a single SQLite table.

    Attributes:
        database: Path to the SQLite database file.
    """

    def __init__(self, database: Path, timeout: float = 5.0) -> None:
        """Initialize the repository.

        Args:
            database: Path to the database file. Created on first connect.
            timeout: Seconds to wait for a locked database.
        """
        self.database = database
        self._timeout = timeout

    def _connect(self) -> sqlite3.Connection:
        try:
            connection = sqlite3.connect(self.database, timeout=self._timeout)
        except sqlite3.Error as e:
            raise RecordError(
                f"can't open database: {e}", database=self.database, cause=e
            ) from e
        connection.row_factory = sqlite3.Row
        return connection

    def initialize(self) -> None:
        """Create the schema if it doesn't exist."""
        self.database.parent.mkdir(parents=True, exist_ok=True)
        connection = self._connect()
        try:
            with connection:
                connection.execute(_SCHEMA)
        except sqlite3.Error as e:
            raise RecordError(
                f"can't create schema: {e}", database=self.database, cause=e
            ) from e
        finally:
            connection.close()

    def session(self) -> SqliteSession:
        """Open a new session owned by a single unit of work."""
        return SqliteSession(self._connect(), self.database)

    def get(self, name: str) -> FileRecord | None:
        """Get a record by stored filename, or None if not recorded."""
        rows = self._query(
            f"SELECT {_COLUMNS} FROM stored_files WHERE name = ?", (name,)
        )
        return _row_to_record(rows[0]) if rows else None

    def list_records(self) -> builtins.list[FileRecord]:
        """List all records, oldest first."""
        rows = self._query(
            f"SELECT {_COLUMNS} FROM stored_files ORDER BY created_at, name"
        )
        return [_row_to_record(row) for row in rows]

    def _query(
        self, sql: str, params: tuple[object, ...] = ()
    ) -> builtins.list[sqlite3.Row]:
        connection = self._connect()
        try:
            return connection.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise RecordError(
                f"can't read records: {e}", database=self.database, cause=e
            ) from e
        finally:
            connection.close()
