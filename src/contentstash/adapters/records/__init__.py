"""Metadata repository adapters."""

from contentstash.adapters.records.sqlite import SqliteRecordRepository, SqliteSession


__all__ = ["SqliteRecordRepository", "SqliteSession"]
