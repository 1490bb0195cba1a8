"""Error handling patterns with recovery hints.

This example demonstrates how to handle common errors and use
the recovery_hint property to provide actionable guidance.
"""

from pathlib import Path

from contentstash import (
    ContentStashError,
    ContentTypeRejectedError,
    IngestResult,
    Ingestor,
    RecordError,
    StoreError,
    TransactionError,
    load_settings,
)


ingestor = Ingestor.from_settings(load_settings())


# Pattern 1: Reject uploads that aren't an allowed type
def ingest_image(path: Path) -> IngestResult | None:
    """Ingest a file, returning None if its content isn't allowed."""
    try:
        return ingestor.ingest_path(path)
    except ContentTypeRejectedError as e:
        # recovery_hint lists the allowed types
        print(f"{path.name} looks like {e.detected_type}")
        print(f"Hint: {e.recovery_hint}")
        return None


# Pattern 2: Storage and database failures
def ingest_or_report(path: Path) -> IngestResult | None:
    """Ingest a file, reporting where a failure happened."""
    try:
        return ingestor.ingest_path(path)
    except StoreError as e:
        print(f"Couldn't {e.operation} {e.path}")
        print(f"Hint: {e.recovery_hint}")
    except RecordError as e:
        print(f"Database error in {e.database}")
        print(f"Hint: {e.recovery_hint}")
    except TransactionError as e:
        # The record was not committed; the stored file may still exist
        print(f"Transaction failed: {e}")
    return None


# Pattern 3: Catch-all for any library error
def ingest_safe(path: Path) -> IngestResult | None:
    try:
        return ingestor.ingest_path(path)
    except ContentStashError as e:
        print(f"Error: {e}")
        if e.recovery_hint:
            print(f"Hint: {e.recovery_hint}")
        return None


if __name__ == "__main__":
    for name in ["avatar.png", "notes.txt"]:
        ingest_safe(Path(name))
