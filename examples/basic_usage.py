"""Basic ingest example.

This example shows the simplest usage pattern: load the project settings,
build an Ingestor and ingest a file. Identical content is stored once, no
matter how many times it is uploaded.
"""

from pathlib import Path

from contentstash import Ingestor, load_settings


# Option 1: Factory method (recommended for most cases)
# Discovers the project root and wires up ContentStore + SQLite records
ingestor = Ingestor.from_settings(load_settings())

# Option 2: Manual wiring (full control over adapters)
# from contentstash import ContentStore, SqliteRecordRepository
# repository = SqliteRecordRepository(Path("./records.db"))
# repository.initialize()
# ingestor = Ingestor(
#     store=ContentStore(Path("./objects")),
#     repository=repository,
#     allowed_types=["image/png", "image/jpeg"],
# )

# Content type is sniffed from the first 512 bytes, not from the suffix
result = ingestor.ingest_path(Path("avatar.png"))
print(f"Stored as: {result.stored.path} ({result.content_type})")

# Ingesting the same bytes again reuses the existing file
again = ingestor.ingest_path(Path("avatar.png"))
assert again.stored.path == result.stored.path
assert not again.stored.created

# Streams work too; their position is left where it was
with open("avatar.png", "rb") as f:
    ingestor.ingest(f, ".png")
    assert f.tell() == 0
