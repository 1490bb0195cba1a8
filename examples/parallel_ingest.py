"""Parallel ingest with progress bars.

ingest_paths() ingests several files at once when an executor is injected.
Each file gets its own request id, which is stored on its record and shown
in log lines.
"""

import logging
from pathlib import Path

from contentstash import (
    Ingestor,
    RichProgressReporter,
    ThreadPoolExecutorAdapter,
    configure_logging,
    load_settings,
)


configure_logging(logging.INFO)

ingestor = Ingestor.from_settings(
    load_settings(),
    executor=ThreadPoolExecutorAdapter(max_workers=4),
)

paths = sorted(Path("incoming").glob("*"))

with RichProgressReporter() as progress:
    results = ingestor.ingest_paths(paths, progress=progress, max_workers=4)

for path, result in results.items():
    print(f"{path.name}: {result}")

# Force sequential ingestion with max_workers=1
# results = ingestor.ingest_paths(paths, max_workers=1)
