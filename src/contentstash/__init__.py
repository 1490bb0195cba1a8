"""contentstash - content-addressed storage for untrusted uploads.

Sniffs content types against an allow-list, stores each distinct content
exactly once under its SHA-256, and records stored files inside a
transaction that commits only when the whole operation succeeds.

Example:
    >>> from contentstash import Ingestor, load_settings
    >>> ingestor = Ingestor.from_settings(load_settings())
    >>> with open("avatar.png", "rb") as f:
    ...     result = ingestor.ingest(f, ".png")
    >>> result.stored.path  # .contentstash/objects/<sha256>.png
"""

from contentstash.adapters.executor import SynchronousExecutor, ThreadPoolExecutorAdapter
from contentstash.adapters.records import SqliteRecordRepository, SqliteSession
from contentstash.adapters.storage import ContentStore
from contentstash.config import StashSettings, find_project_root, load_settings
from contentstash.core.addressing import compute_identifier, content_digest
from contentstash.core.exceptions import (
    CommitError,
    ConfigurationError,
    ContentStashError,
    ContentTypeRejectedError,
    RecordError,
    RollbackError,
    SourceError,
    StoreAccessError,
    StoreError,
    StoreWriteError,
    StreamError,
    StreamPositionError,
    StreamReadError,
    TransactionError,
    TransactionStateError,
)
from contentstash.core.models import (
    Classification,
    ContentDigest,
    FileRecord,
    IngestResult,
    StoredFile,
    TransactionState,
)
from contentstash.core.ports import (
    ContentStream,
    ExecutorPort,
    NullProgressReporter,
    ProgressCallback,
    ProgressReporter,
    RecordRepository,
    RecordSession,
    TransactionHandle,
)
from contentstash.core.services import Ingestor
from contentstash.core.sniffing import (
    check_content_type,
    classify,
    detect_content_type,
    sniff,
)
from contentstash.core.unit_of_work import UnitOfWork, finalize
from contentstash.log import configure_logging, get_request_id, request_scope
from contentstash.progress import RichProgressReporter


__version__ = "0.1.0"

__all__ = [
    "Classification",
    "CommitError",
    "ConfigurationError",
    "ContentDigest",
    "ContentStashError",
    "ContentStore",
    "ContentStream",
    "ContentTypeRejectedError",
    "ExecutorPort",
    "FileRecord",
    "IngestResult",
    "Ingestor",
    "NullProgressReporter",
    "ProgressCallback",
    "ProgressReporter",
    "RecordError",
    "RecordRepository",
    "RecordSession",
    "RichProgressReporter",
    "RollbackError",
    "SourceError",
    "SqliteRecordRepository",
    "SqliteSession",
    "StashSettings",
    "StoreAccessError",
    "StoreError",
    "StoreWriteError",
    "StoredFile",
    "StreamError",
    "StreamPositionError",
    "StreamReadError",
    "SynchronousExecutor",
    "ThreadPoolExecutorAdapter",
    "TransactionError",
    "TransactionHandle",
    "TransactionState",
    "TransactionStateError",
    "UnitOfWork",
    "__version__",
    "check_content_type",
    "classify",
    "compute_identifier",
    "configure_logging",
    "content_digest",
    "detect_content_type",
    "finalize",
    "find_project_root",
    "get_request_id",
    "load_settings",
    "request_scope",
    "sniff",
]
