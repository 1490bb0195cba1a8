"""Core domain module for contentstash.

This module contains domain models, port definitions and the three core
contracts: content addressing, content-type sniffing and the unit of work.
"""

from contentstash.core.addressing import compute_identifier, content_digest
from contentstash.core.models import (
    Classification,
    ContentDigest,
    FileRecord,
    IngestResult,
    StoredFile,
    TransactionState,
)
from contentstash.core.ports import ContentStream, ProgressCallback, TransactionHandle
from contentstash.core.sniffing import check_content_type, classify, detect_content_type
from contentstash.core.unit_of_work import UnitOfWork, finalize


__all__ = [
    "Classification",
    "ContentDigest",
    "ContentStream",
    "FileRecord",
    "IngestResult",
    "ProgressCallback",
    "StoredFile",
    "TransactionHandle",
    "TransactionState",
    "UnitOfWork",
    "check_content_type",
    "classify",
    "compute_identifier",
    "content_digest",
    "detect_content_type",
    "finalize",
]
