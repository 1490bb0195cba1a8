"""Core domain services for contentstash."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from contentstash.core.exceptions import (
    ContentStashError,
    ContentTypeRejectedError,
    SourceError,
)
from contentstash.core.models import FileRecord, IngestResult
from contentstash.core.ports import NullProgressReporter
from contentstash.core.sniffing import check_content_type
from contentstash.core.unit_of_work import UnitOfWork
from contentstash.log import get_request_id, request_scope


if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from contentstash.adapters.storage import ContentStore
    from contentstash.config import StashSettings
    from contentstash.core.ports import (
        ContentStream,
        ExecutorPort,
        ProgressCallback,
        ProgressReporter,
        RecordRepository,
    )


logger = logging.getLogger(__name__)


class Ingestor:
    """Validates, stores and records incoming content.

    Each ingest sniffs the content type, stores the bytes once per distinct
    content, and records the stored file in the repository. The store write
    and the record insert share one unit of work: the record is committed
    only if both succeed. A stored file whose record was rolled back stays
    on disk; it is content-addressed and the next ingest reuses it.
    """

    def __init__(
        self,
        store: ContentStore,
        repository: RecordRepository,
        allowed_types: Iterable[str],
        executor: ExecutorPort | None = None,
    ) -> None:
        self._store = store
        self._repository = repository
        self._allowed_types = tuple(allowed_types)
        self._executor = executor

    @classmethod
    def from_settings(
        cls,
        settings: StashSettings,
        executor: ExecutorPort | None = None,
    ) -> Ingestor:
        """Create an Ingestor with the default filesystem and SQLite adapters.

        The storage directory and database schema are created if missing.
        """
        from contentstash.adapters.records import SqliteRecordRepository
        from contentstash.adapters.storage import ContentStore

        settings.storage_dir.mkdir(parents=True, exist_ok=True)
        repository = SqliteRecordRepository(settings.database)
        repository.initialize()

        return cls(
            store=ContentStore(settings.storage_dir),
            repository=repository,
            allowed_types=settings.allowed_types,
            executor=executor,
        )

    @property
    def allowed_types(self) -> tuple[str, ...]:
        """MIME types accepted on ingest."""
        return self._allowed_types

    @property
    def repository(self) -> RecordRepository:
        """The metadata repository records are written to."""
        return self._repository

    def ingest(
        self,
        stream: ContentStream,
        extension: str = "",
        progress: ProgressCallback | None = None,
    ) -> IngestResult:
        """Ingest one stream.

        Args:
            stream: Seekable binary stream; its position is preserved.
            extension: Appended to the stored filename (e.g. ".png").
            progress: Optional callback function(bytes_written, total_bytes).

        Returns:
            IngestResult for the stored file.

        Raises:
            ContentTypeRejectedError: If the content type isn't allowed.
            StreamError: If the stream can't be read or positioned.
            StoreError: If the content can't be stored.
            RecordError: If the record can't be written.
            TransactionError: If the transaction can't be finalized.
        """
        try:
            content_type = check_content_type(stream, *self._allowed_types)
        except ContentTypeRejectedError as e:
            logger.info("rejected content of type %s", e.detected_type)
            raise

        session = self._repository.session()
        try:
            with UnitOfWork(session):
                stored = self._store.save(stream, extension, progress=progress)
                recorded = session.add(
                    FileRecord.from_stored(stored, content_type, get_request_id())
                )
        finally:
            session.close()

        logger.info(
            "%s %s (%s, %d bytes)",
            "stored" if stored.created else "deduplicated",
            stored.name,
            content_type,
            stored.size,
        )
        return IngestResult(stored=stored, content_type=content_type, recorded=recorded)

    def ingest_path(
        self,
        path: Path,
        progress: ProgressReporter | None = None,
    ) -> IngestResult:
        """Ingest a local file, using its lowercased suffix as extension.

        Raises:
            SourceError: If the file can't be opened or inspected.
            ContentStashError: See ingest().
        """
        reporter = progress or NullProgressReporter()
        try:
            f = path.open("rb")
        except OSError as e:
            raise SourceError(
                f"can't open source file {path}: {e}", path=path, cause=e
            ) from e

        with f:
            try:
                size = os.fstat(f.fileno()).st_size
            except OSError as e:
                raise SourceError(
                    f"can't inspect source file {path}: {e}", path=path, cause=e
                ) from e
            callback = reporter.start_task(path.name, size)
            try:
                return self.ingest(f, path.suffix.lower(), progress=callback)
            finally:
                reporter.finish_task(path.name)

    def ingest_paths(
        self,
        paths: Iterable[Path],
        progress: ProgressReporter | None = None,
        max_workers: int | None = None,
    ) -> dict[Path, IngestResult | ContentStashError]:
        """Ingest several files, each in its own request scope.

        Files are ingested in parallel when an executor is injected and
        max_workers != 1; otherwise sequentially. A failure for one file
        doesn't stop the others. Repeated paths are ingested once.

        Args:
            paths: Files to ingest.
            progress: Optional progress reporter.
            max_workers: Use 1 to force sequential ingestion.

        Returns:
            Mapping of each distinct path, in input order, to its result or
            the library error it raised.
        """
        paths = list(dict.fromkeys(paths))
        results: dict[Path, IngestResult | ContentStashError] = {}

        def ingest_one(path: Path) -> IngestResult | ContentStashError:
            with request_scope():
                try:
                    return self.ingest_path(path, progress=progress)
                except ContentStashError as e:
                    logger.warning("failed to ingest %s: %s", path, e)
                    return e

        if max_workers == 1 or self._executor is None:
            for path in paths:
                results[path] = ingest_one(path)
            return results

        executor = self._executor
        with executor:
            futures = [(path, executor.submit(ingest_one, path)) for path in paths]
            for path, future in futures:
                result = future.result()
                assert isinstance(result, (IngestResult, ContentStashError))
                results[path] = result

        return results
