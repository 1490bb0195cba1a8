"""Content-addressed filesystem store."""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path
from typing import IO, TYPE_CHECKING

from contentstash.core.addressing import content_digest
from contentstash.core.exceptions import StoreAccessError, StoreWriteError
from contentstash.core.models import StoredFile
from contentstash.core.streams import iter_chunks, preserved_position


if TYPE_CHECKING:
    from contentstash.core.ports import ContentStream, ProgressCallback


FILE_MODE = 0o644

_TEMP_SUFFIX = ".part"


class ContentStore:
    """Stores stream contents once per distinct content in a directory.

    Files are named by the SHA-256 of their content plus an extension.
    New content is written to a temporary file in the same directory and
    renamed into place, so a reader never sees a partially written file and
    concurrent saves of identical content all succeed.

    Attributes:
        directory: Directory holding stored files. Must exist and be writable.
    """

    def __init__(self, directory: Path) -> None:
        """Initialize the store with a directory path.

        Args:
            directory: Directory where stored files are placed.
        """
        self.directory = directory

    def path_for(self, name: str) -> Path:
        """Get the path for a stored filename."""
        return self.directory / name

    def exists(self, name: str) -> bool:
        """Check whether a stored file exists."""
        return self.path_for(name).is_file()

    def open(self, name: str) -> IO[bytes]:
        """Open a stored file for reading."""
        return self.path_for(name).open("rb")

    def save(
        self,
        stream: ContentStream,
        extension: str = "",
        progress: ProgressCallback | None = None,
    ) -> StoredFile:
        """Store the stream's content unless identical content is stored.

        The stream is read from its current offset to EOF and repositioned
        to that offset afterwards, whichever branch is taken.

        Args:
            stream: Seekable binary stream.
            extension: Appended verbatim to the identifier (e.g. ".png").
            progress: Optional callback function(bytes_written, total_bytes).

        Returns:
            StoredFile describing the file; ``created`` is False when the
            content was already stored.

        Raises:
            ValueError: If extension contains a path separator or NUL.
            StreamPositionError: If the stream can't be positioned.
            StreamReadError: If reading the stream fails.
            StoreAccessError: If the existence check fails.
            StoreWriteError: If the file can't be written.
        """
        return self.save_to(stream, extension, self.directory, progress=progress)

    def save_to(
        self,
        stream: ContentStream,
        extension: str,
        directory: Path,
        progress: ProgressCallback | None = None,
    ) -> StoredFile:
        """Store the stream's content in an explicit directory. See save()."""
        _check_extension(extension)

        with preserved_position(stream):
            digest = content_digest(stream)
            stored = StoredFile(
                identifier=digest.hexdigest,
                extension=extension,
                directory=directory,
                size=digest.size,
            )
            path = stored.path

            try:
                path.stat()
            except FileNotFoundError:
                pass
            except OSError as e:
                raise StoreAccessError(
                    f"can't check file stat: {path}",
                    path=path,
                    operation="stat",
                    cause=e,
                ) from e
            else:
                return stored

            _write_atomically(stream, path, digest.size, progress)

        return StoredFile(
            identifier=stored.identifier,
            extension=extension,
            directory=directory,
            size=stored.size,
            created=True,
        )


def _check_extension(extension: str) -> None:
    separators = {os.sep, "/", "\0"}
    if os.altsep:
        separators.add(os.altsep)
    if any(sep in extension for sep in separators):
        raise ValueError(f"Extension must not contain path separators: {extension!r}")


def _write_atomically(
    stream: ContentStream,
    path: Path,
    total_size: int,
    progress: ProgressCallback | None,
) -> None:
    """Copy the stream into a temp file next to path, then rename it into place.

    os.replace is atomic on POSIX and Windows; if another writer renamed the
    same content first, the identical file is replaced with an identical one.
    """
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=_TEMP_SUFFIX
        )
    except OSError as e:
        raise StoreWriteError(
            f"can't create file to save content: {path}",
            path=path,
            operation="create",
            cause=e,
        ) from e

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as dst:
            bytes_written = 0
            for chunk in iter_chunks(stream, operation="copy"):
                try:
                    dst.write(chunk)
                except OSError as e:
                    raise StoreWriteError(
                        f"can't write content to file: {path}",
                        path=path,
                        operation="write",
                        cause=e,
                    ) from e
                bytes_written += len(chunk)
                if progress:
                    progress(bytes_written, total_size)
            try:
                dst.flush()
                os.fsync(dst.fileno())
            except OSError as e:
                raise StoreWriteError(
                    f"can't flush content to file: {path}",
                    path=path,
                    operation="write",
                    cause=e,
                ) from e

        try:
            os.chmod(tmp_path, FILE_MODE)
            os.replace(tmp_path, path)
        except OSError as e:
            raise StoreWriteError(
                f"can't move content into place: {path}",
                path=path,
                operation="rename",
                cause=e,
            ) from e
    finally:
        with contextlib.suppress(OSError):
            tmp_path.unlink(missing_ok=True)
