"""Non-destructive stream helpers.

Every core operation inspects a caller-owned stream and must leave its read
position exactly where it found it, on success and on error.
"""

from __future__ import annotations

import io
from contextlib import contextmanager
from typing import TYPE_CHECKING

from contentstash.core.exceptions import StreamPositionError, StreamReadError


if TYPE_CHECKING:
    from collections.abc import Iterator

    from contentstash.core.ports import ContentStream


# Chunk size for reading streams (64KB)
CHUNK_SIZE = 64 * 1024


@contextmanager
def preserved_position(stream: ContentStream) -> Iterator[int]:
    """Snapshot the stream offset and seek back to it on exit.

    Args:
        stream: Seekable stream to inspect.

    Yields:
        The offset observed on entry.

    Raises:
        StreamPositionError: If the offset can't be read, or can't be
            restored after the block completed normally. If the block raised,
            that error propagates and a failed restore is added as a note.
    """
    try:
        offset = stream.tell()
    except (OSError, ValueError) as e:
        raise StreamPositionError(
            f"can't determine stream position: {e}", operation="tell", cause=e
        ) from e

    try:
        yield offset
    except BaseException as exc:
        try:
            stream.seek(offset, io.SEEK_SET)
        except (OSError, ValueError) as seek_error:
            exc.add_note(f"stream position not restored to {offset}: {seek_error}")
        raise

    try:
        stream.seek(offset, io.SEEK_SET)
    except (OSError, ValueError) as e:
        raise StreamPositionError(
            f"can't restore stream position to {offset}: {e}",
            operation="seek",
            cause=e,
        ) from e


def iter_chunks(
    stream: ContentStream, operation: str, chunk_size: int = CHUNK_SIZE
) -> Iterator[bytes]:
    """Yield chunks until EOF, wrapping read failures.

    Args:
        stream: Stream to read from its current offset.
        operation: Name of the phase, carried by StreamReadError.
        chunk_size: Maximum bytes per read.

    Raises:
        StreamReadError: If a read fails.
    """
    while True:
        try:
            chunk = stream.read(chunk_size)
        except (OSError, ValueError) as e:
            raise StreamReadError(
                f"can't read stream during {operation}: {e}",
                operation=operation,
                cause=e,
            ) from e
        if not chunk:
            return
        yield chunk


def read_head(stream: ContentStream, size: int, operation: str = "sniff") -> bytes:
    """Read up to size bytes, looping over short reads until EOF."""
    buf = bytearray()
    while len(buf) < size:
        try:
            chunk = stream.read(size - len(buf))
        except (OSError, ValueError) as e:
            raise StreamReadError(
                f"can't read stream during {operation}: {e}",
                operation=operation,
                cause=e,
            ) from e
        if not chunk:
            break
        buf.extend(chunk)
    return bytes(buf)
