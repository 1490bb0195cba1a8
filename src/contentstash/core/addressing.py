"""Content addressing: stable identifiers derived from stream contents."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

from contentstash.core.models import ContentDigest
from contentstash.core.streams import iter_chunks, preserved_position


if TYPE_CHECKING:
    from contentstash.core.ports import ContentStream


def content_digest(stream: ContentStream) -> ContentDigest:
    """Hash the stream from its current offset to EOF with SHA-256.

    The stream is repositioned to the starting offset afterwards.

    Args:
        stream: Seekable binary stream.

    Returns:
        ContentDigest with the lowercase hex digest and byte count.

    Raises:
        StreamPositionError: If the offset can't be read or restored.
        StreamReadError: If reading fails mid-stream.
    """
    sha = hashlib.sha256()
    size = 0
    with preserved_position(stream):
        for chunk in iter_chunks(stream, operation="hash"):
            sha.update(chunk)
            size += len(chunk)
    return ContentDigest(hexdigest=sha.hexdigest(), size=size)


def compute_identifier(stream: ContentStream, extension: str = "") -> str:
    """Return the content-addressed filename for a stream.

    Args:
        stream: Seekable binary stream.
        extension: Appended verbatim, including any leading dot.

    Returns:
        SHA-256 hex digest followed by extension.

    Example:
        >>> import io
        >>> compute_identifier(io.BytesIO(b""), ".txt")[:16]
        'e3b0c44298fc1c14'
    """
    return content_digest(stream).hexdigest + extension
