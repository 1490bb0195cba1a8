"""Content-type sniffing and allow-list enforcement.

Types are detected from magic bytes, never from filenames or declared
headers. Only the first SNIFF_LEN bytes are inspected and the stream
position is left untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import filetype

from contentstash.core.exceptions import ContentTypeRejectedError
from contentstash.core.models import Classification
from contentstash.core.streams import preserved_position, read_head


if TYPE_CHECKING:
    from contentstash.core.ports import ContentStream


SNIFF_LEN = 512

OCTET_STREAM = "application/octet-stream"
TEXT_PLAIN = "text/plain; charset=utf-8"

# Control bytes that never appear in text (tab, LF, FF, CR and ESC are allowed)
_BINARY_BYTES = frozenset(
    [*range(0x00, 0x09), 0x0B, *range(0x0E, 0x1B), *range(0x1C, 0x20)]
)


def detect_content_type(header: bytes) -> str:
    """Classify leading bytes into a MIME type.

    Args:
        header: Leading bytes of the content (at most SNIFF_LEN are used).

    Returns:
        The MIME type matched by magic bytes, "text/plain; charset=utf-8"
        for content without binary control bytes, or
        "application/octet-stream" otherwise (including empty input).
    """
    data = header[:SNIFF_LEN]
    if not data:
        return OCTET_STREAM

    kind = filetype.guess(data)
    if kind is not None:
        return kind.mime

    if any(b in _BINARY_BYTES for b in data):
        return OCTET_STREAM
    return TEXT_PLAIN


def sniff(stream: ContentStream) -> str:
    """Detect the stream's content type without moving its read position."""
    with preserved_position(stream):
        header = read_head(stream, SNIFF_LEN)
    return detect_content_type(header)


def classify(stream: ContentStream, *allowed: str) -> Classification:
    """Detect the content type and report whether it is allowed.

    Never raises on rejection; use check_content_type() for that.
    """
    detected = sniff(stream)
    return Classification(detected_type=detected, accepted=detected in allowed)


def check_content_type(stream: ContentStream, *allowed: str) -> str:
    """Detect the content type and enforce the allow-list.

    Args:
        stream: Seekable binary stream; its position is preserved.
        *allowed: Accepted MIME types, compared exactly.

    Returns:
        The detected MIME type.

    Raises:
        ContentTypeRejectedError: If the type isn't allowed. The detected
            type is available as ``detected_type``.
        StreamPositionError: If the stream can't be positioned.
        StreamReadError: If reading the header fails.
    """
    result = classify(stream, *allowed)
    if not result.accepted:
        raise ContentTypeRejectedError(result.detected_type, allowed)
    return result.detected_type
