"""Unit tests for content-type sniffing."""

import io

import pytest


@pytest.mark.sniffing
@pytest.mark.tier(0)
class TestDetectContentType:
    """Tests for detect_content_type()."""

    def test_png(self, png_bytes: bytes) -> None:
        from contentstash.core.sniffing import detect_content_type

        assert detect_content_type(png_bytes) == "image/png"

    def test_jpeg(self, jpeg_bytes: bytes) -> None:
        from contentstash.core.sniffing import detect_content_type

        assert detect_content_type(jpeg_bytes) == "image/jpeg"

    def test_gif(self, gif_bytes: bytes) -> None:
        from contentstash.core.sniffing import detect_content_type

        assert detect_content_type(gif_bytes) == "image/gif"

    def test_pdf(self) -> None:
        from contentstash.core.sniffing import detect_content_type

        assert detect_content_type(b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n") == "application/pdf"

    def test_plain_text(self, text_bytes: bytes) -> None:
        """Content without binary control bytes is plain text."""
        from contentstash.core.sniffing import TEXT_PLAIN, detect_content_type

        assert detect_content_type(text_bytes) == TEXT_PLAIN

    def test_unknown_binary(self) -> None:
        """Unrecognized binary content is a generic octet stream."""
        from contentstash.core.sniffing import OCTET_STREAM, detect_content_type

        assert detect_content_type(b"\x01\x02\x03\x04" * 16) == OCTET_STREAM

    def test_empty_is_octet_stream(self) -> None:
        from contentstash.core.sniffing import OCTET_STREAM, detect_content_type

        assert detect_content_type(b"") == OCTET_STREAM

    def test_ignores_filename_like_content(self) -> None:
        """Text that merely looks like a filename is still text."""
        from contentstash.core.sniffing import TEXT_PLAIN, detect_content_type

        assert detect_content_type(b"avatar.png") == TEXT_PLAIN


@pytest.mark.sniffing
@pytest.mark.tier(0)
class TestCheckContentType:
    """Tests for check_content_type()."""

    def test_png_rejected_when_only_jpeg_allowed(self, png_bytes: bytes) -> None:
        """A PNG against {image/jpeg} is rejected but the type is reported."""
        from contentstash.core.exceptions import ContentTypeRejectedError
        from contentstash.core.sniffing import check_content_type

        with pytest.raises(ContentTypeRejectedError) as exc_info:
            check_content_type(io.BytesIO(png_bytes), "image/jpeg")

        assert exc_info.value.detected_type == "image/png"
        assert exc_info.value.allowed == ("image/jpeg",)

    def test_png_accepted_when_allowed(self, png_bytes: bytes) -> None:
        from contentstash.core.sniffing import check_content_type

        assert check_content_type(io.BytesIO(png_bytes), "image/png") == "image/png"

    def test_accepts_any_of_several(self, jpeg_bytes: bytes) -> None:
        from contentstash.core.sniffing import check_content_type

        detected = check_content_type(
            io.BytesIO(jpeg_bytes), "image/png", "image/jpeg"
        )

        assert detected == "image/jpeg"

    def test_empty_stream_not_implicitly_allowed(self) -> None:
        """An empty stream is rejected unless octet-stream is allowed."""
        from contentstash.core.exceptions import ContentTypeRejectedError
        from contentstash.core.sniffing import OCTET_STREAM, check_content_type

        with pytest.raises(ContentTypeRejectedError) as exc_info:
            check_content_type(io.BytesIO(b""), "image/png")
        assert exc_info.value.detected_type == OCTET_STREAM

        assert check_content_type(io.BytesIO(b""), OCTET_STREAM) == OCTET_STREAM

    def test_no_allowed_types_rejects_everything(self, png_bytes: bytes) -> None:
        from contentstash.core.exceptions import ContentTypeRejectedError
        from contentstash.core.sniffing import check_content_type

        with pytest.raises(ContentTypeRejectedError):
            check_content_type(io.BytesIO(png_bytes))

    def test_position_preserved_on_success_and_rejection(
        self, png_bytes: bytes
    ) -> None:
        """The stream offset is unchanged whether or not the type is allowed."""
        from contentstash.core.exceptions import ContentTypeRejectedError
        from contentstash.core.sniffing import check_content_type

        stream = io.BytesIO(png_bytes)

        check_content_type(stream, "image/png")
        assert stream.tell() == 0

        with pytest.raises(ContentTypeRejectedError):
            check_content_type(stream, "image/jpeg")
        assert stream.tell() == 0

    def test_sniffs_from_current_offset(self, png_bytes: bytes) -> None:
        """Sniffing starts at the caller's offset, which is then restored."""
        from contentstash.core.sniffing import check_content_type

        stream = io.BytesIO(b"prefix" + png_bytes)
        stream.seek(6)

        assert check_content_type(stream, "image/png") == "image/png"
        assert stream.tell() == 6

    def test_reads_at_most_512_bytes(self) -> None:
        """Only the header is read, not the whole stream."""
        from contentstash.core.sniffing import SNIFF_LEN, classify

        class CountingStream(io.BytesIO):
            requested = 0

            def read(self, size: int | None = -1) -> bytes:
                data = super().read(size)
                CountingStream.requested += len(data)
                return data

        stream = CountingStream(b"a" * 10_000)
        classify(stream)

        assert CountingStream.requested == SNIFF_LEN

    def test_read_failure(self, flaky_stream) -> None:
        from contentstash.core.exceptions import StreamReadError
        from contentstash.core.sniffing import check_content_type

        with pytest.raises(StreamReadError) as exc_info:
            check_content_type(flaky_stream(b"data", fail_read_after=0), "image/png")

        assert exc_info.value.operation == "sniff"


@pytest.mark.sniffing
@pytest.mark.tier(0)
class TestClassify:
    """Tests for classify()."""

    def test_returns_classification(self, png_bytes: bytes) -> None:
        from contentstash.core.models import Classification
        from contentstash.core.sniffing import classify

        assert classify(io.BytesIO(png_bytes), "image/jpeg") == Classification(
            detected_type="image/png", accepted=False
        )
        assert classify(io.BytesIO(png_bytes), "image/png").accepted is True
