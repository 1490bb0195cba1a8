"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fixtures and fakes for the test suite.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 56
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x00" * 53
GIF_BYTES = b"GIF89a" + b"\x00" * 58
TEXT_BYTES = b"hello world\n"


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, ports, and services")
    config.addinivalue_line("markers", "storage: Content store adapter")
    config.addinivalue_line("markers", "sniffing: Content-type detection")
    config.addinivalue_line("markers", "transaction: Unit of work finalization")
    config.addinivalue_line("markers", "records: SQLite record repository")
    config.addinivalue_line("markers", "progress: Rich progress integration")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


class FakeTransaction:
    """TransactionHandle that records calls and can be told to fail."""

    def __init__(
        self,
        commit_error: Exception | None = None,
        rollback_error: Exception | None = None,
    ) -> None:
        self.commit_error = commit_error
        self.rollback_error = rollback_error
        self.calls: list[str] = []

    def commit(self) -> None:
        self.calls.append("commit")
        if self.commit_error is not None:
            raise self.commit_error

    def rollback(self) -> None:
        self.calls.append("rollback")
        if self.rollback_error is not None:
            raise self.rollback_error


class FlakyStream(io.BytesIO):
    """BytesIO whose tell/seek/read can be made to fail."""

    def __init__(
        self,
        data: bytes,
        fail_tell: bool = False,
        fail_seek: bool = False,
        fail_read_after: int | None = None,
    ) -> None:
        super().__init__(data)
        self.fail_tell = fail_tell
        self.fail_seek = fail_seek
        self.fail_read_after = fail_read_after
        self.reads = 0

    def tell(self) -> int:
        if self.fail_tell:
            raise OSError("tell failed")
        return super().tell()

    def seek(self, offset: int, whence: int = 0) -> int:
        if self.fail_seek:
            raise OSError("seek failed")
        return super().seek(offset, whence)

    def read(self, size: int | None = -1) -> bytes:
        if self.fail_read_after is not None and self.reads >= self.fail_read_after:
            raise OSError("read failed")
        self.reads += 1
        return super().read(size)


@pytest.fixture
def fake_tx() -> FakeTransaction:
    """A transaction handle whose commit and rollback succeed."""
    return FakeTransaction()


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    """An empty store directory."""
    directory = tmp_path / "objects"
    directory.mkdir()
    return directory


@pytest.fixture
def make_tx() -> type[FakeTransaction]:
    """Factory for transaction handles with configurable failures."""
    return FakeTransaction


@pytest.fixture
def flaky_stream() -> type[FlakyStream]:
    """Factory for streams with configurable tell/seek/read failures."""
    return FlakyStream


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def gif_bytes() -> bytes:
    return GIF_BYTES


@pytest.fixture
def text_bytes() -> bytes:
    return TEXT_BYTES
