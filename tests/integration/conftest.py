"""Shared fixtures for integration tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def incoming(tmp_path: Path, png_bytes: bytes, jpeg_bytes: bytes, text_bytes: bytes):
    """A directory of uploads: two distinct images, a copy, and a text file."""
    directory = tmp_path / "incoming"
    directory.mkdir()
    (directory / "a.png").write_bytes(png_bytes)
    (directory / "a-copy.PNG").write_bytes(png_bytes)
    (directory / "b.jpg").write_bytes(jpeg_bytes)
    (directory / "notes.txt").write_bytes(text_bytes)
    return directory
