"""Unit tests for configuration utilities.

These tests cover project root discovery and loading settings from
``.contentstash/config.toml``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from pathlib import Path

from contentstash.config import find_project_root, load_settings


def _write_config(root: Path, text: str) -> Path:
    stash = root / ".contentstash"
    stash.mkdir(exist_ok=True)
    config = stash / "config.toml"
    config.write_text(text)
    return config


@pytest.mark.core
class TestFindProjectRoot:
    """Tests for find_project_root utility."""

    def test_finds_stash_marker(self, tmp_path: Path) -> None:
        """Should find directory containing .contentstash marker."""
        # Arrange
        (tmp_path / ".contentstash").mkdir()
        subdir = tmp_path / "subdir" / "deeper"
        subdir.mkdir(parents=True)

        # Act
        result = find_project_root(start=subdir)

        # Assert
        assert result == tmp_path.resolve()

    def test_finds_pyproject(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").touch()
        subdir = tmp_path / "src" / "app"
        subdir.mkdir(parents=True)

        assert find_project_root(start=subdir) == tmp_path.resolve()

    def test_stash_marker_wins_over_pyproject_in_same_dir(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").touch()
        (tmp_path / ".contentstash").mkdir()

        assert find_project_root(start=tmp_path) == tmp_path.resolve()

    def test_nearest_marker_wins(self, tmp_path: Path) -> None:
        """A nested project shadows the outer one."""
        (tmp_path / ".git").mkdir()
        inner = tmp_path / "inner"
        inner.mkdir()
        (inner / "pyproject.toml").touch()

        assert find_project_root(start=inner) == inner.resolve()

    def test_defaults_to_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / ".contentstash").mkdir()
        monkeypatch.chdir(tmp_path)

        assert find_project_root() == tmp_path.resolve()


@pytest.mark.core
class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults_without_config_file(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path)

        root = tmp_path.resolve()
        assert settings.root == root
        assert settings.storage_dir == root / ".contentstash" / "objects"
        assert settings.database == root / ".contentstash" / "records.db"
        assert settings.allowed_types == ("image/jpeg", "image/png")
        assert settings.config_path == root / ".contentstash" / "config.toml"

    def test_reads_values_from_toml(self, tmp_path: Path) -> None:
        _write_config(
            tmp_path,
            'storage_dir = "blobs"\n'
            'database = "meta/files.db"\n'
            'allowed_types = ["image/gif"]\n',
        )

        settings = load_settings(tmp_path)

        root = tmp_path.resolve()
        assert settings.storage_dir == root / "blobs"
        assert settings.database == root / "meta" / "files.db"
        assert settings.allowed_types == ("image/gif",)

    def test_absolute_paths_kept(self, tmp_path: Path) -> None:
        elsewhere = tmp_path / "elsewhere"
        _write_config(tmp_path, f'storage_dir = "{elsewhere.as_posix()}"\n')

        assert load_settings(tmp_path).storage_dir == elsewhere

    def test_empty_allow_list_is_respected(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "allowed_types = []\n")

        assert load_settings(tmp_path).allowed_types == ()

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        from contentstash.core.exceptions import ConfigurationError

        config = _write_config(tmp_path, "storage_dir = \n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(tmp_path)

        assert exc_info.value.path == config.resolve()
        assert str(config.resolve()) in exc_info.value.recovery_hint

    def test_wrong_types_raise(self, tmp_path: Path) -> None:
        from contentstash.core.exceptions import ConfigurationError

        _write_config(tmp_path, 'allowed_types = "image/png"\n')

        with pytest.raises(ConfigurationError, match="allowed_types"):
            load_settings(tmp_path)

    def test_non_string_path_raises(self, tmp_path: Path) -> None:
        from contentstash.core.exceptions import ConfigurationError

        _write_config(tmp_path, "database = 3\n")

        with pytest.raises(ConfigurationError, match="must be strings"):
            load_settings(tmp_path)
