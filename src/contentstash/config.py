"""Configuration utilities for contentstash.

Settings live in ``.contentstash/config.toml`` under the project root. Every
key is optional:

    storage_dir = ".contentstash/objects"
    database = ".contentstash/records.db"
    allowed_types = ["image/jpeg", "image/png"]
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from contentstash.core.exceptions import ConfigurationError


STASH_DIR = ".contentstash"
CONFIG_FILENAME = "config.toml"

DEFAULT_STORAGE_DIR = f"{STASH_DIR}/objects"
DEFAULT_DATABASE = f"{STASH_DIR}/records.db"
DEFAULT_ALLOWED_TYPES = ("image/jpeg", "image/png")


def find_project_root(start: Path | None = None) -> Path:
    """Find the project root directory by walking up from start directory.

    Searches for marker files in the following priority order:
    1. .contentstash - Explicit project marker
    2. pyproject.toml - Python project root
    3. .git - Version control root

    Args:
        start: Directory to start searching from. If None, uses current directory.

    Returns:
        Path to project root directory. Returns start directory if no markers found.
    """
    if start is None:
        start = Path.cwd()

    markers = [STASH_DIR, "pyproject.toml", ".git"]
    current = start.resolve()

    for parent in [current, *current.parents]:
        for marker in markers:
            if (parent / marker).exists():
                return parent

    return start.resolve()


@dataclass(frozen=True, slots=True)
class StashSettings:
    """Resolved settings for a project.

    Attributes:
        root: Project root directory.
        storage_dir: Absolute directory holding stored content.
        database: Absolute path of the SQLite records database.
        allowed_types: MIME types accepted on ingest.
    """

    root: Path
    storage_dir: Path
    database: Path
    allowed_types: tuple[str, ...] = field(default=DEFAULT_ALLOWED_TYPES)

    @property
    def config_path(self) -> Path:
        """Location of the settings file for this root."""
        return self.root / STASH_DIR / CONFIG_FILENAME


def _resolve(root: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else root / path


def load_settings(root: Path | None = None) -> StashSettings:
    """Load settings for a project, falling back to defaults.

    Args:
        root: Project root. Discovered from the current directory if None.

    Returns:
        StashSettings with paths resolved against the root.

    Raises:
        ConfigurationError: If the settings file is invalid.
    """
    root = find_project_root() if root is None else root.resolve()
    config_path = root / STASH_DIR / CONFIG_FILENAME

    data: dict[str, object] = {}
    if config_path.exists():
        try:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(
                f"Invalid settings file: {e}", path=config_path, cause=e
            ) from e

    storage_dir = data.get("storage_dir", DEFAULT_STORAGE_DIR)
    database = data.get("database", DEFAULT_DATABASE)
    allowed_types = data.get("allowed_types", list(DEFAULT_ALLOWED_TYPES))

    if not isinstance(storage_dir, str) or not isinstance(database, str):
        raise ConfigurationError(
            "'storage_dir' and 'database' must be strings", path=config_path
        )
    if not isinstance(allowed_types, list) or not all(
        isinstance(t, str) for t in allowed_types
    ):
        raise ConfigurationError(
            "'allowed_types' must be a list of strings", path=config_path
        )

    return StashSettings(
        root=root,
        storage_dir=_resolve(root, storage_dir),
        database=_resolve(root, database),
        allowed_types=tuple(allowed_types),
    )
