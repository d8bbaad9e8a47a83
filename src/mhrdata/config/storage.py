"""Data storage configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "mhrdata"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    override_dir: Path | None = None
    output_dir: Path | None = None
    snapshot_dir: Path | None = None
    http_cache_filename: str = HTTP_CACHE_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def overrides_path(self) -> Path:
        """Directory holding the hand-edited override files; never created."""

        return (self.override_dir or self.resolve_data_dir() / "overrides").expanduser()

    def output_path(self, *, ensure: bool = True) -> Path:
        return self._subdir(self.output_dir, "data", ensure=ensure)

    def snapshot_path(self, *, ensure: bool = True) -> Path:
        return self._subdir(self.snapshot_dir, "temp_data", ensure=ensure)

    def http_cache_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.http_cache_filename

    def _subdir(self, configured: Path | None, default_name: str, *, ensure: bool) -> Path:
        path = (configured or self.resolve_data_dir() / default_name).expanduser()
        if ensure:
            path.mkdir(parents=True, exist_ok=True)
        return path


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def _env_path(name: str) -> Path | None:
    value = os.getenv(name)
    return Path(value) if value else None


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv("MHRDATA_DATA_DIR")
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    return StorageConfig(
        data_dir=data_dir,
        override_dir=_env_path("MHRDATA_OVERRIDE_DIR"),
        output_dir=_env_path("MHRDATA_OUTPUT_DIR"),
        snapshot_dir=_env_path("MHRDATA_SNAPSHOT_DIR"),
    )
