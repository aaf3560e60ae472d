"""Shared fixtures: temporary project trees, backup files and configs."""

import os
from datetime import datetime
from pathlib import Path

import pytest

from driftdb.config.config_manager import ConfigManager
from driftdb.core.models import BackupFile


def _set_mtime(path: Path, modified: datetime) -> None:
    timestamp = modified.timestamp()
    os.utime(path, (timestamp, timestamp))


@pytest.fixture
def make_backup():
    """Create a backup file with a given modification time."""
    def _make(path: Path, modified: datetime, content: bytes = b"backup") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        _set_mtime(path, modified)
        return path
    return _make


@pytest.fixture
def write_config():
    """Write a .drift.yaml into a project root and load it."""
    def _write(root: Path, backup_dir: str = "backups", extra: str = "") -> ConfigManager:
        config_path = root / ".drift.yaml"
        config_path.write_text(
            "project:\n"
            "  name: test\n"
            "database:\n"
            f"  backup_dir: {backup_dir}\n"
            + extra,
            encoding="utf-8",
        )
        manager = ConfigManager(str(config_path))
        manager.load_config()
        return manager
    return _write


@pytest.fixture
def sample_backups():
    """Catalog sorted newest first, as BackupScanner.discover returns it."""
    def backup(name: str, modified: datetime) -> BackupFile:
        return BackupFile(
            name=name,
            path=f"/tmp/{name}",
            directory="/tmp",
            size_bytes=1024,
            modified_time=modified,
        )

    return [
        backup("dev_20260215_140000.backup", datetime(2026, 2, 15, 14, 0, 0)),
        backup("prod_20260215_130000.backup", datetime(2026, 2, 15, 13, 0, 0)),
        backup("dev.backup", datetime(2026, 2, 14, 9, 0, 0)),
        backup("prod.backup", datetime(2026, 2, 13, 9, 0, 0)),
    ]
