"""Local backup discovery."""

import os
import logging
from datetime import datetime
from typing import Any, List, Optional, Set

from .exceptions import BackupDirectoryError
from .models import BackupFile

BACKUP_EXTENSION = ".backup"


class BackupScanner:
    """Finds .backup files in the configured backup directory and project root."""

    def __init__(self, config: Optional[Any] = None):
        """Initialize backup scanner.

        Args:
            config: Object exposing ``backup_path`` and ``project_root``
                (normally a loaded ConfigManager). When omitted, only the
                current working directory is searched.
        """
        self.config = config
        self.logger = logging.getLogger(__name__)

    def search_directories(self) -> List[str]:
        """Get the ordered list of directories to search for backups.

        Returns:
            Absolute directories, backup directory first, then project root,
            without duplicates.
        """
        directories: List[str] = []
        seen: Set[str] = set()

        def add_directory(directory: Optional[str]) -> None:
            if not directory or not directory.strip():
                return
            try:
                absolute = os.path.abspath(directory)
            except (OSError, ValueError):
                absolute = os.path.normpath(directory)
            if absolute in seen:
                return
            seen.add(absolute)
            directories.append(absolute)

        if self.config is not None:
            add_directory(self.config.backup_path)
            add_directory(self.config.project_root)
            return directories

        try:
            add_directory(os.getcwd())
        except OSError as e:
            self.logger.debug(f"Current directory unavailable: {e}")
        return directories

    def discover(self) -> List[BackupFile]:
        """Scan the search directories and build the backup catalog.

        Returns:
            BackupFile entries sorted newest first, ties broken by name.

        Raises:
            BackupDirectoryError: If a search directory exists but cannot be read.
        """
        backups: List[BackupFile] = []
        seen: Set[str] = set()

        for directory in self.search_directories():
            self.logger.info(f"Scanning {directory} for backups")
            for backup in self._scan_directory(directory):
                if backup.path in seen:
                    continue
                seen.add(backup.path)
                backups.append(backup)

        backups.sort(key=lambda b: b.name)
        backups.sort(key=lambda b: b.modified_time, reverse=True)

        self.logger.info(f"Found {len(backups)} backup files")
        return backups

    def _scan_directory(self, directory: str) -> List[BackupFile]:
        """List the backup files directly inside one directory."""
        results = []

        try:
            entries = list(os.scandir(directory))
        except FileNotFoundError:
            self.logger.debug(f"Skipping missing backup directory {directory}")
            return results
        except OSError as e:
            raise BackupDirectoryError(
                directory, f"failed to read backup directory {directory}: {e}"
            ) from e

        for entry in entries:
            if not entry.name.lower().endswith(BACKUP_EXTENSION):
                continue

            try:
                if not entry.is_file():
                    continue
                entry_stat = entry.stat()
            except OSError as e:
                self.logger.debug(f"Skipping {entry.path}: {e}")
                continue

            results.append(BackupFile(
                name=entry.name,
                path=os.path.abspath(entry.path),
                directory=directory,
                size_bytes=entry_stat.st_size,
                modified_time=datetime.fromtimestamp(entry_stat.st_mtime),
            ))

        return results


def discover_local_backups(config: Optional[Any] = None) -> List[BackupFile]:
    """Build the backup catalog for a configuration."""
    return BackupScanner(config).discover()


def timestamped_backup_filename(prefix: str, now: Optional[datetime] = None) -> str:
    """Build a backup filename such as ``prod_20260215_143000.backup``.

    Args:
        prefix: Environment prefix; lower-cased, ``backup`` when blank.
        now: Timestamp to embed. Defaults to the current local time.
    """
    normalized = (prefix or "").strip().lower() or "backup"
    now = now or datetime.now()
    return f"{normalized}_{now.strftime('%Y%m%d_%H%M%S')}{BACKUP_EXTENSION}"
