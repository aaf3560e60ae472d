"""Backup inventory, connection parsing and migration reconciliation."""

from .models import BackupFile, ConnectionParams, MigrationListRow
from .scanner import BackupScanner, discover_local_backups, timestamped_backup_filename
from .selector import (
    Environment,
    filter_backups,
    find_backup_by_name,
    normalize_environment,
    resolve_backup_path,
    suggest_backup,
)
from .connection import parse_connection_url, session_mode_url

__all__ = [
    "BackupFile", "ConnectionParams", "MigrationListRow",
    "BackupScanner", "discover_local_backups", "timestamped_backup_filename",
    "Environment", "filter_backups", "find_backup_by_name", "normalize_environment",
    "resolve_backup_path", "suggest_backup",
    "parse_connection_url", "session_mode_url",
]
