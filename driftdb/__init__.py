"""
drift-db - Local database backup and migration bookkeeping.

This package finds local Postgres backups, picks the right one for an
environment, parses connection URLs and reconciles migration listings with
local migration files.
"""

__version__ = "0.3.0"

from .core.scanner import BackupScanner
from .core.selector import resolve_backup_path, suggest_backup
from .core.connection import parse_connection_url
from .config.config_manager import ConfigManager

__all__ = ["BackupScanner", "ConfigManager", "parse_connection_url", "resolve_backup_path", "suggest_backup"]
