"""Utility modules for drift-db output."""

from .formatters import backup_display_path, format_backup_age, format_size_mb

__all__ = ["backup_display_path", "format_backup_age", "format_size_mb"]
