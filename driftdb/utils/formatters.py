"""Formatting utilities for backup listings."""

import os
from datetime import datetime
from typing import Optional


def format_size_mb(size_bytes: int) -> str:
    """Format a file size in megabytes.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Size string such as ``1.50 MB``.
    """
    return f"{size_bytes / 1024 / 1024:.2f} MB"


def format_backup_age(modified_time: datetime, now: Optional[datetime] = None) -> str:
    """Format how long ago a backup was written.

    Args:
        modified_time: When the backup was last modified.
        now: Reference time. Defaults to the current time.

    Returns:
        Age string such as ``12 min ago``, ``3 hours ago`` or ``1.5 days ago``.
    """
    now = now or datetime.now()
    seconds = max((now - modified_time).total_seconds(), 0)

    if seconds < 3600:
        return f"{seconds / 60:.0f} min ago"
    elif seconds < 24 * 3600:
        return f"{seconds / 3600:.0f} hours ago"
    else:
        return f"{seconds / 86400:.1f} days ago"


def backup_display_path(path: str, project_root: str) -> str:
    """Format a backup path relative to the project root when it lies inside it.

    Args:
        path: Absolute backup path.
        project_root: Project root directory.

    Returns:
        Relative path string, or ``path`` unchanged when outside the root.
    """
    try:
        rel_path = os.path.relpath(path, project_root)
    except ValueError:
        return path

    if rel_path == os.curdir or rel_path == os.pardir or rel_path.startswith(os.pardir + os.sep):
        return path
    return rel_path
