"""Reconciliation of local migration files with `supabase migration list` output."""

import os
import logging
from typing import Dict, Iterable, List, Set

from .exceptions import MigrationsDirectoryError
from .models import MigrationListRow

NO_MATCH = "-"
MIGRATION_EXTENSION = ".sql"

_SEPARATOR_CHARS = set("-|─┼│ \t")

logger = logging.getLogger(__name__)


def parse_migration_list_rows(output: str) -> List[MigrationListRow]:
    """Parse the pipe-delimited migration table printed by the supabase CLI.

    The expected layout is a header line, a separator line, then one
    ``local | remote | time`` row per migration. Lines that do not look
    like data rows are skipped.

    Args:
        output: Raw tool output.

    Returns:
        Rows in order of appearance.
    """
    rows = []

    for line in output.splitlines():
        trimmed = line.strip()
        if not trimmed:
            continue
        if set(trimmed) <= _SEPARATOR_CHARS:
            continue

        parts = line.split("|")
        if len(parts) < 2:
            continue

        local = parts[0].strip()
        remote = parts[1].strip()
        applied_at = parts[2].strip() if len(parts) > 2 else ""

        # Header
        if local.lower() == "local":
            continue
        if not local and not remote:
            continue

        rows.append(MigrationListRow(local=local, remote=remote, applied_at=applied_at))

    logger.debug(f"Parsed {len(rows)} migration rows")
    return rows


def migration_timestamp_from_filename(filename: str) -> str:
    """Return the leading timestamp token of a migration filename.

    ``20260215035000_add_profiles.sql`` and ``20260215035000.sql`` both give
    ``20260215035000``.
    """
    for separator in ("_", "."):
        head, found, _ = filename.partition(separator)
        if found:
            return head
    return filename


def build_migration_filename_index(filenames: Iterable[str]) -> Dict[str, str]:
    """Map each migration timestamp to its local filename.

    If two files share a timestamp, the later one wins.
    """
    index = {}
    for filename in filenames:
        timestamp = migration_timestamp_from_filename(filename)
        if not timestamp:
            continue
        if timestamp in index:
            logger.warning(f"Migrations {index[timestamp]} and {filename} share timestamp {timestamp}")
        index[timestamp] = filename
    return index


def migration_file_for_row(row: MigrationListRow, index: Dict[str, str]) -> str:
    """Return the local file for a row, or ``-`` when there is none."""
    for timestamp in (row.local, row.remote):
        if timestamp and timestamp in index:
            return index[timestamp]
    return NO_MATCH


def list_local_migrations(directory: str) -> List[str]:
    """List the .sql migration filenames in a directory, sorted.

    Raises:
        MigrationsDirectoryError: If the directory cannot be read.
    """
    try:
        entries = list(os.scandir(directory))
    except OSError as e:
        raise MigrationsDirectoryError(f"could not read migrations directory {directory}: {e}") from e

    migrations = []
    for entry in entries:
        try:
            if entry.is_dir():
                continue
        except OSError:
            continue
        if entry.name.endswith(MIGRATION_EXTENSION):
            migrations.append(entry.name)

    migrations.sort()
    return migrations


def applied_migrations(rows: Iterable[MigrationListRow]) -> Dict[str, str]:
    """Map applied migration timestamps to their apply time (minute precision)."""
    applied = {}
    for row in rows:
        if not row.local or not row.remote:
            continue
        applied[row.local] = row.applied_at[:16]
    return applied


def find_pending_migrations(local_migrations: Iterable[str], applied: Iterable[str]) -> List[str]:
    """Return local migration files whose timestamp has not been applied."""
    applied_set: Set[str] = set(applied)
    return [
        migration for migration in local_migrations
        if migration_timestamp_from_filename(migration) not in applied_set
    ]


def render_migration_table(rows: List[MigrationListRow], index: Dict[str, str]) -> List[str]:
    """Render rows as a table with an extra File column.

    Returns:
        Table lines without trailing newlines.
    """
    row_format = "{:<14} | {:<14} | {:<19} | {}"
    lines = [
        row_format.format("Local", "Remote", "Time (UTC)", "File"),
        "-|-".join(["-" * 14, "-" * 14, "-" * 19, "-" * 4]),
    ]
    for row in rows:
        lines.append(row_format.format(
            row.local, row.remote, row.applied_at, migration_file_for_row(row, index)
        ).rstrip())
    return lines
