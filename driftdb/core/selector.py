"""Backup selection: lookup, filtering, suggestion and path resolution."""

import os
import logging
from enum import Enum
from typing import List, Optional

from .exceptions import BackupNotFoundError, BackupNotProvidedError
from .models import BackupFile
from .scanner import BACKUP_EXTENSION

logger = logging.getLogger(__name__)


class Environment(Enum):
    """Hosted environments that have a backup naming prefix."""
    PRODUCTION = "production"
    DEVELOPMENT = "development"

    @property
    def prefix(self) -> str:
        return "prod" if self is Environment.PRODUCTION else "dev"


_ENVIRONMENT_ALIASES = {
    "prod": Environment.PRODUCTION,
    "production": Environment.PRODUCTION,
    "dev": Environment.DEVELOPMENT,
    "development": Environment.DEVELOPMENT,
}


def normalize_environment(text: Optional[str]) -> Optional[Environment]:
    """Map free-form text such as ``"Prod "`` to an Environment, or None."""
    if not text:
        return None
    return _ENVIRONMENT_ALIASES.get(text.strip().lower())


def find_backup_by_name(backups: List[BackupFile], name: str) -> Optional[BackupFile]:
    """Return the first backup whose name matches, ignoring case."""
    wanted = name.casefold()
    for backup in backups:
        if backup.name.casefold() == wanted:
            return backup
    return None


def suggest_backup(backups: List[BackupFile], exact_name: Optional[str] = None,
                   prefix: Optional[str] = None) -> Optional[BackupFile]:
    """Pick the best default backup.

    An exact filename match wins, then the newest backup whose name starts
    with ``prefix``, then the newest backup overall.

    Args:
        backups: Catalog sorted newest first.
        exact_name: Filename to look for first.
        prefix: Environment prefix hint such as ``prod``.

    Returns:
        The suggested backup, or None if the catalog is empty.
    """
    if not backups:
        return None

    if exact_name and exact_name.strip():
        exact = find_backup_by_name(backups, exact_name)
        if exact is not None:
            return exact

    normalized_prefix = (prefix or "").strip().lower()
    if normalized_prefix:
        for backup in backups:
            if backup.name.lower().startswith(normalized_prefix):
                return backup

    return backups[0]


def filter_backups(backups: List[BackupFile], query: Optional[str]) -> List[BackupFile]:
    """Filter the catalog by a user query.

    ``prod``/``production`` and ``dev``/``development`` select an
    environment, a query ending in ``.backup`` selects that exact file, and
    anything else is a name prefix. Matching ignores case.
    """
    trimmed = (query or "").strip()
    normalized = trimmed.lower()
    if not normalized:
        return list(backups)

    environment = normalize_environment(normalized)
    if environment is not None:
        return [b for b in backups if b.name.lower().startswith(environment.prefix)]

    if normalized.endswith(BACKUP_EXTENSION):
        return [b for b in backups if b.name.casefold() == trimmed.casefold()]

    return [b for b in backups if b.name.lower().startswith(normalized)]


def resolve_backup_path(token: Optional[str], backups: List[BackupFile]) -> str:
    """Turn a user-supplied backup name or path into a filesystem path.

    A path that exists on disk is returned unchanged, even when the catalog
    holds a backup with the same name.

    Raises:
        BackupNotProvidedError: If the token is blank.
        BackupNotFoundError: If nothing matches.
    """
    token = (token or "").strip()
    if not token:
        raise BackupNotProvidedError("backup file not provided")

    if os.path.exists(token):
        return token

    if not os.path.isabs(token) and os.path.basename(token) == token:
        match = find_backup_by_name(backups, token)
        if match is not None:
            logger.debug(f"Resolved {token} to {match.path}")
            return match.path

    raise BackupNotFoundError(f"backup file not found: {token}")
