"""Data models for backup inventory and migration reconciliation."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List
from urllib.parse import quote


@dataclass(frozen=True)
class BackupFile:
    """A backup file discovered on disk."""
    name: str
    path: str
    directory: str
    size_bytes: int
    modified_time: datetime


@dataclass(frozen=True)
class ConnectionParams:
    """Postgres connection parameters parsed from a connection URL."""
    host: str
    port: int = 5432
    user: str = "postgres"
    password: str = field(default="", repr=False)
    database: str = "postgres"

    def to_url(self) -> str:
        """Build a postgresql:// URL from these parameters."""
        credentials = quote(self.user, safe=".")
        if self.password:
            credentials += ":" + quote(self.password, safe="")
        return f"postgresql://{credentials}@{self.host}:{self.port}/{self.database}"

    def pg_args(self) -> List[str]:
        """Connection flags understood by pg_dump, pg_restore and psql."""
        return [
            "-h", self.host,
            "-p", str(self.port),
            "-U", self.user,
            "-d", self.database,
        ]

    def pg_env(self) -> Dict[str, str]:
        """Environment for the Postgres client tools."""
        return {"PGPASSWORD": self.password}

    def masked(self) -> "ConnectionParams":
        """Copy with the password hidden, for display."""
        return ConnectionParams(
            host=self.host,
            port=self.port,
            user=self.user,
            password="****" if self.password else "",
            database=self.database,
        )


@dataclass(frozen=True)
class MigrationListRow:
    """One row of `supabase migration list` output."""
    local: str = ""
    remote: str = ""
    applied_at: str = ""
