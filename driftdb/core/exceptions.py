"""Exceptions raised by the drift-db core."""


class DriftError(Exception):
    """Base class for drift-db errors."""


class ConnectionURLError(DriftError, ValueError):
    """A connection URL could not be parsed."""


class MissingHostError(ConnectionURLError):
    """A connection URL has no host."""


class InvalidPortError(ConnectionURLError):
    """A connection URL has a port that is not an integer in 1-65535."""


class BackupLookupError(DriftError):
    """A backup file could not be located."""


class BackupNotProvidedError(BackupLookupError, ValueError):
    """No backup file name or path was given."""


class BackupNotFoundError(BackupLookupError, FileNotFoundError):
    """The given backup name or path matches nothing."""


class BackupDirectoryError(DriftError):
    """A backup search directory exists but could not be read."""

    def __init__(self, directory: str, message: str):
        super().__init__(message)
        self.directory = directory


class MigrationsDirectoryError(DriftError):
    """The local migrations directory could not be read."""
