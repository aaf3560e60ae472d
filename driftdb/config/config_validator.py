"""Configuration validation for drift-db."""

from typing import Dict, Any


class ConfigValidator:
    """Validates drift-db configuration."""

    MAPPING_SECTIONS = ['project', 'database', 'supabase']
    DUMP_FORMATS = ['custom', 'plain', 'directory', 'tar']
    PORT_FIELDS = ['pooler_port', 'direct_port']

    def validate(self, config: Dict[str, Any]) -> None:
        """Validate configuration data.

        Args:
            config: Configuration dictionary to validate.

        Raises:
            ValueError: If configuration is invalid.
        """
        self._validate_structure(config)
        self._validate_database_config(config.get('database') or {})
        self._validate_supabase_config(config.get('supabase') or {})

    def _validate_structure(self, config: Dict[str, Any]) -> None:
        """Validate basic configuration structure.

        Args:
            config: Configuration dictionary.

        Raises:
            ValueError: If a section is not a mapping.
        """
        for section in self.MAPPING_SECTIONS:
            value = config.get(section)
            if value is not None and not isinstance(value, dict):
                raise ValueError(f"Configuration section '{section}' must be a mapping")

    def _validate_database_config(self, database: Dict[str, Any]) -> None:
        """Validate database configuration.

        Args:
            database: Database configuration dictionary.

        Raises:
            ValueError: If database configuration is invalid.
        """
        backup_dir = database.get('backup_dir')
        if backup_dir is not None and not isinstance(backup_dir, str):
            raise ValueError(f"database.backup_dir must be a string, got {backup_dir!r}")

        for field in self.PORT_FIELDS:
            if database.get(field) is None:
                continue
            try:
                port = int(database[field])
                if not (1 <= port <= 65535):
                    raise ValueError()
            except (ValueError, TypeError):
                raise ValueError(f"database.{field} is not a valid port: {database[field]}")

        dump_format = database.get('dump_format')
        if dump_format and dump_format not in self.DUMP_FORMATS:
            raise ValueError(f"database.dump_format must be one of {self.DUMP_FORMATS}, got {dump_format!r}")

    def _validate_supabase_config(self, supabase: Dict[str, Any]) -> None:
        """Validate Supabase configuration.

        Args:
            supabase: Supabase configuration dictionary.

        Raises:
            ValueError: If Supabase configuration is invalid.
        """
        migrations_dir = supabase.get('migrations_dir')
        if migrations_dir is not None and not isinstance(migrations_dir, str):
            raise ValueError(f"supabase.migrations_dir must be a string, got {migrations_dir!r}")

        protected = supabase.get('protected_branches')
        if protected is not None and not isinstance(protected, list):
            raise ValueError("supabase.protected_branches must be a list")
