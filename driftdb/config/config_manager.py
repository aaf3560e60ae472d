"""Configuration management for drift-db."""

import copy
import os
import logging
import yaml
from typing import Dict, Any, Optional
from .config_validator import ConfigValidator


class ConfigManager:
    """Loads the project's .drift.yaml and exposes the paths drift-db needs."""

    CONFIG_FILENAMES = [".drift.yaml", ".drift.yml"]

    DEFAULTS = {
        'database': {
            'pooler_host': 'aws-0-us-east-1.pooler.supabase.com',
            'pooler_port': 6543,
            'direct_port': 5432,
            'require_ssl': True,
            'dump_format': 'custom',
            'backup_dir': 'backups',
            'prompt_fresh': True
        },
        'supabase': {
            'migrations_dir': 'supabase/migrations',
            'functions_dir': 'supabase/functions',
            'protected_branches': ['main', 'master']
        }
    }

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to config file. If not provided,
                        the current directory and its parents are searched.
        """
        self.config_path = config_path
        self.config_data: Dict[str, Any] = {}
        self.validator = ConfigValidator()
        self.logger = logging.getLogger(__name__)

    @classmethod
    def load_or_default(cls, config_path: Optional[str] = None) -> "ConfigManager":
        """Load configuration, falling back to defaults when no file is found.

        A file that exists but is invalid still raises ValueError.
        """
        manager = cls(config_path)
        try:
            manager.load_config()
        except FileNotFoundError as e:
            if config_path:
                raise
            manager.logger.debug(f"Using default configuration: {e}")
            manager.config_path = None
            manager.config_data = {}
            manager._set_defaults()
        return manager

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from file.

        Returns:
            Dictionary containing configuration data.

        Raises:
            FileNotFoundError: If config file cannot be found.
            ValueError: If config file is invalid.
        """
        config_file = self._find_config_file()

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                self.config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file {config_file}: {e}")
        except OSError as e:
            raise ValueError(f"Error reading config file {config_file}: {e}")

        if not isinstance(self.config_data, dict):
            raise ValueError(f"Config file {config_file} must contain a mapping")

        self.validator.validate(self.config_data)
        self._set_defaults()

        self.config_path = os.path.abspath(config_file)
        self.logger.info(f"Loaded configuration from {self.config_path}")
        return self.config_data

    def _find_config_file(self) -> str:
        """Find the configuration file.

        Returns:
            Path to configuration file.

        Raises:
            FileNotFoundError: If no config file is found.
        """
        if self.config_path:
            if os.path.exists(self.config_path):
                return self.config_path
            else:
                raise FileNotFoundError(f"Config file not found: {self.config_path}")

        directory = os.getcwd()
        while True:
            for filename in self.CONFIG_FILENAMES:
                candidate = os.path.join(directory, filename)
                if os.path.exists(candidate):
                    return candidate

            parent = os.path.dirname(directory)
            if parent == directory:
                break
            directory = parent

        raise FileNotFoundError(".drift.yaml not found (searched from current directory to root)")

    def _set_defaults(self):
        """Set default values for optional configuration parameters."""
        for section, section_defaults in self.DEFAULTS.items():
            if not self.config_data.get(section):
                self.config_data[section] = {}
            for key, value in section_defaults.items():
                if self.config_data[section].get(key) in (None, ''):
                    self.config_data[section][key] = copy.deepcopy(value)

    @property
    def project_root(self) -> str:
        """Directory containing the config file, or the current directory."""
        if not self.config_path:
            return os.getcwd()
        return os.path.dirname(os.path.abspath(self.config_path))

    @property
    def backup_path(self) -> str:
        """Backup directory resolved against the project root."""
        return os.path.join(self.project_root, self.get_database_config()['backup_dir'])

    @property
    def migrations_path(self) -> str:
        """Migrations directory resolved against the project root."""
        return os.path.join(self.project_root, self.get_supabase_config()['migrations_dir'])

    def get_database_config(self) -> Dict[str, Any]:
        """Get database configuration.

        Returns:
            Database configuration dictionary.
        """
        return self.config_data.get('database', {})

    def get_supabase_config(self) -> Dict[str, Any]:
        """Get Supabase configuration.

        Returns:
            Supabase configuration dictionary.
        """
        return self.config_data.get('supabase', {})

    def get_project_config(self) -> Dict[str, Any]:
        """Get project configuration.

        Returns:
            Project configuration dictionary.
        """
        return self.config_data.get('project') or {}
