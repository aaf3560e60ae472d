"""Command-line interface for drift-db."""

import json
import logging
import sys
from typing import Optional

import click

from .config.config_manager import ConfigManager
from .core.connection import parse_connection_url, session_mode_url
from .core.exceptions import DriftError
from .core.migrations import (
    applied_migrations,
    build_migration_filename_index,
    find_pending_migrations,
    list_local_migrations,
    parse_migration_list_rows,
    render_migration_table,
)
from .core.scanner import BackupScanner, timestamped_backup_filename
from .core.selector import filter_backups, normalize_environment, resolve_backup_path, suggest_backup
from .utils.formatters import backup_display_path, format_backup_age, format_size_mb


def setup_logging(level: str, log_file: Optional[str] = None):
    """Set up logging configuration."""
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {level}')

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Logs go to stderr so command output can be piped
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            click.echo(f"Warning: Could not set up file logging: {e}", err=True)


@click.group()
@click.option('--config', '-c', 'config_path',
              help='Path to .drift.yaml')
@click.option('--log-level', default='WARNING',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level')
@click.option('--log-file',
              help='Log file path')
@click.pass_context
def cli(ctx, config_path: Optional[str], log_level: str, log_file: Optional[str]):
    """drift-db - Local database backups and migration bookkeeping."""
    ctx.ensure_object(dict)
    setup_logging(log_level, log_file)
    ctx.obj['config_path'] = config_path


def _load_config(ctx) -> ConfigManager:
    return ConfigManager.load_or_default(ctx.obj.get('config_path'))


@cli.command(name='list')
@click.argument('query', required=False)
@click.pass_context
def list_backups(ctx, query: Optional[str]):
    """List local backups.

    QUERY may be prod/production, dev/development, an exact .backup file
    name, or a name prefix.
    """
    try:
        config = _load_config(ctx)
        backups = BackupScanner(config).discover()
        if query:
            backups = filter_backups(backups, query)

        if not backups:
            click.echo("No backup files found")
            return

        for backup in backups:
            click.echo(f"  {backup_display_path(backup.path, config.project_root)}  "
                       f"{format_size_mb(backup.size_bytes)}  "
                       f"{format_backup_age(backup.modified_time)}")

    except (DriftError, ValueError, OSError) as e:
        click.echo(f"Error listing backups: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option('--name', '-n', 'exact_name',
              help='Exact backup filename to prefer')
@click.option('--env', '-e', 'environment',
              help='Environment (prod, dev) or name prefix to fall back to')
@click.pass_context
def suggest(ctx, exact_name: Optional[str], environment: Optional[str]):
    """Print the best default backup."""
    try:
        config = _load_config(ctx)
        backups = BackupScanner(config).discover()

        prefix = environment
        normalized = normalize_environment(environment)
        if normalized is not None:
            prefix = normalized.prefix

        suggested = suggest_backup(backups, exact_name, prefix)
        if suggested is None:
            click.echo(f"No backup files found in {config.backup_path} or {config.project_root}", err=True)
            sys.exit(1)

        if exact_name and suggested.name.lower() != exact_name.strip().lower():
            click.echo(f"Expected backup {exact_name} not found, using suggestion", err=True)

        click.echo(suggested.path)

    except (DriftError, ValueError, OSError) as e:
        click.echo(f"Error suggesting backup: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('token')
@click.pass_context
def resolve(ctx, token: str):
    """Resolve a backup file name or path to a concrete path."""
    try:
        config = _load_config(ctx)
        backups = BackupScanner(config).discover()
        click.echo(resolve_backup_path(token, backups))

    except (DriftError, ValueError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        click.echo("Run 'drift-db list' to view available backups", err=True)
        sys.exit(1)


@cli.command()
@click.argument('prefix', default='backup')
def filename(prefix: str):
    """Print a timestamped backup filename for PREFIX."""
    normalized = normalize_environment(prefix)
    if normalized is not None:
        prefix = normalized.prefix
    click.echo(timestamped_backup_filename(prefix))


@cli.command()
@click.argument('url')
@click.option('--session-mode', is_flag=True,
              help='Rewrite pooler transaction port 6543 to session port 5432')
@click.option('--output', '-o', type=click.Choice(['text', 'json']), default='text',
              help='Output format')
def conn(url: str, session_mode: bool, output: str):
    """Show the connection parameters in a Postgres URL."""
    try:
        if session_mode:
            url = session_mode_url(url)
        params = parse_connection_url(url).masked()

        if output == 'json':
            click.echo(json.dumps({
                'host': params.host,
                'port': params.port,
                'user': params.user,
                'password': params.password,
                'database': params.database,
            }, indent=2))
        else:
            click.echo(f"Host:     {params.host}")
            click.echo(f"Port:     {params.port}")
            click.echo(f"User:     {params.user}")
            click.echo(f"Password: {params.password or '(none)'}")
            click.echo(f"Database: {params.database}")

    except DriftError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option('--input', '-i', 'input_file', type=click.File('r'), default='-',
              help='File with `supabase migration list` output (default: stdin)')
@click.pass_context
def migrations(ctx, input_file):
    """Show migration list output alongside local migration files."""
    try:
        config = _load_config(ctx)
        rows = parse_migration_list_rows(input_file.read())
        if not rows:
            click.echo("No migrations found in input")
            return

        try:
            local_migrations = list_local_migrations(config.migrations_path)
        except DriftError as e:
            click.echo(f"Warning: {e}", err=True)
            local_migrations = []

        index = build_migration_filename_index(local_migrations)
        for line in render_migration_table(rows, index):
            click.echo(f"  {line}")

        pending = find_pending_migrations(local_migrations, applied_migrations(rows))
        click.echo("")
        if pending:
            click.echo(f"{len(pending)} pending migration(s):")
            for migration in pending:
                click.echo(f"  • {migration}")
        elif local_migrations:
            click.echo("All migrations are applied")

    except (DriftError, ValueError, OSError) as e:
        click.echo(f"Error reading migrations: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def validate_config(ctx):
    """Validate configuration file."""
    try:
        config_manager = ConfigManager(ctx.obj.get('config_path'))
        config_manager.load_config()

        click.echo("✅ Configuration loaded successfully")

        project = config_manager.get_project_config()
        database = config_manager.get_database_config()

        click.echo(f"\n📊 Configuration Summary:")
        click.echo(f"   Project: {project.get('name') or 'N/A'}")
        click.echo(f"   Project root: {config_manager.project_root}")
        click.echo(f"   Backup directory: {config_manager.backup_path}")
        click.echo(f"   Migrations directory: {config_manager.migrations_path}")
        click.echo(f"   Dump format: {database.get('dump_format')}")

        scanner = BackupScanner(config_manager)
        click.echo(f"   Backup search order:")
        for i, directory in enumerate(scanner.search_directories(), 1):
            click.echo(f"     {i}. {directory}")

    except (FileNotFoundError, ValueError) as e:
        click.echo(f"❌ Configuration validation failed: {e}", err=True)
        sys.exit(1)


def main():
    """Main CLI entry point."""
    cli()


if __name__ == '__main__':
    main()
