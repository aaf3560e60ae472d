"""Tests for backup lookup, suggestion, filtering and path resolution."""

from datetime import datetime

import pytest

from driftdb.core.exceptions import BackupNotFoundError, BackupNotProvidedError
from driftdb.core.models import BackupFile
from driftdb.core.scanner import BackupScanner
from driftdb.core.selector import (
    Environment,
    filter_backups,
    find_backup_by_name,
    normalize_environment,
    resolve_backup_path,
    suggest_backup,
)


def _names(backups):
    return [b.name for b in backups]


class TestNormalizeEnvironment:

    @pytest.mark.parametrize("text, expected", [
        ("prod", Environment.PRODUCTION),
        (" Production ", Environment.PRODUCTION),
        ("DEV", Environment.DEVELOPMENT),
        ("development", Environment.DEVELOPMENT),
        ("staging", None),
        ("", None),
        (None, None),
    ])
    def test_aliases(self, text, expected):
        assert normalize_environment(text) is expected

    def test_prefixes(self):
        assert Environment.PRODUCTION.prefix == "prod"
        assert Environment.DEVELOPMENT.prefix == "dev"


class TestFindBackupByName:

    def test_case_insensitive(self, sample_backups):
        found = find_backup_by_name(sample_backups, "DEV.BACKUP")
        assert found is not None
        assert found.path == "/tmp/dev.backup"

    def test_not_found(self, sample_backups):
        assert find_backup_by_name(sample_backups, "missing.backup") is None


class TestSuggestBackup:

    def test_exact_match_wins_over_prefix(self, sample_backups):
        suggested = suggest_backup(sample_backups, "dev.backup", "dev")
        assert suggested.path == "/tmp/dev.backup"

    def test_prefix_fallback_picks_newest_match(self, sample_backups):
        suggested = suggest_backup(sample_backups, "missing.backup", "prod")
        assert suggested.path == "/tmp/prod_20260215_130000.backup"

    def test_prefix_is_trimmed_and_case_folded(self, sample_backups):
        suggested = suggest_backup(sample_backups, None, "  PROD ")
        assert suggested.name == "prod_20260215_130000.backup"

    def test_falls_back_to_newest_overall(self, sample_backups):
        suggested = suggest_backup(sample_backups, "missing.backup", "staging")
        assert suggested.path == "/tmp/dev_20260215_140000.backup"

    def test_blank_hints_give_newest(self, sample_backups):
        assert suggest_backup(sample_backups, "  ", "") is sample_backups[0]

    def test_empty_catalog(self):
        assert suggest_backup([], "dev.backup", "dev") is None


class TestFilterBackups:

    @pytest.fixture
    def backups(self):
        modified = datetime(2026, 2, 15, 14, 30, 0)
        return [
            BackupFile(name=name, path=f"/b/{name}", directory="/b", size_bytes=0, modified_time=modified)
            for name in [
                "prod.backup",
                "prod_20260215_143000.backup",
                "dev_20260215_143000.backup",
                "Development_manual.backup",
                "random.backup",
            ]
        ]

    def test_empty_query_returns_copy(self, backups):
        result = filter_backups(backups, "  ")

        assert result == backups
        assert result is not backups
        result.clear()
        assert len(backups) == 5

    def test_none_query_returns_everything(self, backups):
        assert filter_backups(backups, None) == backups

    @pytest.mark.parametrize("query", ["prod", "production", " PROD "])
    def test_production_alias(self, backups, query):
        assert _names(filter_backups(backups, query)) == ["prod.backup", "prod_20260215_143000.backup"]

    @pytest.mark.parametrize("query", ["dev", "development", "Development"])
    def test_development_alias(self, backups, query):
        assert _names(filter_backups(backups, query)) == [
            "dev_20260215_143000.backup",
            "Development_manual.backup",
        ]

    def test_exact_filename(self, backups):
        assert _names(filter_backups(backups, "PROD.BACKUP")) == ["prod.backup"]

    def test_exact_filename_without_match(self, backups):
        assert filter_backups(backups, "prod_2026.backup") == []

    def test_prefix(self, backups):
        assert _names(filter_backups(backups, "RAN")) == ["random.backup"]

    def test_prefix_without_match(self, backups):
        assert filter_backups(backups, "staging") == []


class TestResolveBackupPath:

    @pytest.fixture
    def inventory(self, tmp_path, write_config, make_backup):
        config = write_config(tmp_path, "backups")
        backup_path = make_backup(
            tmp_path / "backups" / "prod_20260215_143000.backup",
            datetime(2026, 2, 15, 14, 30, 0),
        )
        return str(backup_path), BackupScanner(config).discover()

    def test_bare_filename_uses_inventory(self, inventory, tmp_path, monkeypatch):
        backup_path, backups = inventory
        monkeypatch.chdir(tmp_path)

        assert resolve_backup_path("prod_20260215_143000.backup", backups) == backup_path

    def test_bare_filename_ignores_case(self, inventory, tmp_path, monkeypatch):
        backup_path, backups = inventory
        monkeypatch.chdir(tmp_path)

        assert resolve_backup_path("PROD_20260215_143000.BACKUP", backups) == backup_path

    def test_direct_path_is_returned_unchanged(self, inventory):
        backup_path, backups = inventory

        assert resolve_backup_path(f"  {backup_path}  ", backups) == backup_path

    def test_existing_file_wins_over_inventory(self, inventory, tmp_path, monkeypatch, make_backup):
        _, backups = inventory
        elsewhere = tmp_path / "elsewhere"
        make_backup(elsewhere / "prod_20260215_143000.backup", datetime(2026, 2, 16))
        monkeypatch.chdir(elsewhere)

        assert resolve_backup_path("prod_20260215_143000.backup", backups) == "prod_20260215_143000.backup"

    def test_unknown_bare_name(self, inventory, tmp_path, monkeypatch):
        _, backups = inventory
        monkeypatch.chdir(tmp_path)

        with pytest.raises(BackupNotFoundError, match="backup file not found: missing.backup"):
            resolve_backup_path("missing.backup", backups)

    def test_path_with_directory_is_not_looked_up(self, inventory, tmp_path, monkeypatch):
        _, backups = inventory
        monkeypatch.chdir(tmp_path)

        with pytest.raises(BackupNotFoundError):
            resolve_backup_path("other/prod_20260215_143000.backup", backups)

    def test_not_found_is_a_file_not_found_error(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        with pytest.raises(FileNotFoundError):
            resolve_backup_path("missing.backup", [])

    @pytest.mark.parametrize("token", ["", "   ", None])
    def test_blank_token(self, token):
        with pytest.raises(BackupNotProvidedError, match="backup file not provided"):
            resolve_backup_path(token, [])
