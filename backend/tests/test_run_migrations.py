"""Tests for the migration runner helpers."""

import pytest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock

import psycopg2

import run_migrations
from run_migrations import (
    MIGRATIONS_DIR,
    Migration,
    apply_migration,
    discover_migrations,
    find_migration,
    pending_migrations,
    show_status,
)


def write_migrations(directory: Path, *names: str) -> list[Migration]:
    for name in names:
        (directory / name).write_text(f"-- {name}\nSELECT 1;\n")
    return discover_migrations(directory)


class TestDiscovery:
    def test_ordered_by_name(self, tmp_path):
        migrations = write_migrations(tmp_path, "002_b.sql", "001_a.sql", "notes.txt")

        assert [m.name for m in migrations] == ["001_a.sql", "002_b.sql"]

    def test_missing_directory(self, tmp_path):
        assert discover_migrations(tmp_path / "nope") == []

    def test_checksum_tracks_content(self, tmp_path):
        (migration,) = write_migrations(tmp_path, "001_a.sql")
        (tmp_path / "001_a.sql").write_text("SELECT 2;")

        assert Migration.from_path(migration.path).checksum != migration.checksum

    def test_shipped_migrations(self):
        names = [m.name for m in discover_migrations(MIGRATIONS_DIR)]

        assert names == ["001_create_users.sql", "002_create_refresh_tokens.sql"]
        assert "refresh_tokens" in discover_migrations(MIGRATIONS_DIR)[1].read()


class TestPending:
    def test_unapplied_only(self, tmp_path):
        first, second = write_migrations(tmp_path, "001_a.sql", "002_b.sql")
        applied = {first.name: {"checksum": first.checksum, "applied_at": None}}

        assert pending_migrations([first, second], applied) == [second]

    def test_changed_file_is_not_rerun(self, tmp_path):
        (migration,) = write_migrations(tmp_path, "001_a.sql")
        applied = {migration.name: {"checksum": "stale", "applied_at": None}}

        assert pending_migrations([migration], applied) == []


class TestFindMigration:
    def test_unique_prefix(self, tmp_path):
        migrations = write_migrations(tmp_path, "001_a.sql", "002_b.sql")
        assert find_migration(migrations, "002").name == "002_b.sql"

    def test_no_match(self, tmp_path):
        migrations = write_migrations(tmp_path, "001_a.sql")
        assert find_migration(migrations, "009") is None

    def test_ambiguous(self, tmp_path):
        migrations = write_migrations(tmp_path, "001_a.sql", "001_b.sql")
        assert find_migration(migrations, "001") is None


class TestApply:
    def test_runs_and_records(self, tmp_path):
        (migration,) = write_migrations(tmp_path, "001_a.sql")
        conn = MagicMock()
        cursor = conn.cursor.return_value.__enter__.return_value

        apply_migration(conn, migration)

        assert cursor.execute.call_count == 2
        assert cursor.execute.call_args_list[0].args[0] == migration.read()
        assert cursor.execute.call_args_list[1].args[1] == (migration.name, migration.checksum)
        conn.commit.assert_called_once()

    def test_dry_run_touches_nothing(self, tmp_path):
        (migration,) = write_migrations(tmp_path, "001_a.sql")
        conn = MagicMock()

        apply_migration(conn, migration, dry_run=True)

        conn.cursor.assert_not_called()
        conn.commit.assert_not_called()

    def test_failure_rolls_back(self, tmp_path):
        (migration,) = write_migrations(tmp_path, "001_a.sql")
        conn = MagicMock()
        cursor = conn.cursor.return_value.__enter__.return_value
        cursor.execute.side_effect = psycopg2.ProgrammingError("syntax error")

        with pytest.raises(psycopg2.ProgrammingError):
            apply_migration(conn, migration)

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()


class TestStatus:
    def test_renders_every_state(self, tmp_path, monkeypatch):
        printed = []
        monkeypatch.setattr(run_migrations.console, "print", printed.append)
        applied_ok, changed, pending = write_migrations(
            tmp_path, "001_a.sql", "002_b.sql", "003_c.sql"
        )
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        applied = {
            applied_ok.name: {"checksum": applied_ok.checksum, "applied_at": now},
            changed.name: {"checksum": "stale", "applied_at": now},
            "000_gone.sql": {"checksum": "abc", "applied_at": now},
        }

        show_status([applied_ok, changed, pending], applied)

        (table,) = printed
        assert table.row_count == 4

    def test_nothing_to_show(self, monkeypatch):
        printed = []
        monkeypatch.setattr(run_migrations.console, "print", printed.append)

        show_status([], {})

        assert printed == ["[dim]No migrations found.[/dim]"]


class TestConnect:
    def test_missing_database_url(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "")

        with pytest.raises(SystemExit):
            run_migrations.connect()
