"""Tests for database connection, WAL mode, and migrations."""

from pathlib import Path

from cepcast.storage import state_repo
from cepcast.storage.database import (
    available_migrations,
    connect,
    open_database,
    run_migrations,
)


class TestConnect:
    def test_wal_mode(self, tmp_path: Path):
        db = connect(tmp_path / "test.db")
        mode = db.execute("PRAGMA journal_mode").fetchone()[0]
        assert mode == "wal"
        db.close()

    def test_creates_parent_directory(self, tmp_path: Path):
        db = connect(tmp_path / "nested" / "dir" / "test.db")
        assert (tmp_path / "nested" / "dir").is_dir()
        db.close()

    def test_row_factory(self, tmp_path: Path):
        db = connect(tmp_path / "test.db")
        db.execute("CREATE TABLE t (x TEXT)")
        db.execute("INSERT INTO t VALUES ('hello')")
        row = db.execute("SELECT x FROM t").fetchone()
        assert row["x"] == "hello"
        db.close()


class TestMigrations:
    def test_discovery(self):
        assert available_migrations()[0] == "v001_initial"

    def test_creates_tables(self, tmp_path: Path):
        db = connect(tmp_path / "test.db")
        applied = run_migrations(db)
        assert "v001_initial" in applied

        tables = {
            row[0]
            for row in db.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            ).fetchall()
        }
        assert {"schema_versions", "system_state"}.issubset(tables)
        db.close()

    def test_idempotent(self, tmp_path: Path):
        db = connect(tmp_path / "test.db")
        applied1 = run_migrations(db)
        applied2 = run_migrations(db)
        assert len(applied1) > 0
        assert len(applied2) == 0
        db.close()

    def test_starts_empty(self, tmp_path: Path):
        db = open_database(tmp_path / "test.db")
        count = db.execute("SELECT COUNT(*) FROM system_state").fetchone()[0]
        assert count == 0
        db.close()


class TestStateRepo:
    def test_get_missing(self, tmp_path: Path):
        db = open_database(tmp_path / "test.db")
        assert state_repo.get_system_state(db, "last_location") is None
        db.close()

    def test_set_overwrites(self, tmp_path: Path):
        db = open_database(tmp_path / "test.db")
        state_repo.set_system_state(db, "k", "one")
        state_repo.set_system_state(db, "k", "two")
        assert state_repo.get_system_state(db, "k") == "two"
        count = db.execute("SELECT COUNT(*) FROM system_state").fetchone()[0]
        assert count == 1
        db.close()

