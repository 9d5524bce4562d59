"""SQLite access for the local store: WAL connections and v### migrations."""

import importlib
import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

MIGRATIONS_PACKAGE = "cepcast.storage.migrations"
MIGRATIONS_DIR = Path(__file__).parent / "migrations"
BUSY_TIMEOUT_MS = 2000


def connect(db_path: str | Path) -> sqlite3.Connection:
    """Open the store, creating its directory on first use."""
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), timeout=BUSY_TIMEOUT_MS / 1000)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(f"PRAGMA busy_timeout={BUSY_TIMEOUT_MS}")
    return conn


def run_migrations(conn: sqlite3.Connection) -> list[str]:
    """Apply pending migrations in name order and return the ones applied."""
    conn.execute(
        "CREATE TABLE IF NOT EXISTS schema_versions ("
        "  version TEXT PRIMARY KEY,"
        "  applied_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP"
        ")"
    )
    conn.commit()

    done = {row["version"] for row in conn.execute("SELECT version FROM schema_versions")}
    pending = [name for name in available_migrations() if name not in done]

    for name in pending:
        module = importlib.import_module(f"{MIGRATIONS_PACKAGE}.{name}")
        try:
            module.up(conn)
            conn.execute("INSERT INTO schema_versions (version) VALUES (?)", (name,))
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            logger.error("Migration %s failed", name)
            raise
        logger.debug("Applied migration %s", name)

    return pending


def available_migrations() -> list[str]:
    """Migration module names, v###_<label>, sorted."""
    return sorted(p.stem for p in MIGRATIONS_DIR.glob("v[0-9][0-9][0-9]_*.py"))


def open_database(db_path: str | Path) -> sqlite3.Connection:
    """Connect and bring the schema up to date."""
    conn = connect(db_path)
    try:
        run_migrations(conn)
    except sqlite3.Error:
        conn.close()
        raise
    return conn
