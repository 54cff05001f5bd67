"""Helper utilities for tests."""

from datetime import datetime, timezone
from pathlib import Path
import sqlite3


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    for migration_file in sorted(migrations_dir.glob("*.sql")):
        conn.executescript(migration_file.read_text())

    conn.commit()


def utc(year: int, month: int, day: int) -> datetime:
    """Midnight UTC on the given day."""
    return datetime(year, month, day, tzinfo=timezone.utc)


def count_accounts(services) -> int:
    """Count every account row, regardless of owner."""
    with services.db_manager.connect() as conn:
        return conn.execute("SELECT COUNT(*) FROM accounts").fetchone()[0]
