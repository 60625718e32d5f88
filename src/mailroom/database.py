"""SQLite connection setup shared by the template and message stores."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from mailroom.inbox.store import init_message_table
from mailroom.templates.store import init_template_table


def open_database(db_path: Path | str) -> sqlite3.Connection:
    """Open (creating if needed) the mail database with WAL mode and all tables.

    Args:
        db_path: Path to the SQLite database file, or ``":memory:"``.

    Returns:
        An open sqlite3.Connection with both store tables created.
    """
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA journal_mode=WAL")
    init_template_table(conn)
    init_message_table(conn)
    return conn


def close_database(conn: sqlite3.Connection) -> None:
    """Close a connection returned by :func:`open_database`."""
    conn.close()
