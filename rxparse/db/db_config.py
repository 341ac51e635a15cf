# rxparse/db/db_config.py

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from rxparse.core.env import ROOT_DIR, load_env

load_env()

logger = logging.getLogger(__name__)

BASE_DIR = ROOT_DIR

# Database file path; ":memory:" is accepted for throwaway stores
DB_PATH = os.getenv("RXPARSE_DB_PATH", str(BASE_DIR / "rxparse" / "db" / "clinic.db"))


SCHEMA = """
CREATE TABLE IF NOT EXISTS smart_parsing_rules (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    field_type TEXT NOT NULL,
    pattern TEXT NOT NULL,
    replacement TEXT NOT NULL DEFAULT '',
    is_regex INTEGER NOT NULL DEFAULT 0,
    priority INTEGER NOT NULL DEFAULT 0,
    is_active INTEGER NOT NULL DEFAULT 1,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS combinations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE COLLATE NOCASE,
    content TEXT NOT NULL,
    description TEXT,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS medicines (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE COLLATE NOCASE
);
"""


class StoreError(RuntimeError):
    """Persistence collaborator failed; carries the operation name."""

    def __init__(self, operation: str):
        super().__init__(f"Failed to {operation}")
        self.operation = operation


def get_sqlite_connection(path: Optional[str] = None) -> sqlite3.Connection:
    """
    Create and configure SQLite connection with recommended PRAGMA settings,
    and make sure the rule/combination/medicine tables exist.
    """
    db_path = path or DB_PATH
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.row_factory = sqlite3.Row

    # Performance & concurrency settings
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    conn.execute("PRAGMA busy_timeout=5000;")

    conn.executescript(SCHEMA)
    return conn


@contextmanager
def store_operation(conn: sqlite3.Connection, operation: str) -> Iterator[sqlite3.Connection]:
    """
    One transaction per store call: commit on success, roll back on any
    sqlite error and surface it as StoreError(operation).
    """
    try:
        with conn:
            yield conn
    except sqlite3.Error as e:
        logger.error("store operation %r failed: %s", operation, e, exc_info=True)
        raise StoreError(operation) from e
