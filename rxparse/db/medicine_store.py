# rxparse/db/medicine_store.py
import sqlite3
from datetime import datetime, timezone
from typing import Dict, List

from rxparse.db.db_config import store_operation
from rxparse.db.seed_data import COMMON_COMBINATIONS, COMMON_MEDICINES

def search(conn: sqlite3.Connection, query: str, limit: int = 10) -> List[str]:
    q = query.strip().lower()
    with store_operation(conn, "search medicines"):
        rows = conn.execute(
            "SELECT name FROM medicines WHERE instr(LOWER(name), ?) > 0 ORDER BY name LIMIT ?",
            (q, limit),
        ).fetchall()
    return [r["name"] for r in rows]

def add(conn: sqlite3.Connection, name: str) -> bool:
    """Insert a medicine name; False if it is already known."""
    with store_operation(conn, "save medicine"):
        cur = conn.execute("INSERT OR IGNORE INTO medicines (name) VALUES (?)", (name.strip(),))
    return cur.rowcount > 0

def seed_defaults(conn: sqlite3.Connection) -> Dict[str, int]:
    """Load the common medicines/combinations into whichever table is still empty."""
    seeded = {"medicines": 0, "combinations": 0}
    now = datetime.now(timezone.utc).isoformat()

    with store_operation(conn, "seed data"):
        if conn.execute("SELECT COUNT(*) FROM medicines").fetchone()[0] == 0:
            conn.executemany("INSERT INTO medicines (name) VALUES (?)", [(n,) for n in COMMON_MEDICINES])
            seeded["medicines"] = len(COMMON_MEDICINES)

        if conn.execute("SELECT COUNT(*) FROM combinations").fetchone()[0] == 0:
            conn.executemany(
                "INSERT INTO combinations (name, content, description, created_at) VALUES (?, ?, ?, ?)",
                [(c["name"], c["content"], c["description"], now) for c in COMMON_COMBINATIONS],
            )
            seeded["combinations"] = len(COMMON_COMBINATIONS)

    return seeded
