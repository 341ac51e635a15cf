# rxparse/db/combination_store.py
import sqlite3
from datetime import datetime, timezone
from typing import List, Optional

from rxparse.db.db_config import store_operation
from rxparse.schemas.models import CombinationMedicine, CombinationUpsert, CombinationUpsertResult

_COLUMNS = "id, name, content, description, created_at"

def _to_combination(row: sqlite3.Row) -> CombinationMedicine:
    return CombinationMedicine(
        id=row["id"],
        name=row["name"],
        content=row["content"],
        description=row["description"],
        created_at=row["created_at"],
    )

def list_all(conn: sqlite3.Connection) -> List[CombinationMedicine]:
    with store_operation(conn, "fetch combinations"):
        rows = conn.execute(f"SELECT {_COLUMNS} FROM combinations ORDER BY name").fetchall()
    return [_to_combination(r) for r in rows]

def get_by_name(conn: sqlite3.Connection, name: str) -> Optional[CombinationMedicine]:
    """Case-insensitive lookup by short name."""
    with store_operation(conn, "fetch combination"):
        row = conn.execute(
            f"SELECT {_COLUMNS} FROM combinations WHERE name = ? COLLATE NOCASE", (name.strip(),)
        ).fetchone()
    return _to_combination(row) if row else None

def get_by_content(conn: sqlite3.Connection, content: str) -> Optional[CombinationMedicine]:
    with store_operation(conn, "fetch combination"):
        row = conn.execute(
            f"SELECT {_COLUMNS} FROM combinations WHERE LOWER(content) = LOWER(?)", (content.strip(),)
        ).fetchone()
    return _to_combination(row) if row else None

def search(conn: sqlite3.Connection, query: str, limit: int = 10) -> List[CombinationMedicine]:
    """Combinations whose name or content contains `query`, case-insensitively."""
    q = query.strip().lower()
    with store_operation(conn, "search combinations"):
        rows = conn.execute(
            f"""
            SELECT {_COLUMNS} FROM combinations
             WHERE instr(LOWER(name), ?) > 0 OR instr(LOWER(content), ?) > 0
             ORDER BY name
             LIMIT ?
            """,
            (q, q, limit),
        ).fetchall()
    return [_to_combination(r) for r in rows]

def upsert(conn: sqlite3.Connection, data: CombinationUpsert) -> CombinationUpsertResult:
    """
    Name-based upsert: an existing combination with the same short name gets
    its content/description replaced, otherwise a new one is created.
    """
    name = data.name.strip()
    content = data.content.strip()
    description = data.description or None

    with store_operation(conn, "save combination"):
        row = conn.execute(
            "SELECT id FROM combinations WHERE name = ? COLLATE NOCASE", (name,)
        ).fetchone()
        if row:
            conn.execute(
                "UPDATE combinations SET content = ?, description = ? WHERE id = ?",
                (content, description, row["id"]),
            )
            combo_id, created = row["id"], False
        else:
            cur = conn.execute(
                "INSERT INTO combinations (name, content, description, created_at) VALUES (?, ?, ?, ?)",
                (name, content, description, datetime.now(timezone.utc).isoformat()),
            )
            combo_id, created = cur.lastrowid, True

        saved = conn.execute(f"SELECT {_COLUMNS} FROM combinations WHERE id = ?", (combo_id,)).fetchone()

    return CombinationUpsertResult(combination=_to_combination(saved), created=created)

def delete(conn: sqlite3.Connection, combo_id: int) -> bool:
    with store_operation(conn, "delete combination"):
        cur = conn.execute("DELETE FROM combinations WHERE id = ?", (combo_id,))
    return cur.rowcount > 0
