# rxparse/db/rule_store.py
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from rxparse.db.db_config import store_operation
from rxparse.schemas.models import RuleCreate, RuleUpdate, SmartParsingRule
from rxparse.services.rules import list_active_rules

_COLUMNS = "id, name, field_type, pattern, replacement, is_regex, priority, is_active, created_at, updated_at"

def _rule_id() -> str:
    return "rule_" + uuid.uuid4().hex[:12]

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()

def _to_rule(row: sqlite3.Row) -> SmartParsingRule:
    return SmartParsingRule(
        id=row["id"],
        name=row["name"],
        field_type=row["field_type"],
        pattern=row["pattern"],
        replacement=row["replacement"],
        is_regex=bool(row["is_regex"]),
        priority=row["priority"],
        is_active=bool(row["is_active"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )

def list_rules(conn: sqlite3.Connection) -> List[SmartParsingRule]:
    """All rules, priority descending, oldest first among equal priorities."""
    with store_operation(conn, "fetch rules"):
        rows = conn.execute(
            f"SELECT {_COLUMNS} FROM smart_parsing_rules ORDER BY priority DESC, rowid ASC"
        ).fetchall()
    return [_to_rule(r) for r in rows]

def list_active(conn: sqlite3.Connection, field_type: str) -> List[SmartParsingRule]:
    return list_active_rules(list_rules(conn), field_type)

def get_rule(conn: sqlite3.Connection, rule_id: str) -> Optional[SmartParsingRule]:
    with store_operation(conn, "fetch rule"):
        row = conn.execute(
            f"SELECT {_COLUMNS} FROM smart_parsing_rules WHERE id = ?", (rule_id,)
        ).fetchone()
    return _to_rule(row) if row else None

def create_rule(conn: sqlite3.Connection, data: RuleCreate) -> SmartParsingRule:
    now = _now()
    rule = SmartParsingRule(id=_rule_id(), created_at=now, updated_at=now, **data.model_dump())
    with store_operation(conn, "create rule"):
        conn.execute(
            f"INSERT INTO smart_parsing_rules ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                rule.id, rule.name, rule.field_type, rule.pattern, rule.replacement,
                int(rule.is_regex), rule.priority, int(rule.is_active),
                rule.created_at, rule.updated_at,
            ),
        )
    return rule

def update_rule(conn: sqlite3.Connection, rule_id: str, updates: RuleUpdate) -> Optional[SmartParsingRule]:
    """Partial update; None when no rule has that id."""
    current = get_rule(conn, rule_id)
    if current is None:
        return None

    changes = {k: v for k, v in updates.model_dump(exclude_unset=True).items() if v is not None}
    rule = current.model_copy(update={**changes, "updated_at": _now()})

    with store_operation(conn, "update rule"):
        conn.execute(
            """
            UPDATE smart_parsing_rules
               SET name = ?, field_type = ?, pattern = ?, replacement = ?,
                   is_regex = ?, priority = ?, is_active = ?, updated_at = ?
             WHERE id = ?
            """,
            (
                rule.name, rule.field_type, rule.pattern, rule.replacement,
                int(rule.is_regex), rule.priority, int(rule.is_active), rule.updated_at,
                rule_id,
            ),
        )
    return rule

def delete_rule(conn: sqlite3.Connection, rule_id: str) -> bool:
    with store_operation(conn, "delete rule"):
        cur = conn.execute("DELETE FROM smart_parsing_rules WHERE id = ?", (rule_id,))
    return cur.rowcount > 0
