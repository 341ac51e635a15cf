"""Tests for the sqlite-backed rule store."""
import pytest

from rxparse.db import rule_store
from rxparse.db.db_config import StoreError
from rxparse.schemas.models import RuleCreate, RuleUpdate


def create(conn, **overrides):
    data = {
        "name": "OD to pattern",
        "field_type": "dosePattern",
        "pattern": r"\bOD\b",
        "replacement": "1-0-0",
        "is_regex": True,
        "priority": 0,
    }
    data.update(overrides)
    return rule_store.create_rule(conn, RuleCreate(**data))


class TestRuleStore:
    def test_create_assigns_id_and_timestamps(self, conn):
        rule = create(conn)
        assert rule.id.startswith("rule_")
        assert rule.created_at and rule.created_at == rule.updated_at
        assert rule_store.get_rule(conn, rule.id) == rule

    def test_list_orders_by_priority_then_age(self, conn):
        first = create(conn, name="a", priority=5)
        second = create(conn, name="b", priority=10)
        third = create(conn, name="c", priority=5)
        assert [r.id for r in rule_store.list_rules(conn)] == [second.id, first.id, third.id]

    def test_partial_update(self, conn):
        rule = create(conn)
        updated = rule_store.update_rule(conn, rule.id, RuleUpdate(is_active=False))
        assert updated.is_active is False
        assert updated.pattern == rule.pattern
        assert updated.created_at == rule.created_at
        assert rule_store.get_rule(conn, rule.id).is_active is False

    def test_deactivated_rule_leaves_active_list(self, conn):
        rule = create(conn)
        assert [r.id for r in rule_store.list_active(conn, "dosePattern")] == [rule.id]

        rule_store.update_rule(conn, rule.id, RuleUpdate(is_active=False))
        assert rule_store.list_active(conn, "dosePattern") == []

        rule_store.update_rule(conn, rule.id, RuleUpdate(is_active=True))
        assert len(rule_store.list_active(conn, "dosePattern")) == 1

    def test_list_active_filters_field(self, conn):
        create(conn, field_type="quantity", pattern="drams", replacement="dr", is_regex=False)
        assert rule_store.list_active(conn, "dosePattern") == []
        assert len(rule_store.list_active(conn, "quantity")) == 1

    def test_unknown_id(self, conn):
        assert rule_store.get_rule(conn, "rule_missing") is None
        assert rule_store.update_rule(conn, "rule_missing", RuleUpdate(name="x")) is None
        assert rule_store.delete_rule(conn, "rule_missing") is False

    def test_delete(self, conn):
        rule = create(conn)
        assert rule_store.delete_rule(conn, rule.id) is True
        assert rule_store.list_rules(conn) == []

    def test_failure_is_reported_as_store_error(self, conn):
        conn.close()
        with pytest.raises(StoreError, match="Failed to fetch rules") as info:
            rule_store.list_rules(conn)
        assert info.value.operation == "fetch rules"
