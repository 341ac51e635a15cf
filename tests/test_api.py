"""HTTP-level tests through FastAPI's TestClient against an in-memory store."""
from unittest.mock import patch

import pytest

RULE = {
    "name": "OD to pattern",
    "field_type": "dosePattern",
    "pattern": r"\bOD\b",
    "replacement": "1-0-0",
    "is_regex": True,
    "priority": 10,
}


@pytest.fixture(autouse=True)
def no_configured_key():
    with patch("rxparse.services.parsing.AI_API_KEY", ""):
        yield


class TestParseEndpoint:
    def test_parse(self, client):
        r = client.post("/parse-prescription", json={"input": "Nux Vomica 200C 4 pills TDS 7 days", "use_ai": False})
        assert r.status_code == 200
        body = r.json()
        assert body["success"] is True
        assert body["method"] == "regex"
        assert body["data"]["potency"] == "200C"
        assert body["data"]["pattern"] == "1-1-1"
        assert body["data"]["duration_days"] == 7

    def test_blank_input_is_not_an_http_error(self, client):
        r = client.post("/parse-prescription", json={"input": "  "})
        assert r.status_code == 200
        assert r.json() == {"success": False, "data": None, "method": None, "error": "Input is empty"}

    def test_invalid_timeout(self, client):
        r = client.post("/parse-prescription", json={"input": "Arnica", "timeout_s": 0})
        assert r.status_code == 422


class TestRulesEndpoints:
    def test_crud(self, client):
        created = client.post("/smart-parsing", json=RULE).json()
        rule_id = created["id"]
        assert created["is_active"] is True

        listed = client.get("/smart-parsing").json()
        assert [r["id"] for r in listed] == [rule_id]

        toggled = client.put(f"/smart-parsing/{rule_id}", json={"is_active": False})
        assert toggled.status_code == 200
        assert toggled.json()["is_active"] is False
        assert client.get("/smart-parsing", params={"field_type": "dosePattern"}).json() == []

        deleted = client.delete(f"/smart-parsing/{rule_id}")
        assert deleted.json() == {"ok": True, "message": "Rule deleted"}
        assert client.get("/smart-parsing").json() == []

    def test_unknown_rule(self, client):
        assert client.put("/smart-parsing/rule_nope", json={"name": "x"}).status_code == 404
        r = client.delete("/smart-parsing/rule_nope")
        assert r.status_code == 404
        assert r.json()["detail"] == "Rule not found"

    def test_validation(self, client):
        assert client.post("/smart-parsing", json={**RULE, "field_type": "potency"}).status_code == 422
        assert client.post("/smart-parsing", json={**RULE, "pattern": ""}).status_code == 422

    def test_normalize(self, client):
        client.post("/smart-parsing", json=RULE)
        r = client.post("/smart-parsing/normalize", json={"field_type": "dosePattern", "text": "Take OD"})
        assert r.json() == {"field_type": "dosePattern", "text": "Take 1-0-0"}

    def test_apply(self, client):
        client.post("/smart-parsing", json={
            "name": "weeks",
            "field_type": "duration",
            "pattern": r"(\d+)\s*weeks?",
            "replacement": "$1 weeks",
            "is_regex": True,
        })
        r = client.post("/smart-parsing/apply", json={"text": "Arnica 4 pills TDS 3 weeks"})
        assert r.json() == {
            "overrides": {"dosePattern": "4-4-4", "duration": "3 weeks"},
            "duration_days": 21,
        }

    def test_store_failure(self, client, conn):
        conn.close()
        r = client.get("/smart-parsing")
        assert r.status_code == 500
        assert r.json() == {"detail": "Failed to fetch rules"}


class TestCombinationEndpoints:
    def test_upsert(self, client):
        payload = {"name": "BC", "content": "Bryonia + Causticum"}
        first = client.post("/combinations", json=payload).json()
        second = client.post("/combinations", json={**payload, "description": "cough"}).json()
        assert first["created"] is True
        assert second["created"] is False
        assert second["combination"]["description"] == "cough"
        assert len(client.get("/combinations").json()) == 1

    def test_register(self, client):
        r = client.post("/combinations/register", json={"medicine_name": "Arnica + Belladonna + Calendula"})
        body = r.json()
        assert body["registered"] is True
        assert body["result"]["created"] is True
        assert body["result"]["combination"]["name"] == "ABC"

        plain = client.post("/combinations/register", json={"medicine_name": "Arnica"}).json()
        assert plain == {"registered": False, "result": None}

    def test_delete(self, client):
        combo = client.post("/combinations", json={"name": "BC", "content": "Bryonia + Causticum"}).json()
        combo_id = combo["combination"]["id"]
        assert client.delete(f"/combinations/{combo_id}").json() == {"ok": True}
        r = client.delete(f"/combinations/{combo_id}")
        assert r.status_code == 404
        assert r.json()["detail"] == "Combination not found"

    def test_seed_and_autocomplete(self, client):
        seeded = client.post("/medicines/seed").json()
        assert seeded["ok"] is True
        assert seeded["seeded"]["combinations"] > 0

        found = client.get("/medicines/autocomplete", params={"q": "bryonia"}).json()
        assert "Bryonia Alba" in [m["name"] for m in found["medicines"]]
        assert "BC" in [c["name"] for c in found["combinations"]]

        empty = client.get("/medicines/autocomplete").json()
        assert empty == {"medicines": [], "combinations": []}


def test_health(client):
    assert client.get("/health").json() == {"ok": True}
