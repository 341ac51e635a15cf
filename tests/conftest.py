"""Shared pytest fixtures: throwaway sqlite store, API client, fake AI responses."""
import json
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from rxparse.api.deps import get_db
from rxparse.db.db_config import get_sqlite_connection
from rxparse.main import app


@pytest.fixture
def conn():
    c = get_sqlite_connection(":memory:")
    yield c
    c.close()


@pytest.fixture
def client(conn):
    app.dependency_overrides[get_db] = lambda: conn
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def completion():
    """Factory for a fake chat-completions HTTP response."""
    def _make(payload=None, status_code=200, content=None):
        resp = MagicMock()
        resp.status_code = status_code
        resp.text = "upstream error" if status_code >= 400 else ""
        if content is None and payload is not None:
            content = json.dumps(payload)
        resp.json.return_value = {"choices": [{"message": {"content": content}}]}
        return resp
    return _make
