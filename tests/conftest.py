import os

# Pas de Redis pendant les tests: le lifespan laisse le rate limiting désactivé
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
from typing import Any, Dict, Generator, List
from fastapi.testclient import TestClient

from elderly_assistant.app import app as fastapi_app


# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)


class _FakeResponse:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data


class _FakeQuery:
    """Sous-ensemble du query builder Supabase (select/insert/update/delete, eq, order, limit)."""

    def __init__(self, rows: List[Dict[str, Any]]):
        self._rows = rows
        self._op = "select"
        self._payload: Dict[str, Any] = {}
        self._filters: List[tuple] = []
        self._order: List[tuple] = []
        self._limit = None

    def select(self, *_args, **_kwargs):
        self._op = "select"
        return self

    def insert(self, payload):
        self._op = "insert"
        self._payload = dict(payload)
        return self

    def update(self, payload):
        self._op = "update"
        self._payload = dict(payload)
        return self

    def delete(self):
        self._op = "delete"
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self._order.append((column, desc))
        return self

    def limit(self, n):
        self._limit = n
        return self

    def _match(self, row):
        return all(row.get(c) == v for c, v in self._filters)

    def execute(self):
        if self._op == "insert":
            self._rows.append(dict(self._payload))
            return _FakeResponse([dict(self._payload)])
        matched = [r for r in self._rows if self._match(r)]
        if self._op == "update":
            for r in matched:
                r.update(self._payload)
            return _FakeResponse([dict(r) for r in matched])
        if self._op == "delete":
            for r in matched:
                self._rows.remove(r)
            return _FakeResponse([dict(r) for r in matched])
        # Tri stable appliqué de la dernière clé à la première: équivaut à ORDER BY k1, k2...
        for column, desc in reversed(self._order):
            matched = sorted(matched, key=lambda r: r.get(column) or 0, reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        return _FakeResponse([dict(r) for r in matched])


class FakeSupabase:
    """Client Supabase en mémoire: une liste de lignes par table."""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}

    def table(self, name: str) -> _FakeQuery:
        return _FakeQuery(self.tables.setdefault(name, []))


@pytest.fixture(scope="session")
def app():
    return fastapi_app


@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


# Base en mémoire pour tous les tests (aucun accès réseau à Supabase)
@pytest.fixture(autouse=True)
def fake_db(monkeypatch) -> FakeSupabase:
    db = FakeSupabase()
    monkeypatch.setattr("elderly_assistant.infra.supabase_client.get_supabase", lambda: db)
    monkeypatch.setattr("elderly_assistant.infra.supabase_client.get_service_supabase", lambda: db)
    return db
