# tests/services/test_app_factory.py
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.exc import OperationalError
from starlette.testclient import TestClient

from personsvc.services.api import app as app_module
from personsvc.services.api.deps import get_person_store, transactional_session


def test_startup_creates_tables_when_enabled(monkeypatch):
    calls = []
    monkeypatch.setattr(app_module, "init_db", lambda: calls.append("init"))

    with TestClient(app_module.create_app()) as client:
        assert calls == ["init"]
        r = client.get("/healthz")
        assert r.status_code == 200


def test_unknown_route_uses_error_shape():
    with TestClient(app_module.create_app(lifespan=None)) as client:
        r = client.get("/api/v1/nothing-here")
    assert r.status_code == 404
    assert r.json() == {"errors": "Not Found"}


def test_openapi_lists_person_routes():
    with TestClient(app_module.create_app(lifespan=None)) as client:
        paths = client.get("/api/v1/openapi.json").json()["paths"]
    assert set(paths["/api/v1/persons"]) == {"get", "post"}
    assert set(paths["/api/v1/persons/{person_id}"]) == {"get", "patch", "delete"}


class _ExplodingStore:
    def get_many(self):
        raise RuntimeError("boom")


def test_unexpected_error_uses_error_shape():
    app = app_module.create_app(lifespan=None)
    app.dependency_overrides[get_person_store] = lambda: _ExplodingStore()
    with TestClient(app, raise_server_exceptions=False) as client:
        r = client.get("/api/v1/persons")
    assert r.status_code == 500
    assert r.json() == {"errors": "internal error"}


def test_failed_commit_uses_error_shape(fake_store):
    def _commit_fails():
        yield None
        raise OperationalError("COMMIT", {}, Exception("server closed the connection"))

    def _store(_db=Depends(transactional_session, scope="function")):
        return fake_store

    app = app_module.create_app(lifespan=None)
    app.dependency_overrides[transactional_session] = _commit_fails
    app.dependency_overrides[get_person_store] = _store
    with TestClient(app, raise_server_exceptions=False) as client:
        r = client.post("/api/v1/persons", json={"name": "lost"})
    assert r.status_code == 500
    assert r.json() == {"errors": "internal error"}


class _DeadSession:
    def execute(self, stmt, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_readyz_reports_unavailable_store():
    app = app_module.create_app(lifespan=None)
    app.dependency_overrides[transactional_session] = lambda: _DeadSession()
    with TestClient(app) as client:
        r = client.get("/readyz")
    assert r.status_code == 503
    assert r.json() == {"errors": "store unavailable"}
