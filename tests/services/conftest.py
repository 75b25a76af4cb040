# tests/services/conftest.py
from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional

import pytest
from sqlalchemy.orm import Session
from starlette.testclient import TestClient

from personsvc.domain.entities.person import MUTABLE_FIELDS, Person
from personsvc.domain.errors import PersistenceError, PersonNotFound
from personsvc.services.api.app import create_app
from personsvc.services.api.deps import get_person_store, transactional_session


class FakePersonStore:
    """
    In-memory PersonStorePort. Set ``fail`` to make every call raise
    PersistenceError, like a dead database would.
    """

    def __init__(self) -> None:
        self.rows: Dict[int, Person] = {}
        self.next_id = 1
        self.fail = False
        self.calls: List[str] = []

    def _check(self, op: str) -> None:
        self.calls.append(op)
        if self.fail:
            raise PersistenceError("failed to execute query")

    def seed(self, **values) -> Person:
        p = Person(id=self.next_id, **{f: values.get(f) for f in MUTABLE_FIELDS})
        self.rows[p.id] = p
        self.next_id += 1
        return p

    def create(self, person: Person) -> int:
        self._check("create")
        return self.seed(**person.supplied_fields()).id

    def update(self, person_id: int, person: Person) -> Person:
        self._check("update")
        values = person.supplied_fields()
        if not values:
            return person
        current: Optional[Person] = self.rows.get(person_id)
        if current is None:
            raise PersistenceError("failed to execute query")
        self.rows[person_id] = replace(current, **values)
        stored = self.rows[person_id]
        for f in ("id", *MUTABLE_FIELDS):
            setattr(person, f, getattr(stored, f))
        return person

    def delete(self, person_id: int) -> bool:
        self._check("delete")
        return self.rows.pop(person_id, None) is not None

    def get_one(self, person_id: int) -> Person:
        self._check("get_one")
        if person_id not in self.rows:
            raise PersonNotFound(person_id)
        return replace(self.rows[person_id])

    def get_many(self) -> List[Person]:
        self._check("get_many")
        return [replace(p) for p in self.rows.values()]


@pytest.fixture()
def fake_store() -> FakePersonStore:
    return FakePersonStore()


@pytest.fixture()
def handler_client(fake_store):
    """
    A TestClient whose PersonStorePort dependency is the in-memory fake.
    No database is touched.
    """
    app = create_app(lifespan=None)
    app.dependency_overrides[get_person_store] = lambda: fake_store
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def api_client(db_engine):
    """
    A TestClient whose FastAPI dependency `transactional_session` is overridden
    to yield a single SQLAlchemy Session bound to the test engine/transaction.
    All API calls in one test share the same session (so POST -> GET works),
    and everything is rolled back at the end of the test.
    """
    conn = db_engine.connect()
    trans = conn.begin()
    session = Session(bind=conn, future=True)

    app = create_app(lifespan=None)

    def _override():
        # yield the same session for every request in this test
        yield session

    app.dependency_overrides[transactional_session] = _override

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
        session.close()
        trans.rollback()
        conn.close()
