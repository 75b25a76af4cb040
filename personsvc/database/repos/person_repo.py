# personsvc/database/repos/person_repo.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, insert, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from personsvc.common.settings import get_settings
from personsvc.database.models.person import Person as DBPerson
from personsvc.database.repos._mapping import copy_into, to_domain_person
from personsvc.domain.entities.person import MUTABLE_FIELDS, Person as DomainPerson
from personsvc.domain.errors import PersistenceError, PersonNotFound

_COLUMNS = (DBPerson.id, DBPerson.name, DBPerson.age, DBPerson.address, DBPerson.work)


class SqlAlchemyPersonRepo:
    """
    SQLAlchemy-backed store for persons that satisfies PersonStorePort.

    Notes
    -----
    • The repo runs inside the caller's transaction; it never commits.
    • Each call is bounded by ``statement_timeout_sec`` (PostgreSQL only,
      via SET LOCAL so it dies with the transaction).
    • Any SQLAlchemy failure surfaces as PersistenceError.
    """

    def __init__(self, session: Session, *, timeout_sec: Optional[float] = None) -> None:
        self.db = session
        if timeout_sec is None:
            timeout_sec = get_settings().db.statement_timeout_sec
        self.timeout_sec = timeout_sec

    def _apply_deadline(self) -> None:
        if self.db.get_bind().dialect.name != "postgresql":
            return
        ms = int(self.timeout_sec * 1000)
        self.db.execute(text(f"SET LOCAL statement_timeout = {ms}"))

    # -------- commands --------

    def create(self, person: DomainPerson) -> int:
        stmt = (
            insert(DBPerson)
            .values({f: person.field_value(f) for f in MUTABLE_FIELDS})
            .returning(DBPerson.id)
        )
        try:
            self._apply_deadline()
            return self.db.execute(stmt).scalar_one()
        except SQLAlchemyError as e:
            raise PersistenceError("failed to execute query") from e

    def update(self, person_id: int, person: DomainPerson) -> DomainPerson:
        values = person.supplied_fields()
        if not values:
            return person

        stmt = (
            update(DBPerson)
            .where(DBPerson.id == person_id)
            .values(values)
            .returning(*_COLUMNS)
        )
        try:
            self._apply_deadline()
            row = self.db.execute(stmt).mappings().one()
        except SQLAlchemyError as e:
            # NoResultFound lands here too: an unknown id is just a failed update
            raise PersistenceError("failed to execute query") from e
        return copy_into(person, row)

    def delete(self, person_id: int) -> bool:
        stmt = delete(DBPerson).where(DBPerson.id == person_id)
        try:
            self._apply_deadline()
            result = self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError("failed to execute query") from e
        return result.rowcount == 1

    # -------- queries --------

    def get_one(self, person_id: int) -> DomainPerson:
        stmt = select(*_COLUMNS).where(DBPerson.id == person_id)
        try:
            self._apply_deadline()
            row = self.db.execute(stmt).mappings().one_or_none()
        except SQLAlchemyError as e:
            raise PersistenceError("failed to execute query") from e
        if row is None:
            raise PersonNotFound(person_id)
        return to_domain_person(row)

    def get_many(self) -> List[DomainPerson]:
        stmt = select(*_COLUMNS)
        try:
            self._apply_deadline()
            rows = self.db.execute(stmt).mappings().all()
        except SQLAlchemyError as e:
            raise PersistenceError("failed to execute query") from e
        return [to_domain_person(r) for r in rows]
