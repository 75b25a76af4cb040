# personsvc/services/api/deps.py
from __future__ import annotations

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from personsvc.database.core.main import SessionLocal
from personsvc.database.repos.person_repo import SqlAlchemyPersonRepo
from personsvc.domain.ports.person_store import PersonStorePort


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def transactional_session(db: Session = Depends(get_db)) -> Generator[Session, None, None]:
    """
    Request-scoped transaction. Any repo using this session
    participates in the same transaction.
    """
    # Session.begin() commits on normal exit and rolls back if an exception bubbles out.
    with db.begin():
        yield db


def get_person_store(db: Session = Depends(transactional_session, scope="function")) -> PersonStorePort:
    """
    Provide a PersonStorePort implementation via DI.
    Tests override this to swap in a fake.

    The transaction is function-scoped: it commits before the response is sent,
    so a failed commit still turns into an error response.
    """
    return SqlAlchemyPersonRepo(db)
