# personsvc/database/models/person.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from personsvc.database.core.main import Base


class Person(Base):
    """
    A single person row. ``id`` is assigned by the database and never by callers.
    """
    __tablename__ = "persons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    age: Mapped[Optional[int]] = mapped_column(Integer)
    address: Mapped[Optional[str]] = mapped_column(Text)
    work: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Person id={self.id} name={self.name!r}>"
