# personsvc/database/repos/_mapping.py
from __future__ import annotations

from typing import Any, Mapping

from personsvc.domain.entities.person import Person as DomainPerson


def to_domain_person(row: Mapping[str, Any]) -> DomainPerson:
    return DomainPerson(
        id=row["id"],
        name=row["name"],
        age=row["age"],
        address=row["address"],
        work=row["work"],
    )


def copy_into(target: DomainPerson, row: Mapping[str, Any]) -> DomainPerson:
    """Overwrite ``target`` with the full column set of ``row``."""
    target.id = row["id"]
    target.name = row["name"]
    target.age = row["age"]
    target.address = row["address"]
    target.work = row["work"]
    return target
