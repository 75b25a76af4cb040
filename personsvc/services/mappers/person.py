# personsvc/services/mappers/person.py
from __future__ import annotations

from personsvc.domain.entities.person import MUTABLE_FIELDS, UNSET, Person
from personsvc.services.schemas.persons import PersonRead, PersonRequest


def to_domain_from_request(s: PersonRequest) -> Person:
    """
    Only the keys present in the body make it onto the domain record;
    everything else stays UNSET so the store leaves it alone.
    """
    supplied = s.model_fields_set
    return Person(**{f: getattr(s, f) if f in supplied else UNSET for f in MUTABLE_FIELDS})


def to_read_schema(p: Person) -> PersonRead:
    return PersonRead(
        id=p.id,
        name=p.field_value("name"),
        age=p.field_value("age"),
        address=p.field_value("address"),
        work=p.field_value("work"),
    )
