from __future__ import annotations

from typing import List, Protocol

from personsvc.domain.entities.person import Person


class PersonStorePort(Protocol):
    def create(self, person: Person) -> int: ...
    def update(self, person_id: int, person: Person) -> Person: ...
    def delete(self, person_id: int) -> bool: ...
    def get_one(self, person_id: int) -> Person: ...
    def get_many(self) -> List[Person]: ...
