# personsvc/domain/errors.py
from __future__ import annotations

from typing import Optional


class PersonServiceError(Exception):
    """Base for every error raised by the persons service."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(PersonServiceError):
    """Client input that cannot be decoded or does not satisfy the contract."""


class PersistenceError(PersonServiceError):
    """A storage call failed."""


class PersonNotFound(PersistenceError):
    """No row matches the requested identifier."""

    def __init__(self, person_id: Optional[int]) -> None:
        super().__init__(f"person with id = {person_id} not found")
        self.person_id = person_id
