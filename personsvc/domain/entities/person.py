# personsvc/domain/entities/person.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


class _Unset:
    """Marker for a field that was not supplied at all (distinct from ``None``)."""
    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Unset":
        return self

    def __deepcopy__(self, memo) -> "_Unset":
        return self


UNSET: Any = _Unset()

MUTABLE_FIELDS = ("name", "age", "address", "work")


@dataclass
class Person:
    """
    One person record as seen by the domain.

    Every attribute besides ``id`` has three states:
      - UNSET : not supplied, leave whatever is stored alone
      - None  : supplied as null, clear the stored value
      - value : supplied, store it

    ``id`` is None until the database assigns one (or when nothing was found).
    """
    id: Optional[int] = None
    name: Union[str, None, _Unset] = field(default=UNSET)
    age: Union[int, None, _Unset] = field(default=UNSET)
    address: Union[str, None, _Unset] = field(default=UNSET)
    work: Union[str, None, _Unset] = field(default=UNSET)

    def supplied_fields(self) -> Dict[str, Any]:
        return {f: getattr(self, f) for f in MUTABLE_FIELDS if getattr(self, f) is not UNSET}

    def is_persisted(self) -> bool:
        return self.id is not None

    def field_value(self, name: str) -> Any:
        """Stored value for ``name``; UNSET reads as None."""
        v = getattr(self, name)
        return None if v is UNSET else v
