# personsvc/services/schemas/persons.py
from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

# persons.age is a 32-bit INTEGER column
Int32 = Annotated[StrictInt, Field(ge=-(2**31), le=2**31 - 1)]


class PersonRequest(BaseModel):
    """
    Body accepted by both POST and PATCH.
    ``name`` is mandatory on both; the others may be omitted or null.
    """
    model_config = ConfigDict(extra="ignore")

    name: StrictStr
    age: Optional[Int32] = None
    address: Optional[StrictStr] = None
    work: Optional[StrictStr] = None


class PersonRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    age: Optional[int] = None
    address: Optional[str] = None
    work: Optional[str] = None


class ErrorRead(BaseModel):
    errors: str
