from personsvc.services.schemas.persons import (
    ErrorRead,
    PersonRead,
    PersonRequest,
)

__all__ = [
    "ErrorRead",
    "PersonRead",
    "PersonRequest",
]
