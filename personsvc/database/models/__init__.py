# personsvc/database/models/__init__.py

from personsvc.database.core.main import Base
from personsvc.database.models.person import Person

__all__ = [
    "Base",
    "Person",
]
