from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Rank
from .model import Person


class PersonRepository(Protocol):
    """Roster source.

    Services depend on this interface, not on a concrete database.
    """

    def list_all(self) -> Sequence[Person]:
        raise NotImplementedError

    def get_by_id(self, person_id: int) -> Optional[Person]:
        raise NotImplementedError

    def create(self, *, name: str, rank: Rank, seniority: int, is_active: bool = True) -> Person:
        raise NotImplementedError

    def update(self, person: Person) -> Optional[Person]:
        """Persist all fields of person. Returns None if it no longer exists."""

        raise NotImplementedError

    def delete(self, person_id: int) -> bool:
        raise NotImplementedError

    def max_seniority(self) -> int:
        """Highest seniority number in use, 0 on an empty roster."""

        raise NotImplementedError
