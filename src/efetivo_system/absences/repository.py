from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Absence


class AbsenceRepository(Protocol):
    def list_all(self) -> Sequence[Absence]:
        raise NotImplementedError

    def get_by_id(self, absence_id: int) -> Optional[Absence]:
        raise NotImplementedError

    def create(self, absence: Absence) -> Absence:
        """Insert a draft (absence_id=None).

        Returns the stored record with its new absence_id.
        """

        raise NotImplementedError

    def update(self, absence: Absence) -> Optional[Absence]:
        """Returns the stored record, or None if absence_id no longer exists."""

        raise NotImplementedError

    def delete(self, absence_id: int) -> bool:
        raise NotImplementedError

    def delete_for_person(self, person_id: int) -> int:
        """Delete every absence of a person. Returns how many were removed."""

        raise NotImplementedError
