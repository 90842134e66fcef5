from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional

from ..absences.repository import AbsenceRepository
from ..common.validators import require_enum, require_non_empty
from ..core.enums import Rank, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Person
from .repository import PersonRepository

logger = logging.getLogger(__name__)


class PersonnelService:
    """Use case: manage the roster (admin)."""

    def __init__(self, people: PersonRepository, absences: AbsenceRepository):
        self._people = people
        self._absences = absences

    @staticmethod
    def _require_editor(current_role: Role) -> None:
        if current_role != Role.ENCARREGADO:
            raise AuthorizationError("Apenas o encarregado pode alterar o efetivo")

    def list_roster(self) -> List[Person]:
        """Roster ordered by seniority (most senior first)."""
        return sorted(self._people.list_all(), key=lambda p: (p.seniority, p.rank.order, p.name.casefold()))

    def list_active(self) -> List[Person]:
        return [p for p in self.list_roster() if p.is_active]

    def get(self, person_id: int) -> Person:
        person = self._people.get_by_id(int(person_id))
        if person is None:
            raise NotFoundError("Funcionário não encontrado")
        return person

    def create_person(self, *, current_role: Role, name: str, rank, is_active: bool = True) -> Person:
        self._require_editor(current_role)
        name = require_non_empty(name, "Nome").upper()
        rank = require_enum(Rank, rank, "Graduação")

        seniority = self._people.max_seniority() + 1
        person = self._people.create(name=name, rank=rank, seniority=seniority, is_active=bool(is_active))
        logger.info("Person %s created (%s %s, seniority %s)", person.person_id, rank.value, name, seniority)
        return person

    def update_person(
        self,
        *,
        current_role: Role,
        person_id: int,
        name: str,
        rank,
        seniority: Optional[int] = None,
        is_active: bool = True,
    ) -> Person:
        self._require_editor(current_role)
        current = self.get(person_id)

        if seniority is not None and int(seniority) <= 0:
            raise ValidationError("Ordem de antiguidade deve ser positiva")

        changed = replace(
            current,
            name=require_non_empty(name, "Nome").upper(),
            rank=require_enum(Rank, rank, "Graduação"),
            seniority=int(seniority) if seniority is not None else current.seniority,
            is_active=bool(is_active),
        )
        updated = self._people.update(changed)
        if updated is None:
            raise NotFoundError("Funcionário não encontrado")
        logger.info("Person %s updated", person_id)
        return updated

    def set_active(self, *, current_role: Role, person_id: int, is_active: bool) -> Person:
        self._require_editor(current_role)
        current = self.get(person_id)
        updated = self._people.update(replace(current, is_active=bool(is_active)))
        if updated is None:
            raise NotFoundError("Funcionário não encontrado")
        logger.info("Person %s %s", person_id, "activated" if is_active else "deactivated")
        return updated

    def delete_person(self, *, current_role: Role, person_id: int) -> int:
        """Delete a person and all of their absences.

        Returns the number of absences removed.
        """
        self._require_editor(current_role)
        self.get(person_id)

        removed = self._absences.delete_for_person(int(person_id))
        if not self._people.delete(int(person_id)):
            raise NotFoundError("Funcionário não encontrado")
        logger.info("Person %s deleted with %d absence(s)", person_id, removed)
        return removed
