from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_optional_date
from ..common.validators import require_enum
from ..core.enums import AbsenceReason, Category
from ..personnel.model import Person
from .model import Absence

_ANY = {"", "TODOS", "ALL"}


@dataclass(frozen=True)
class FilterCriteria:
    """Consulta de ausências. Unset fields do not filter."""

    name: Optional[str] = None
    category: Optional[Category] = None
    reason: Optional[AbsenceReason] = None
    start: Optional[date] = None
    end: Optional[date] = None

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "FilterCriteria":
        def _pick(key: str) -> Optional[str]:
            value = (args.get(key) or "").strip()
            return None if value.upper() in _ANY else value

        category = _pick("categoria")
        reason = _pick("motivo")
        return cls(
            name=_pick("nome"),
            category=require_enum(Category, category, "Categoria") if category else None,
            reason=require_enum(AbsenceReason, reason, "Motivo") if reason else None,
            start=parse_optional_date(args.get("dataInicio")),
            end=parse_optional_date(args.get("dataFim")),
        )


@dataclass(frozen=True)
class AbsenceRow:
    absence: Absence
    person: Person

    def to_dict(self) -> dict:
        data = self.absence.to_dict()
        data["funcionario"] = {
            "id": self.person.person_id,
            "nome": self.person.name,
            "graduacao": self.person.rank.value,
            "categoria": self.person.category.value,
        }
        return data


def _matches(absence: Absence, person: Person, criteria: FilterCriteria) -> bool:
    if criteria.name and criteria.name.casefold() not in person.name.casefold():
        return False
    if criteria.category is not None and person.category != criteria.category:
        return False
    if criteria.reason is not None and absence.reason != criteria.reason:
        return False
    # Open-ended bounds: only the given side is compared.
    if criteria.start is not None and absence.end_date < criteria.start:
        return False
    if criteria.end is not None and absence.start_date > criteria.end:
        return False
    return True


def filter_absences(
    absences: Sequence[Absence], roster: Sequence[Person], criteria: FilterCriteria
) -> List[AbsenceRow]:
    """Absences matching every criterion, most recent start date first.

    Absences pointing to an unknown person are skipped.
    """
    people = {p.person_id: p for p in roster}
    rows = [
        AbsenceRow(absence=a, person=people[a.person_id])
        for a in absences
        if a.person_id in people and _matches(a, people[a.person_id], criteria)
    ]
    rows.sort(key=lambda r: r.absence.start_date, reverse=True)
    return rows
