"""Conflict and saturation checks for a new or edited absence.

The validator never raises for business rule violations: it returns a
ValidationVerdict. Hard errors (bad range, unknown person, double booking)
block the save; saturation warnings are advisory and the caller decides
whether the user confirmed them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..common.datetime_utils import format_br, iter_days, overlap_range
from ..core.constants import DEFAULT_CATEGORY_ABSENCE_LIMITS, FALLBACK_ABSENCE_LIMIT
from ..core.enums import AbsenceReason, Category, ConflictKind
from ..personnel.model import Person
from .model import Absence
from .shifts import effective_shift, shifts_conflict

logger = logging.getLogger(__name__)

CATEGORY_LABELS = {
    Category.GRADUADO: "graduados",
    Category.CABO_SOLDADO: "cabos/soldados",
}


@dataclass(frozen=True)
class ConflictSummary:
    """Another absence that contributes to a saturated day."""

    absence_id: Optional[int]
    person_id: int
    person_name: str
    start_date: date
    end_date: date
    reason: AbsenceReason

    def to_dict(self) -> dict:
        return {
            "ausenciaId": self.absence_id,
            "funcionarioId": self.person_id,
            "nome": self.person_name,
            "dataInicio": self.start_date.isoformat(),
            "dataFim": self.end_date.isoformat(),
            "motivo": self.reason.value,
        }


@dataclass(frozen=True)
class ValidationVerdict:
    error: Optional[ConflictKind] = None
    message: Optional[str] = None
    conflict_date: Optional[date] = None
    warnings: Tuple[str, ...] = ()
    excess_dates: Tuple[date, ...] = ()
    conflicting_absences: Tuple[ConflictSummary, ...] = field(default_factory=tuple)

    @property
    def blocking(self) -> bool:
        return self.error is not None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.warnings

    def to_dict(self) -> dict:
        return {
            "error": self.error.value if self.error else None,
            "message": self.message,
            "conflictDate": self.conflict_date.isoformat() if self.conflict_date else None,
            "warnings": list(self.warnings),
            "excessDates": [d.isoformat() for d in self.excess_dates],
            "conflictingAbsences": [c.to_dict() for c in self.conflicting_absences],
        }


def limit_for(category: Category, limits: Optional[Mapping[Category, int]] = None) -> int:
    limits = limits if limits is not None else DEFAULT_CATEGORY_ABSENCE_LIMITS
    return int(limits.get(category, FALLBACK_ABSENCE_LIMIT))


def find_overlap_conflict(
    candidate: Absence, existing: Sequence[Absence], exclude_id: Optional[int] = None
) -> Optional[Tuple[Absence, date]]:
    """First (absence, day) where the same person is already out on a compatible shift."""
    for other in existing:
        if exclude_id is not None and other.absence_id == exclude_id:
            continue
        if other.person_id != candidate.person_id:
            continue

        overlap = overlap_range(candidate.start_date, candidate.end_date, other.start_date, other.end_date)
        if overlap is None:
            continue

        for day in iter_days(*overlap):
            if shifts_conflict(effective_shift(candidate, day), effective_shift(other, day)):
                return other, day
    return None


def _saturation_scan(
    candidate: Absence,
    person: Person,
    existing: Sequence[Absence],
    people: Mapping[int, Person],
    exclude_id: Optional[int],
    limit: int,
) -> Tuple[List[date], List[ConflictSummary]]:
    same_category = [
        a
        for a in existing
        if not (exclude_id is not None and a.absence_id == exclude_id)
        and a.person_id != person.person_id
        and a.person_id in people
        and people[a.person_id].is_active
        and people[a.person_id].category == person.category
    ]

    excess: List[date] = []
    summaries: Dict[Tuple[int, date], ConflictSummary] = {}
    for day in iter_days(candidate.start_date, candidate.end_date):
        active_today = [a for a in same_category if a.covers(day)]
        # The candidate itself brings the day one closer to the ceiling.
        if len({a.person_id for a in active_today}) + 1 < limit:
            continue
        excess.append(day)
        for a in active_today:
            key = (a.person_id, a.start_date)
            if key not in summaries:
                summaries[key] = ConflictSummary(
                    absence_id=a.absence_id,
                    person_id=a.person_id,
                    person_name=people[a.person_id].display_name,
                    start_date=a.start_date,
                    end_date=a.end_date,
                    reason=a.reason,
                )
    return excess, list(summaries.values())


def _saturation_message(category: Category, limit: int, excess: Sequence[date]) -> str:
    label = CATEGORY_LABELS.get(category, category.value.lower())
    if len(excess) == 1:
        when = f"no dia {format_br(excess[0])}"
    else:
        when = "nos dias " + ", ".join(format_br(d) for d in excess)
    return (
        f"Atenção: com esta ausência, o limite recomendado de {limit} {label} "
        f"ausentes simultaneamente será atingido ou excedido {when}."
    )


def validate(
    candidate: Absence,
    existing: Sequence[Absence],
    roster: Sequence[Person],
    exclude_id: Optional[int] = None,
    *,
    limits: Optional[Mapping[Category, int]] = None,
) -> ValidationVerdict:
    """Check a new or edited absence against the current snapshot.

    exclude_id is the id of the record being edited so it is not compared
    against itself.
    """
    if candidate.end_date < candidate.start_date:
        return ValidationVerdict(
            error=ConflictKind.INVALID_RANGE,
            message="A data final não pode ser anterior à data inicial",
        )

    people = {p.person_id: p for p in roster}
    person = people.get(candidate.person_id)
    if person is None:
        return ValidationVerdict(
            error=ConflictKind.UNKNOWN_PERSON,
            message="Funcionário não encontrado",
        )

    hit = find_overlap_conflict(candidate, existing, exclude_id)
    if hit is not None:
        _, day = hit
        return ValidationVerdict(
            error=ConflictKind.OVERLAPPING_ABSENCE,
            message=f"Conflito de ausência para {person.display_name} em {format_br(day)}",
            conflict_date=day,
        )

    limit = limit_for(person.category, limits)
    excess, summaries = _saturation_scan(candidate, person, existing, people, exclude_id, limit)
    if not excess:
        return ValidationVerdict()

    logger.debug(
        "Saturation for %s: %d day(s) reach limit %d",
        person.category.value,
        len(excess),
        limit,
    )
    return ValidationVerdict(
        warnings=(_saturation_message(person.category, limit, excess),),
        excess_dates=tuple(excess),
        conflicting_absences=tuple(summaries),
    )
