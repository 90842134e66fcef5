from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence

from ..absences.model import Absence, AbsenceDay
from ..absences.shifts import effective_shift, shift_covers
from ..common.datetime_utils import iter_days
from ..core.enums import Category, Shift
from ..personnel.model import Person


@dataclass(frozen=True)
class CategoryAvailability:
    total: int
    absent: int

    @property
    def available(self) -> int:
        return self.total - self.absent

    def to_dict(self) -> dict:
        return {"total": self.total, "ausentes": self.absent, "disponivel": self.available}


def index_roster(roster: Sequence[Person]) -> Dict[int, Person]:
    return {p.person_id: p for p in roster}


def _sort_key(item: AbsenceDay):
    return (
        0 if item.person.category == Category.GRADUADO else 1,
        item.person.seniority,
        item.person.name.casefold(),
    )


def absences_for_date(roster: Sequence[Person], absences: Sequence[Absence], day: date) -> List[AbsenceDay]:
    """All absences of active people on `day`, graduados first then by seniority."""
    people = index_roster(roster)
    out: List[AbsenceDay] = []
    for absence in absences:
        if not absence.covers(day):
            continue
        person = people.get(absence.person_id)
        if person is None or not person.is_active:
            continue
        out.append(AbsenceDay(person=person, absence=absence, shift=effective_shift(absence, day), day=day))
    out.sort(key=_sort_key)
    return out


def absences_for_range(
    roster: Sequence[Person], absences: Sequence[Absence], start: date, end: date
) -> Dict[date, List[AbsenceDay]]:
    """Dates in [start, end] that have at least one absence."""
    out: Dict[date, List[AbsenceDay]] = {}
    for day in iter_days(start, end):
        items = absences_for_date(roster, absences, day)
        if items:
            out[day] = items
    return out


def availability(
    roster: Sequence[Person],
    absences: Sequence[Absence],
    day: date,
    shift: Optional[Shift] = None,
) -> Dict[Category, CategoryAvailability]:
    """Present/absent/total per category for `day`.

    Without a shift every absence on that day counts; with a shift only
    absences whose effective shift is INTEGRAL or equal to it count.
    """
    active = [p for p in roster if p.is_active]
    totals = {c: 0 for c in Category}
    for person in active:
        totals[person.category] += 1

    absent_ids: Dict[Category, set] = {c: set() for c in Category}
    for item in absences_for_date(active, absences, day):
        if shift_covers(item.shift, shift):
            absent_ids[item.person.category].add(item.person.person_id)

    return {c: CategoryAvailability(total=totals[c], absent=len(absent_ids[c])) for c in Category}


def availability_to_dict(result: Mapping[Category, CategoryAvailability]) -> dict:
    return {category.value: counts.to_dict() for category, counts in result.items()}
