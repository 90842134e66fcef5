from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from ..absences.model import Absence, AbsenceDay
from ..absences.repository import AbsenceRepository
from ..common.datetime_utils import today_local
from ..core.constants import DEFAULT_UPCOMING_DAYS, MAX_UPCOMING_DAYS
from ..core.enums import Category, Shift
from ..core.exceptions import ValidationError
from ..personnel.model import Person
from ..personnel.repository import PersonRepository
from .aggregator import CategoryAvailability, absences_for_date, absences_for_range, availability


@dataclass(frozen=True)
class Snapshot:
    """Roster and absences loaded together for one computation."""

    roster: Sequence[Person]
    absences: Sequence[Absence]


class AvailabilityService:
    """Dashboard use cases: staff counters and upcoming absences."""

    def __init__(self, people: PersonRepository, absences: AbsenceRepository, *, upcoming_days: int = DEFAULT_UPCOMING_DAYS):
        self._people = people
        self._absences = absences
        self._upcoming_days = int(upcoming_days)

    def snapshot(self) -> Snapshot:
        return Snapshot(roster=list(self._people.list_all()), absences=list(self._absences.list_all()))

    def for_date(self, day: date, shift: Optional[Shift] = None) -> Dict[Category, CategoryAvailability]:
        snap = self.snapshot()
        return availability(snap.roster, snap.absences, day, shift)

    def absences_on(self, day: date) -> List[AbsenceDay]:
        snap = self.snapshot()
        return absences_for_date(snap.roster, snap.absences, day)

    def upcoming(self, start: Optional[date] = None, days: Optional[int] = None) -> Dict[date, List[AbsenceDay]]:
        """Absences for the next `days` days starting after `start` (default: today)."""
        start = start or today_local()
        days = self._upcoming_days if days is None else int(days)
        if not 0 <= days <= MAX_UPCOMING_DAYS:
            raise ValidationError(f"Número de dias deve estar entre 0 e {MAX_UPCOMING_DAYS}")
        snap = self.snapshot()
        return absences_for_range(snap.roster, snap.absences, start + timedelta(days=1), start + timedelta(days=days))

    def dashboard(self, day: Optional[date] = None) -> dict:
        day = day or today_local()
        snap = self.snapshot()
        return {
            "day": day,
            "overall": availability(snap.roster, snap.absences, day),
            "by_shift": {
                shift: availability(snap.roster, snap.absences, day, shift)
                for shift in (Shift.MATUTINO, Shift.VESPERTINO)
            },
            "absences": absences_for_date(snap.roster, snap.absences, day),
            "tomorrow": absences_for_date(snap.roster, snap.absences, day + timedelta(days=1)),
        }
