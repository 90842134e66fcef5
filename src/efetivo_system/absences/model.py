from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable, Optional, Tuple

from ..common.datetime_utils import format_br, is_within, to_iso
from ..core.enums import AbsenceReason, Shift
from ..core.exceptions import ValidationError
from ..personnel.model import Person


@dataclass(frozen=True)
class ShiftException:
    """Turno específico para um dia dentro da ausência."""

    day: date
    shift: Shift

    def to_dict(self) -> dict:
        return {"data": to_iso(self.day), "turno": self.shift.value}


def normalize_exceptions(
    exceptions: Iterable[ShiftException], start: date, end: date
) -> Tuple[ShiftException, ...]:
    """Sort by date, keep one entry per date (last wins) and prune dates outside [start, end]."""
    by_day: dict[date, ShiftException] = {}
    for exc in exceptions:
        if is_within(exc.day, start, end):
            by_day[exc.day] = exc
    return tuple(by_day[d] for d in sorted(by_day))


@dataclass(frozen=True)
class Absence:
    """Registro de ausência (Ausência).

    absence_id is None for a draft that was not persisted yet.
    """

    absence_id: Optional[int]
    person_id: int
    reason: AbsenceReason
    start_date: date
    end_date: date
    default_shift: Shift
    exceptions: Tuple[ShiftException, ...] = field(default_factory=tuple)
    note: Optional[str] = None

    def covers(self, day: date) -> bool:
        return is_within(day, self.start_date, self.end_date)

    def exception_for(self, day: date) -> Optional[ShiftException]:
        for exc in self.exceptions:
            if exc.day == day:
                return exc
        return None

    def with_range(self, start: date, end: date) -> "Absence":
        return replace(
            self,
            start_date=start,
            end_date=end,
            exceptions=normalize_exceptions(self.exceptions, start, end),
        )

    def with_exception(self, day: date, shift: Shift) -> "Absence":
        if not self.covers(day):
            raise ValidationError(
                f"A data da exceção ({format_br(day)}) deve estar dentro do período da ausência"
            )
        return replace(
            self,
            exceptions=normalize_exceptions(
                (*self.exceptions, ShiftException(day=day, shift=shift)), self.start_date, self.end_date
            ),
        )

    def without_exception(self, day: date) -> "Absence":
        return replace(self, exceptions=tuple(e for e in self.exceptions if e.day != day))

    def to_dict(self) -> dict:
        return {
            "id": self.absence_id,
            "funcionarioId": self.person_id,
            "motivo": self.reason.value,
            "dataInicio": to_iso(self.start_date),
            "dataFim": to_iso(self.end_date),
            "turnoPadrao": self.default_shift.value,
            "excecoesPorDia": [e.to_dict() for e in self.exceptions],
            "observacao": self.note,
        }


@dataclass(frozen=True)
class AbsenceDay:
    """An absence resolved on one specific date."""

    person: Person
    absence: Absence
    shift: Shift
    day: date

    def to_dict(self) -> dict:
        return {
            "data": to_iso(self.day),
            "turno": self.shift.value,
            "funcionario": {
                "id": self.person.person_id,
                "nome": self.person.name,
                "graduacao": self.person.rank.value,
                "categoria": self.person.category.value,
            },
            "ausenciaId": self.absence.absence_id,
            "motivo": self.absence.reason.value,
        }
