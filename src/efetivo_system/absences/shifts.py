"""Shift resolution for absences on a single day."""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import Shift
from .model import Absence


def effective_shift(absence: Absence, day: date) -> Shift:
    exc = absence.exception_for(day)
    return exc.shift if exc else absence.default_shift


def shift_covers(effective: Shift, requested: Optional[Shift]) -> bool:
    """True if an absence on `effective` makes the person unavailable for `requested`.

    requested=None means "any shift".
    """
    return requested is None or effective == Shift.INTEGRAL or effective == requested


def shifts_conflict(a: Shift, b: Shift) -> bool:
    return a == Shift.INTEGRAL or b == Shift.INTEGRAL or a == b
