from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_max_length, require_enum
from ..core.constants import NOTE_MAX_LENGTH
from ..core.enums import AbsenceReason, Category, Role, Shift
from ..core.exceptions import (
    AbsenceConflictError,
    AuthorizationError,
    ConfirmationRequired,
    NotFoundError,
    ValidationError,
)
from ..personnel.repository import PersonRepository
from .model import Absence, ShiftException, normalize_exceptions
from .query import AbsenceRow, FilterCriteria, filter_absences
from .repository import AbsenceRepository
from .validator import ValidationVerdict, validate

logger = logging.getLogger(__name__)


def parse_absence_payload(payload: Mapping, *, absence_id: Optional[int] = None) -> Absence:
    """Build an Absence from request data (JSON keys as used by the web client)."""
    if not payload.get("funcionarioId"):
        raise ValidationError("Selecione um funcionário")
    if not payload.get("motivo"):
        raise ValidationError("Selecione um motivo")
    if not payload.get("dataInicio") or not payload.get("dataFim"):
        raise ValidationError("Preencha as datas de início e fim")

    try:
        person_id = int(payload["funcionarioId"])
    except (TypeError, ValueError):
        raise ValidationError("Funcionário inválido")

    note = payload.get("observacao")
    if note is not None and not isinstance(note, str):
        raise ValidationError("Observação deve ser um texto")

    raw_exceptions = payload.get("excecoesPorDia") or []
    if not isinstance(raw_exceptions, list):
        raise ValidationError("Exceções por dia devem ser uma lista")

    exceptions: List[ShiftException] = []
    for item in raw_exceptions:
        if not isinstance(item, Mapping):
            raise ValidationError("Exceção por dia inválida: informe data e turno")
        exceptions.append(
            ShiftException(
                day=parse_iso_date(item.get("data")),
                shift=require_enum(Shift, item.get("turno"), "Turno da exceção"),
            )
        )

    return Absence(
        absence_id=absence_id,
        person_id=person_id,
        reason=require_enum(AbsenceReason, payload["motivo"], "Motivo"),
        start_date=parse_iso_date(payload["dataInicio"]),
        end_date=parse_iso_date(payload["dataFim"]),
        default_shift=require_enum(Shift, payload.get("turnoPadrao") or Shift.INTEGRAL.value, "Turno"),
        exceptions=tuple(exceptions),
        note=note,
    )


class AbsenceService:
    """Use case: register, edit, delete and look up absences.

    Every write goes through the validator first. Writes return the stored
    record so callers can update their snapshot without reloading.
    """

    def __init__(
        self,
        absences: AbsenceRepository,
        people: PersonRepository,
        *,
        limits: Optional[Mapping[Category, int]] = None,
    ):
        self._absences = absences
        self._people = people
        self._limits = limits

    @staticmethod
    def _require_editor(current_role: Role) -> None:
        if current_role != Role.ENCARREGADO:
            raise AuthorizationError("Apenas o encarregado pode alterar ausências")

    @staticmethod
    def _clean(draft: Absence) -> Absence:
        note = optional_max_length(draft.note, "Observação", NOTE_MAX_LENGTH)
        if draft.end_date < draft.start_date:
            # Leave exceptions untouched; the validator reports the range error.
            return replace(draft, note=note)
        return replace(
            draft,
            note=note,
            exceptions=normalize_exceptions(draft.exceptions, draft.start_date, draft.end_date),
        )

    def check(self, draft: Absence, *, exclude_id: Optional[int] = None) -> ValidationVerdict:
        draft = self._clean(draft)
        return validate(
            draft,
            self._absences.list_all(),
            self._people.list_all(),
            exclude_id,
            limits=self._limits,
        )

    def _gate(self, draft: Absence, *, exclude_id: Optional[int], confirm_warnings: bool) -> ValidationVerdict:
        verdict = self.check(draft, exclude_id=exclude_id)
        if verdict.blocking:
            raise AbsenceConflictError(verdict)
        if verdict.warnings:
            if not confirm_warnings:
                raise ConfirmationRequired(verdict)
            logger.warning(
                "Absence for person %s saved over saturation warning on %s",
                draft.person_id,
                ", ".join(d.isoformat() for d in verdict.excess_dates),
            )
        return verdict

    def create_absence(self, *, current_role: Role, draft: Absence, confirm_warnings: bool = False) -> Absence:
        self._require_editor(current_role)
        draft = self._clean(replace(draft, absence_id=None))
        self._gate(draft, exclude_id=None, confirm_warnings=confirm_warnings)

        created = self._absences.create(draft)
        logger.info(
            "Absence %s created for person %s (%s..%s)",
            created.absence_id,
            created.person_id,
            created.start_date.isoformat(),
            created.end_date.isoformat(),
        )
        return created

    def update_absence(self, *, current_role: Role, absence: Absence, confirm_warnings: bool = False) -> Absence:
        self._require_editor(current_role)
        if absence.absence_id is None:
            raise ValidationError("Ausência sem identificador")
        if self._absences.get_by_id(int(absence.absence_id)) is None:
            raise NotFoundError("Ausência não encontrada")

        absence = self._clean(absence)
        self._gate(absence, exclude_id=absence.absence_id, confirm_warnings=confirm_warnings)

        updated = self._absences.update(absence)
        if updated is None:
            raise NotFoundError("Ausência não encontrada")
        logger.info("Absence %s updated", updated.absence_id)
        return updated

    def delete_absence(self, *, current_role: Role, absence_id: int) -> None:
        self._require_editor(current_role)
        if not self._absences.delete(int(absence_id)):
            raise NotFoundError("Ausência não encontrada")
        logger.info("Absence %s deleted", absence_id)

    def get(self, absence_id: int) -> Absence:
        absence = self._absences.get_by_id(int(absence_id))
        if absence is None:
            raise NotFoundError("Ausência não encontrada")
        return absence

    def search(self, criteria: Optional[FilterCriteria] = None) -> List[AbsenceRow]:
        return filter_absences(self._absences.list_all(), self._people.list_all(), criteria or FilterCriteria())
