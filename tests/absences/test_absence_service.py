from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from efetivo_system.absences.model import Absence, ShiftException
from efetivo_system.absences.query import FilterCriteria
from efetivo_system.absences.service import AbsenceService, parse_absence_payload
from efetivo_system.core.enums import AbsenceReason, Category, Role, Shift
from efetivo_system.core.exceptions import (
    AbsenceConflictError,
    AuthorizationError,
    ConfirmationRequired,
    NotFoundError,
    ValidationError,
)

EDITOR = Role.ENCARREGADO


def draft(pid, start, end, shift=Shift.INTEGRAL, *, exceptions=(), note=None, absence_id=None) -> Absence:
    return Absence(
        absence_id=absence_id,
        person_id=pid,
        reason=AbsenceReason.FERIAS,
        start_date=start,
        end_date=end,
        default_shift=shift,
        exceptions=tuple(exceptions),
        note=note,
    )


@pytest.fixture
def svc(absences_repo, people_repo):
    return AbsenceService(absences_repo, people_repo)


def test_create_returns_stored_record_with_id(svc, absences_repo):
    created = svc.create_absence(current_role=EDITOR, draft=draft(1, date(2024, 1, 10), date(2024, 1, 12)))
    assert created.absence_id is not None
    assert absences_repo.get_by_id(created.absence_id) == created


def test_only_editor_can_write(svc, absences_repo):
    with pytest.raises(AuthorizationError):
        svc.create_absence(current_role=Role.FUNCIONARIO, draft=draft(1, date(2024, 1, 10), date(2024, 1, 12)))
    assert absences_repo.list_all() == []


def test_overlap_is_rejected_and_nothing_is_stored(svc, absences_repo):
    svc.create_absence(current_role=EDITOR, draft=draft(1, date(2024, 2, 1), date(2024, 2, 5)))
    with pytest.raises(AbsenceConflictError) as exc:
        svc.create_absence(current_role=EDITOR, draft=draft(1, date(2024, 2, 3), date(2024, 2, 8)))
    assert exc.value.verdict.conflict_date == date(2024, 2, 3)
    assert len(absences_repo.list_all()) == 1


def test_saturation_warning_requires_confirmation(svc, absences_repo):
    svc.create_absence(current_role=EDITOR, draft=draft(1, date(2024, 1, 10), date(2024, 1, 12)))
    svc.create_absence(current_role=EDITOR, draft=draft(2, date(2024, 1, 11), date(2024, 1, 13)))

    third = draft(3, date(2024, 1, 11), date(2024, 1, 11))
    with pytest.raises(ConfirmationRequired) as exc:
        svc.create_absence(current_role=EDITOR, draft=third)
    assert exc.value.verdict.excess_dates == (date(2024, 1, 11),)
    assert len(absences_repo.list_all()) == 2

    created = svc.create_absence(current_role=EDITOR, draft=third, confirm_warnings=True)
    assert created.person_id == 3
    assert len(absences_repo.list_all()) == 3


def test_note_longer_than_limit_is_rejected(svc):
    with pytest.raises(ValidationError):
        svc.create_absence(current_role=EDITOR, draft=draft(1, date(2024, 1, 1), date(2024, 1, 1), note="x" * 201))


def test_blank_note_is_stored_as_none(svc):
    created = svc.create_absence(current_role=EDITOR, draft=draft(1, date(2024, 1, 1), date(2024, 1, 1), note="   "))
    assert created.note is None


def test_exceptions_outside_new_range_are_pruned_on_update(svc):
    created = svc.create_absence(
        current_role=EDITOR,
        draft=draft(
            1,
            date(2024, 3, 1),
            date(2024, 3, 10),
            exceptions=[ShiftException(day=date(2024, 3, 9), shift=Shift.MATUTINO)],
        ),
    )
    updated = svc.update_absence(current_role=EDITOR, absence=replace(created, end_date=date(2024, 3, 5)))
    assert updated.exceptions == ()


def test_update_does_not_conflict_with_itself(svc):
    created = svc.create_absence(current_role=EDITOR, draft=draft(1, date(2024, 3, 1), date(2024, 3, 10)))
    updated = svc.update_absence(current_role=EDITOR, absence=created.with_range(date(2024, 3, 2), date(2024, 3, 12)))
    assert updated.absence_id == created.absence_id
    assert updated.end_date == date(2024, 3, 12)


def test_update_unknown_absence(svc):
    with pytest.raises(NotFoundError):
        svc.update_absence(current_role=EDITOR, absence=draft(1, date(2024, 3, 1), date(2024, 3, 2), absence_id=99))


def test_delete_unknown_absence(svc):
    with pytest.raises(NotFoundError):
        svc.delete_absence(current_role=EDITOR, absence_id=42)


def test_custom_limits_are_used(absences_repo, people_repo):
    svc = AbsenceService(absences_repo, people_repo, limits={Category.GRADUADO: 2})
    svc.create_absence(current_role=EDITOR, draft=draft(1, date(2024, 1, 10), date(2024, 1, 10)))
    with pytest.raises(ConfirmationRequired):
        svc.create_absence(current_role=EDITOR, draft=draft(2, date(2024, 1, 10), date(2024, 1, 10)))


def test_search_joins_person(svc):
    svc.create_absence(current_role=EDITOR, draft=draft(4, date(2024, 1, 10), date(2024, 1, 10)))
    rows = svc.search(FilterCriteria(category=Category.CABO_SOLDADO))
    assert [r.person.name for r in rows] == ["ROCHA"]


def test_parse_payload_defaults_and_exceptions():
    absence = parse_absence_payload(
        {
            "funcionarioId": "3",
            "motivo": "Férias",
            "dataInicio": "2024-01-10",
            "dataFim": "2024-01-12",
            "excecoesPorDia": [{"data": "2024-01-11", "turno": "MATUTINO"}],
        }
    )
    assert absence.person_id == 3
    assert absence.reason == AbsenceReason.FERIAS
    assert absence.default_shift == Shift.INTEGRAL
    assert absence.exceptions == (ShiftException(day=date(2024, 1, 11), shift=Shift.MATUTINO),)


@pytest.mark.parametrize(
    "payload",
    [
        {"motivo": "Férias", "dataInicio": "2024-01-10", "dataFim": "2024-01-12"},
        {"funcionarioId": 1, "dataInicio": "2024-01-10", "dataFim": "2024-01-12"},
        {"funcionarioId": 1, "motivo": "Férias", "dataInicio": "2024-01-10"},
        {"funcionarioId": 1, "motivo": "Viagem", "dataInicio": "2024-01-10", "dataFim": "2024-01-12"},
        {"funcionarioId": 1, "motivo": "Férias", "dataInicio": "10/01/2024", "dataFim": "2024-01-12"},
        {"funcionarioId": 1, "motivo": "Férias", "dataInicio": "2024-01-10", "dataFim": "2024-01-12", "observacao": 5},
        {"funcionarioId": 1, "motivo": "Férias", "dataInicio": "2024-01-10", "dataFim": "2024-01-12", "excecoesPorDia": ["2024-01-10"]},
        {"funcionarioId": 1, "motivo": "Férias", "dataInicio": "2024-01-10", "dataFim": "2024-01-12", "excecoesPorDia": {"data": "2024-01-10"}},
        {"funcionarioId": "abc", "motivo": "Férias", "dataInicio": "2024-01-10", "dataFim": "2024-01-12"},
    ],
)
def test_parse_payload_rejects_incomplete_or_malformed_data(payload):
    with pytest.raises(ValidationError):
        parse_absence_payload(payload)
