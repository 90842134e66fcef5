from __future__ import annotations

import pytest

from efetivo_system.container import wire
from efetivo_system.main import create_app


@pytest.fixture
def app(people_repo, absences_repo, users_repo):
    container = wire(people_repo=people_repo, absences_repo=absences_repo, users_repo=users_repo)
    return create_app(container, settings_module="efetivo_system.settings.testing")


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, email="encarregado@efetivo.local", senha="segredo123"):
    return client.post("/api/login", json={"email": email, "senha": senha})


def absence_payload(pid, start, end, **extra):
    body = {"funcionarioId": pid, "motivo": "Férias", "dataInicio": start, "dataFim": end, "turnoPadrao": "INTEGRAL"}
    body.update(extra)
    return body


def test_endpoints_require_login(client):
    assert client.get("/api/efetivo").status_code == 401
    assert client.get("/api/ausencias").status_code == 401


def test_login_and_me(client):
    res = login(client)
    assert res.status_code == 200
    assert res.get_json()["encarregado"] is True

    me = client.get("/api/me").get_json()
    assert me["user"]["role"] == "ENCARREGADO"

    client.post("/api/logout")
    assert client.get("/api/me").status_code == 401


def test_bad_login(client):
    res = login(client, senha="errada")
    assert res.status_code == 401
    assert res.get_json()["success"] is False


def test_reader_cannot_write(client):
    login(client, "consulta@efetivo.local", "consulta1")
    assert client.get("/api/funcionarios").status_code == 200
    res = client.post("/api/ausencias", json=absence_payload(1, "2024-01-10", "2024-01-12"))
    assert res.status_code == 403


def test_create_and_search_absence(client):
    login(client)
    res = client.post("/api/ausencias", json=absence_payload(4, "2024-01-10", "2024-01-12", observacao="Viagem"))
    assert res.status_code == 201
    created = res.get_json()["ausencia"]
    assert created["id"] is not None
    assert created["observacao"] == "Viagem"

    rows = client.get("/api/ausencias?categoria=CABO_SOLDADO&dataInicio=2024-01-01").get_json()["ausencias"]
    assert [r["funcionario"]["nome"] for r in rows] == ["ROCHA"]


def test_overlap_returns_conflict(client):
    login(client)
    client.post("/api/ausencias", json=absence_payload(1, "2024-02-01", "2024-02-05"))
    res = client.post("/api/ausencias", json=absence_payload(1, "2024-02-03", "2024-02-08"))
    assert res.status_code == 409
    body = res.get_json()
    assert body["verdict"]["error"] == "OVERLAPPING_ABSENCE"
    assert body["verdict"]["conflictDate"] == "2024-02-03"


def test_saturation_needs_confirmation(client):
    login(client)
    client.post("/api/ausencias", json=absence_payload(1, "2024-01-10", "2024-01-12"))
    client.post("/api/ausencias", json=absence_payload(2, "2024-01-11", "2024-01-13"))

    res = client.post("/api/ausencias", json=absence_payload(3, "2024-01-11", "2024-01-11"))
    assert res.status_code == 409
    body = res.get_json()
    assert body["requiresConfirmation"] is True
    assert body["verdict"]["excessDates"] == ["2024-01-11"]

    res = client.post("/api/ausencias", json=absence_payload(3, "2024-01-11", "2024-01-11", confirmar=True))
    assert res.status_code == 201


def test_validate_endpoint_does_not_store(client, absences_repo):
    login(client)
    res = client.post("/api/ausencias/validar", json=absence_payload(1, "2024-01-12", "2024-01-10"))
    assert res.status_code == 200
    body = res.get_json()
    assert body["success"] is False
    assert body["verdict"]["error"] == "INVALID_RANGE"
    assert absences_repo.list_all() == []


def test_staff_availability_by_shift(client):
    login(client)
    client.post("/api/ausencias", json=absence_payload(1, "2024-05-10", "2024-05-10", turnoPadrao="MATUTINO"))

    morning = client.get("/api/efetivo?data=2024-05-10&turno=MATUTINO").get_json()
    assert morning["efetivo"]["GRADUADO"] == {"total": 3, "ausentes": 1, "disponivel": 2}

    afternoon = client.get("/api/efetivo?data=2024-05-10&turno=VESPERTINO").get_json()
    assert afternoon["efetivo"]["GRADUADO"]["ausentes"] == 0


def test_dashboard_and_upcoming(client):
    login(client)
    client.post("/api/ausencias", json=absence_payload(4, "2024-05-11", "2024-05-12"))

    dash = client.get("/api/dashboard?data=2024-05-10").get_json()
    assert dash["ausenciasHoje"] == []
    assert [a["funcionario"]["id"] for a in dash["ausenciasAmanha"]] == [4]
    assert set(dash["porTurno"]) == {"MATUTINO", "VESPERTINO"}

    upcoming = client.get("/api/proximos-dias?inicio=2024-05-10&dias=3").get_json()["dias"]
    assert list(upcoming) == ["2024-05-11", "2024-05-12"]


def test_delete_person_reports_removed_absences(client):
    login(client)
    client.post("/api/ausencias", json=absence_payload(4, "2024-05-11", "2024-05-12"))
    res = client.delete("/api/funcionarios/4")
    assert res.get_json() == {"success": True, "ausenciasRemovidas": 1}
    ids = [p["id"] for p in client.get("/api/funcionarios").get_json()["funcionarios"]]
    assert 4 not in ids


def test_invalid_date_is_bad_request(client):
    login(client)
    assert client.get("/api/efetivo?data=10/05/2024").status_code == 400


@pytest.mark.parametrize(
    "extra",
    [
        {"observacao": 5},
        {"excecoesPorDia": ["2024-01-10"]},
        {"excecoesPorDia": [{"data": "2024-01-10", "turno": "NOTURNO"}]},
    ],
)
def test_malformed_absence_payload_is_bad_request(client, absences_repo, extra):
    login(client)
    res = client.post("/api/ausencias", json=absence_payload(1, "2024-01-10", "2024-01-12", **extra))
    assert res.status_code == 400
    assert res.get_json()["success"] is False
    assert absences_repo.list_all() == []


def test_validate_with_non_numeric_id_is_bad_request(client):
    login(client)
    res = client.post("/api/ausencias/validar", json=absence_payload(1, "2024-01-10", "2024-01-12", id="abc"))
    assert res.status_code == 400


def test_upcoming_rejects_huge_window(client):
    login(client)
    assert client.get("/api/proximos-dias?inicio=2024-05-10&dias=99999999").status_code == 400
    assert client.get("/api/proximos-dias?inicio=2024-05-10&dias=abc").status_code == 400


def test_storage_failure_is_server_error(client, people_repo, absences_repo, monkeypatch):
    def broken():
        raise RuntimeError("connection lost")

    login(client)
    monkeypatch.setattr(people_repo, "list_all", broken)
    monkeypatch.setattr(absences_repo, "get_by_id", lambda absence_id: broken())

    res = client.get("/api/funcionarios")
    assert res.status_code == 500
    assert res.get_json() == {"success": False, "message": "Erro ao carregar funcionários"}
    assert client.get("/api/ausencias/1").status_code == 500
