from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional

import pytest
from werkzeug.security import generate_password_hash

from efetivo_system.absences.model import Absence
from efetivo_system.core.enums import Rank, Role
from efetivo_system.personnel.model import Person
from efetivo_system.users.model import User


class InMemoryPeople:
    def __init__(self, people=()):
        self._by_id: Dict[int, Person] = {p.person_id: p for p in people}
        self._id = max(self._by_id, default=0)

    def list_all(self):
        return list(self._by_id.values())

    def get_by_id(self, person_id: int) -> Optional[Person]:
        return self._by_id.get(person_id)

    def create(self, *, name: str, rank: Rank, seniority: int, is_active: bool = True) -> Person:
        self._id += 1
        person = Person(person_id=self._id, name=name, rank=rank, seniority=seniority, is_active=is_active)
        self._by_id[person.person_id] = person
        return person

    def update(self, person: Person) -> Optional[Person]:
        if person.person_id not in self._by_id:
            return None
        self._by_id[person.person_id] = person
        return person

    def delete(self, person_id: int) -> bool:
        return self._by_id.pop(person_id, None) is not None

    def max_seniority(self) -> int:
        return max((p.seniority for p in self._by_id.values()), default=0)


class InMemoryAbsences:
    def __init__(self, absences=()):
        self._by_id: Dict[int, Absence] = {a.absence_id: a for a in absences}
        self._id = max(self._by_id, default=0)

    def list_all(self):
        return list(self._by_id.values())

    def get_by_id(self, absence_id: int) -> Optional[Absence]:
        return self._by_id.get(absence_id)

    def create(self, absence: Absence) -> Absence:
        self._id += 1
        stored = replace(absence, absence_id=self._id)
        self._by_id[self._id] = stored
        return stored

    def update(self, absence: Absence) -> Optional[Absence]:
        if absence.absence_id not in self._by_id:
            return None
        self._by_id[absence.absence_id] = absence
        return absence

    def delete(self, absence_id: int) -> bool:
        return self._by_id.pop(absence_id, None) is not None

    def delete_for_person(self, person_id: int) -> int:
        doomed = [aid for aid, a in self._by_id.items() if a.person_id == person_id]
        for aid in doomed:
            del self._by_id[aid]
        return len(doomed)


class InMemoryUsers:
    def __init__(self, users=()):
        self._by_id: Dict[int, User] = {u.user_id: u for u in users}
        self._id = max(self._by_id, default=0)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def create_user(self, *, name: str, email: str, password_hash: str, role: Role) -> int:
        self._id += 1
        self._by_id[self._id] = User(user_id=self._id, name=name, email=email, password_hash=password_hash, role=role)
        return self._id

    def set_password_hash(self, user_id: int, password_hash: str) -> bool:
        user = self._by_id.get(user_id)
        if user is None:
            return False
        self._by_id[user_id] = replace(user, password_hash=password_hash)
        return True


@pytest.fixture
def roster():
    return [
        Person(person_id=1, name="ANGÉLICA", rank=Rank.SEGUNDO_SARGENTO, seniority=1),
        Person(person_id=2, name="STILIS", rank=Rank.TERCEIRO_SARGENTO, seniority=2),
        Person(person_id=3, name="MOURA", rank=Rank.TERCEIRO_SARGENTO, seniority=3),
        Person(person_id=4, name="ROCHA", rank=Rank.SOLDADO_PRIMEIRA, seniority=4),
        Person(person_id=5, name="LIMA", rank=Rank.SOLDADO_SEGUNDA, seniority=5, is_active=False),
    ]


@pytest.fixture
def people_repo(roster):
    return InMemoryPeople(roster)


@pytest.fixture
def absences_repo():
    return InMemoryAbsences()


@pytest.fixture
def users_repo():
    return InMemoryUsers(
        [
            User(
                user_id=1,
                name="Encarregado",
                email="encarregado@efetivo.local",
                password_hash=generate_password_hash("segredo123"),
                role=Role.ENCARREGADO,
            ),
            User(
                user_id=2,
                name="Consulta",
                email="consulta@efetivo.local",
                password_hash=generate_password_hash("consulta1"),
                role=Role.FUNCIONARIO,
            ),
            User(
                user_id=3,
                name="Antigo",
                email="antigo@efetivo.local",
                password_hash=generate_password_hash("antigo123"),
                role=Role.FUNCIONARIO,
                is_active=False,
            ),
        ]
    )
