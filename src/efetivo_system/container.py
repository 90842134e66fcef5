from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .absences.mysql_absence_repository import MySQLAbsenceRepository
from .absences.repository import AbsenceRepository
from .absences.service import AbsenceService
from .availability.service import AvailabilityService
from .core.constants import DEFAULT_UPCOMING_DAYS
from .core.enums import Category
from .database.connection import DBConfig, DatabaseConnection
from .personnel.mysql_person_repository import MySQLPersonRepository
from .personnel.repository import PersonRepository
from .personnel.service import PersonnelService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    people_repo: PersonRepository
    absences_repo: AbsenceRepository
    users_repo: UserRepository

    auth_service: AuthService
    user_service: UserService
    personnel_service: PersonnelService
    absence_service: AbsenceService
    availability_service: AvailabilityService


def wire(
    *,
    people_repo: PersonRepository,
    absences_repo: AbsenceRepository,
    users_repo: UserRepository,
    conn: Optional[DatabaseConnection] = None,
    limits: Optional[Mapping[Category, int]] = None,
    upcoming_days: int = DEFAULT_UPCOMING_DAYS,
) -> Container:
    """Build services on top of the given repositories (MySQL or in-memory)."""
    return Container(
        conn=conn,
        people_repo=people_repo,
        absences_repo=absences_repo,
        users_repo=users_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        personnel_service=PersonnelService(people_repo, absences_repo),
        absence_service=AbsenceService(absences_repo, people_repo, limits=limits),
        availability_service=AvailabilityService(people_repo, absences_repo, upcoming_days=upcoming_days),
    )


def build_container(
    *,
    db_config: dict,
    limits: Optional[Mapping[Category, int]] = None,
    upcoming_days: int = DEFAULT_UPCOMING_DAYS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return wire(
        people_repo=MySQLPersonRepository(conn),
        absences_repo=MySQLAbsenceRepository(conn),
        users_repo=MySQLUserRepository(conn),
        conn=conn,
        limits=limits,
        upcoming_days=upcoming_days,
    )
