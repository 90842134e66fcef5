from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    role: Role

    @property
    def is_editor(self) -> bool:
        return self.role == Role.ENCARREGADO


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("E-mail ou senha inválidos")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Failed login for %s", email)
            raise AuthenticationError("E-mail ou senha inválidos")

        return SessionUser(user_id=user.user_id, name=user.name, role=user.role)


class UserService:
    """Use case: manage access accounts."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(self, *, name: str, email: str, password: str, role: Role) -> int:
        name = require_non_empty(name, "Nome")
        email = require_non_empty(email, "E-mail").lower()
        require_min_length(password, "Senha", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("E-mail já cadastrado")

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role(role),
        )
        logger.info("Account %s created (%s)", user_id, Role(role).value)
        return user_id

    def change_password(self, *, user_id: int, current_password: str, new_password: str) -> None:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Usuário não encontrado")
        if not check_password_hash(user.password_hash, current_password or ""):
            raise AuthenticationError("Senha atual incorreta")
        require_min_length(new_password, "Nova senha", MIN_PASSWORD_LENGTH)
        if new_password == current_password:
            raise ValidationError("A nova senha deve ser diferente da atual")

        if not self._users.set_password_hash(user.user_id, generate_password_hash(new_password)):
            raise ValidationError("Falha ao alterar a senha")
        logger.info("Password changed for account %s", user.user_id)

    def ensure_admin(self, *, email: str, password: str, name: str = "Encarregado") -> bool:
        """Create the first ENCARREGADO account unless the email is already registered.

        Returns True when an account was created.
        """
        if self._users.get_by_email((email or "").strip().lower()):
            return False
        self.create_account(name=name, email=email.strip(), password=password, role=Role.ENCARREGADO)
        return True
