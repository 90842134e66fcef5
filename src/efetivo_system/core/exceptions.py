from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..absences.validator import ValidationVerdict


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced person or absence does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class AbsenceConflictError(ValidationError):
    """Raised when saving an absence is blocked by a hard validation error."""

    def __init__(self, verdict: "ValidationVerdict"):
        super().__init__(verdict.message or "Ausência inválida")
        self.verdict = verdict


class ConfirmationRequired(DomainError):
    """Raised when an absence triggers saturation warnings that were not confirmed.

    The caller re-submits with confirmation to proceed.
    """

    def __init__(self, verdict: "ValidationVerdict"):
        super().__init__("; ".join(verdict.warnings))
        self.verdict = verdict
