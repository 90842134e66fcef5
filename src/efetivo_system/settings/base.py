import os

from ..core.constants import DEFAULT_SESSION_DAYS, DEFAULT_UPCOMING_DAYS
from ..core.enums import Category


def _int_env(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": _int_env("DB_PORT", 3306),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "efetivo_db"),
}

# Ceiling of simultaneous absences per category before the saturation warning.
CATEGORY_ABSENCE_LIMITS = {
    Category.GRADUADO: _int_env("LIMITE_GRADUADOS", 3),
    Category.CABO_SOLDADO: _int_env("LIMITE_CABOS_SOLDADOS", 2),
}

UPCOMING_DAYS = _int_env("UPCOMING_DAYS", DEFAULT_UPCOMING_DAYS)
SESSION_DAYS = _int_env("SESSION_DAYS", DEFAULT_SESSION_DAYS)

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")
