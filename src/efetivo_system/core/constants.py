"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import Category

# Ceiling of simultaneous absences per category before the saturation warning.
DEFAULT_CATEGORY_ABSENCE_LIMITS = {
    Category.GRADUADO: 3,
    Category.CABO_SOLDADO: 2,
}
FALLBACK_ABSENCE_LIMIT = 2

NOTE_MAX_LENGTH = 200
DEFAULT_UPCOMING_DAYS = 7
MAX_UPCOMING_DAYS = 90
DEFAULT_SESSION_DAYS = 7
