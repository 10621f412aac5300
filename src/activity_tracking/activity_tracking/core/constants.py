"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 1440
GRID_MINUTES = 15

# Assumed length of a shift that has no end yet, used only when comparing intervals.
DEFAULT_OPEN_SHIFT_MINUTES = 60

DEFAULT_SLOT_MINUTES = 60
DEFAULT_SUGGEST_DAY_START = "06:00"
DEFAULT_SUGGEST_DAY_END = "22:00"
DEFAULT_SUGGEST_LIMIT = 5

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
MAX_NOTES_LENGTH = 1000
DEFAULT_LOCK_TIMEOUT_SECONDS = 5.0
