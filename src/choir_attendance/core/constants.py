"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import VoicePart

MIN_REASON_LENGTH = 3
NO_REASON_PLACEHOLDER = "no reason given"

# Export cell markers
PRESENT_MARK = "v"
ABSENT_MARK = "I"
PENDING_MARK = "-"

VOICE_PART_ORDER = (VoicePart.SOPRANO, VoicePart.ALTO, VoicePart.TENOR, VoicePart.BASS)

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

CSV_MIMETYPE = "text/csv"
DEFAULT_PASSWORD = "123456"
MIN_PASSWORD_LENGTH = 6
DEFAULT_UPCOMING_LIMIT = 4
UPCOMING_GRACE_HOURS = 24
FALLBACK_AUTHOR = "Admin"
