"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_M = 6_371_000.0

OTP_MIN = 100000
OTP_MAX = 999999

DEFAULT_SESSION_MINUTES = 15
MAX_SESSION_MINUTES = 24 * 60
DEFAULT_QR_PREFIX = "CAMPUS_SESS"
AT_RISK_THRESHOLD = 0.75

SESSION_ID_PREFIX = "SESS_"
RECORD_ID_PREFIX = "REC_"
