"""Constants for barbersched.

Centralizes the thresholds and formats used by conflict detection.
"""


# Capacity
DEFAULT_BASE_CAPACITY = 4
HIGH_SEVERITY_CAPACITY_FACTOR = 1.5

# Conflict ordering (lower = shown first)
SEVERITY_RANK = {
    "high": 0,
    "medium": 1,
    "low": 2,
}

# Canonical formats for grouping keys and conflict display
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
