"""Utility constants for calinterval.

Time unit constants represent durations in seconds.
Only fixed-length units have a constant; years and months depend on the
reference moment they are resolved against.
"""

# Time unit constants (all values in seconds)
SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400
WEEK = 604800

# Timezone used when reading the current time
DEFAULT_TZ = "UTC"

MICROSECONDS_PER_SECOND = 1_000_000
