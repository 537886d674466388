"""
Shared enumerations.

String-valued enums serialize to the exact values stored in
the blobs and returned by the API.
"""

import enum


class KeyStatus(str, enum.Enum):
    """Where a key currently is."""
    AVAILABLE = "AVAILABLE"
    CHECKED_OUT = "CHECKED_OUT"


class LogAction(str, enum.Enum):
    """Kind of transition recorded in the activity log."""
    CHECKOUT = "checkout"
    CHECKIN = "checkin"
