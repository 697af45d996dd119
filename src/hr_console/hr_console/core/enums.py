from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of the authenticated identity, used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class DayStatus(str, Enum):
    """Classification of one attendance day."""

    PRESENT = "Present"
    HALF_DAY = "Half Day"
    ABSENT = "Absent"


class LeaveStatus(str, Enum):
    """Leave request workflow. Both decisions are terminal."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class LeaveDisposition(str, Enum):
    """How an accepted leave day ends up in the monthly summary."""

    PRESENT = "present"
    ABSENT = "absent"


class ChangeType(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"
