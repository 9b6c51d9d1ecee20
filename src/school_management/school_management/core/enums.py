from __future__ import annotations

from enum import Enum, IntEnum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"
    PARENT = "parent"


class AttendanceStatus(str, Enum):
    """Attendance outcome stored per student and date."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class ConnectionState(IntEnum):
    """Connection state flag of a database handle."""

    DISCONNECTED = 0
    CONNECTED = 1
    CONNECTING = 2
    DISCONNECTING = 3
