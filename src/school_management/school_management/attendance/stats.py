from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceStats, status_value

ONE_DECIMAL = Decimal("0.1")


def format_rate(rate: float) -> str:
    """One decimal place, ties rounded up (2/32 -> 6.25 -> "6.3")."""
    return str(Decimal(rate).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


def compute_stats(records: Iterable[AttendanceRecord]) -> AttendanceStats:
    """Count present/absent/late and derive the attendance rate.

    The rate is ``(present + late) / total * 100`` formatted with one decimal,
    or ``0`` for an empty input. Records with any other status still count
    toward ``total``.
    """
    statuses = [status_value(r.status) for r in records]
    total = len(statuses)
    present = statuses.count(AttendanceStatus.PRESENT.value)
    absent = statuses.count(AttendanceStatus.ABSENT.value)
    late = statuses.count(AttendanceStatus.LATE.value)

    rate = format_rate((present + late) / total * 100) if total else 0

    return AttendanceStats(
        total=total,
        present=present,
        absent=absent,
        late=late,
        attendance_rate=rate,
    )
