"""
Attendance status classification.

A record is `present` or `late` from the moment of check-in; check-out can
demote a short day to `half-day`, except that a late arrival stays `late`.
"""

from datetime import datetime, time

from attendly.core.config import settings
from attendly.core.errors import InvalidStateError

PRESENT = "present"
LATE = "late"
HALF_DAY = "half-day"


def _local_time_of_day(timestamp: datetime) -> time:
    # Naive values are already server-local wall-clock time
    if timestamp.tzinfo is None:
        return timestamp.time()
    return timestamp.astimezone().time()


def classify_check_in(timestamp: datetime, cutoff: time | None = None) -> str:
    cutoff = cutoff or settings.late_threshold
    if _local_time_of_day(timestamp) > cutoff:
        return LATE
    return PRESENT


def worked_hours(check_in: datetime, check_out: datetime) -> float:
    return round((check_out - check_in).total_seconds() / 3600, 2)


def apply_half_day_rule(
    total_hours: float, current_status: str, threshold: float | None = None
) -> str:
    """Late takes precedence over half-day."""
    threshold = settings.HALF_DAY_HOURS if threshold is None else threshold
    if total_hours < threshold and current_status != LATE:
        return HALF_DAY
    return current_status


def classify_check_out(
    check_in: datetime | None,
    check_out: datetime,
    current_status: str,
) -> tuple[str, float]:
    if check_in is None:
        raise InvalidStateError("Cannot check out without a check-in")
    total_hours = worked_hours(check_in, check_out)
    return apply_half_day_rule(total_hours, current_status), total_hours
