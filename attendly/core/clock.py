"""
Time source for everything that needs "now" or "today".

Instants are always timezone-aware UTC; calendar days are taken in the
server's local time zone.
"""

from datetime import date, datetime, timezone


class Clock:
    def now(self) -> datetime:
        raise NotImplementedError

    def today(self) -> date:
        return self.now().astimezone().date()


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Always returns the same instant. Naive datetimes are taken as local time."""

    def __init__(self, instant: datetime) -> None:
        self.set(instant)

    def set(self, instant: datetime) -> None:
        self.instant = instant.astimezone(timezone.utc)

    def now(self) -> datetime:
        return self.instant


_system_clock = SystemClock()


def get_clock() -> Clock:
    """FastAPI dependency; overridden in tests with a FixedClock."""
    return _system_clock


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive values read back from backends that drop the offset."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
