"""
Calendar units and the arithmetic the Korean compiler builds on.

Every date the compiler touches is a naive wall-clock ``datetime``; the
timezone boundary lives in :mod:`datekompiler.timezone`. Functions here only
add, subtract and truncate.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum

from dateutil.relativedelta import relativedelta


class DateUnit(Enum):
    """Calendar granularity, ordered from the coarsest to the finest."""
    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    WEEKDAY = "weekday"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"

    @property
    def ordinal(self) -> int:
        return _UNIT_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, DateUnit):
            return NotImplemented
        return self.ordinal < other.ordinal

    def __le__(self, other):
        if not isinstance(other, DateUnit):
            return NotImplemented
        return self.ordinal <= other.ordinal

    def __gt__(self, other):
        if not isinstance(other, DateUnit):
            return NotImplemented
        return self.ordinal > other.ordinal

    def __ge__(self, other):
        if not isinstance(other, DateUnit):
            return NotImplemented
        return self.ordinal >= other.ordinal

    def normalize(self) -> "DateUnit":
        """WEEKDAY has DAY granularity everywhere except reference resolution."""
        return DateUnit.DAY if self is DateUnit.WEEKDAY else self


_UNIT_ORDER = list(DateUnit)


def min_unit(a: DateUnit, b: DateUnit) -> DateUnit:
    """Return the coarser of two units."""
    return a if a < b else b


def duration_of(value: int, unit: DateUnit) -> relativedelta:
    """Build a ``relativedelta`` of ``value`` units (weekdays count as days)."""
    return relativedelta(**{unit.normalize().value + "s": value})


def add_duration(date: datetime, value: int, unit: DateUnit) -> datetime:
    return date + duration_of(value, unit)


def subtract_duration(date: datetime, value: int, unit: DateUnit) -> datetime:
    return date - duration_of(value, unit)


def start_of_day(date: datetime) -> datetime:
    return date.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_month(date: datetime) -> datetime:
    return start_of_day(date).replace(day=1)


def start_of_year(date: datetime) -> datetime:
    return start_of_month(date).replace(month=1)


def start_of_week(date: datetime) -> datetime:
    """Start of the week containing ``date``, weeks starting on Sunday."""
    days_since_sunday = (date.weekday() + 1) % 7
    return start_of_day(date) - timedelta(days=days_since_sunday)


def start_of_iso_week(date: datetime) -> datetime:
    """Start of the ISO week (Monday) containing ``date``."""
    return start_of_day(date) - timedelta(days=date.weekday())


def truncate(date: datetime, unit: DateUnit) -> datetime:
    """Drop every field of ``date`` finer than ``unit``."""
    if unit is DateUnit.YEAR:
        return start_of_year(date)
    if unit is DateUnit.MONTH:
        return start_of_month(date)
    if unit is DateUnit.WEEK:
        return start_of_week(date)
    if unit in (DateUnit.DAY, DateUnit.WEEKDAY):
        return start_of_day(date)
    if unit is DateUnit.HOUR:
        return date.replace(minute=0, second=0, microsecond=0)
    if unit is DateUnit.MINUTE:
        return date.replace(second=0, microsecond=0)
    return date.replace(microsecond=0)


def set_unit(date: datetime, unit: DateUnit, value: int) -> datetime:
    """
    Truncate ``date`` to ``unit`` and overwrite that unit's field with ``value``.

    Out-of-range values roll over into the next larger unit instead of
    raising, e.g. day 31 of April is May 1st and hour 25 is 1 AM the next day.
    Months are 1-based.

    Examples:
        set_unit(datetime(2024, 1, 10, 9), DateUnit.DAY, 3)   # 2024-01-03 00:00
        set_unit(datetime(2024, 1, 10, 9), DateUnit.HOUR, 15) # 2024-01-10 15:00
    """
    unit = unit.normalize()
    if unit is DateUnit.YEAR:
        return start_of_year(date).replace(year=value)
    if unit is DateUnit.MONTH:
        return start_of_year(date) + relativedelta(months=value - 1)
    if unit is DateUnit.DAY:
        return start_of_month(date) + timedelta(days=value - 1)
    if unit is DateUnit.HOUR:
        return start_of_day(date) + timedelta(hours=value)
    if unit is DateUnit.MINUTE:
        return truncate(date, DateUnit.HOUR) + timedelta(minutes=value)
    if unit is DateUnit.SECOND:
        return truncate(date, DateUnit.MINUTE) + timedelta(seconds=value)
    raise ValueError("Cannot set a %s field" % unit.value)
