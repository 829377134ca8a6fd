"""
Human readable rendering of parsed dates.

Every helper accepts naive wall-clock datetimes or aware instants. Aware
values are first moved to ``timezone`` (the machine's zone by default).
"""

from .timezone import get_timezone, to_wall_clock
from .units import DateUnit
from .utils import contains_korean

_MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _wall(date, timezone):
    return to_wall_clock(date, get_timezone(timezone))


def _hour12(date):
    return date.hour % 12 or 12


def _meridiem(date):
    return "AM" if date.hour < 12 else "PM"


def _month_day(date):
    return "%s %d" % (_MONTH_NAMES[date.month - 1], date.day)


def _clock(date):
    return "%d:%02d %s" % (_hour12(date), date.minute, _meridiem(date))


def _short_time(date):
    if date.minute == 0:
        return "%d%s" % (_hour12(date), _meridiem(date))
    return _clock(date)


def get_unit_of_date(date):
    """
    Guess how precise ``date`` is from its fields.

    Midnight reads as a whole day, a round hour as an hour, anything else as
    a minute.
    """
    if date.hour == 0 and date.minute == 0:
        return DateUnit.DAY
    if date.minute == 0:
        return DateUnit.HOUR
    return DateUnit.MINUTE


def format_date(date, timezone=None):
    """Render ``date`` as ``"Jan 2"``, ``"Jan 2 3PM"`` or ``"Jan 2 3:30 PM"``."""
    date = _wall(date, timezone)
    unit = get_unit_of_date(date)
    if unit is DateUnit.DAY:
        return _month_day(date)
    if unit is DateUnit.HOUR:
        return "%s %d%s" % (_month_day(date), _hour12(date), _meridiem(date))
    return "%s %s" % (_month_day(date), _clock(date))


def format_time(date, timezone=None):
    date = _wall(date, timezone)
    return _short_time(date)


def format_time_with_title(title, date, timezone=None):
    """
    Render an event line.

    Examples:
        format_time_with_title("회의", datetime(2024, 1, 2, 15, 30))   # '3시 반에 회의'
        format_time_with_title("Lunch", datetime(2024, 1, 2, 12))      # 'Lunch at 12PM'
    """
    date = _wall(date, timezone)
    if contains_korean(title):
        date_text = "%d시 %02d분" % (_hour12(date), date.minute)
        return "%s에 %s" % (date_text.replace("30분", "반"), title)
    return "%s at %s" % (title, _short_time(date))


def format_date_interval(start_date, end_date, timezone=None):
    """
    Render a date range, leaving out the parts both ends share.

    Examples:
        # Jan 2 - 5
        # Jan 2, 2024 3PM - 4PM
        # Jan 2, 3:00 PM - Jan 5, 4:00 PM
        # Dec 31, 2023 9:00 PM - Jan 1, 2024 1:00 AM
    """
    start, end = _wall(start_date, timezone), _wall(end_date, timezone)
    if start.year != end.year:
        return "%s, %d %s - %s, %d %s" % (
            _month_day(start), start.year, _clock(start),
            _month_day(end), end.year, _clock(end),
        )
    if start.month == end.month and get_unit_of_date(start) is DateUnit.DAY:
        return "%s - %d" % (_month_day(start), end.day)
    if start.date() == end.date():
        return "%s, %d %s - %s" % (_month_day(start), start.year, _short_time(start), _short_time(end))
    return "%s, %s - %s, %s" % (_month_day(start), _clock(start), _month_day(end), _clock(end))
