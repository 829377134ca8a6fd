"""
Timezone boundary.

The Korean compiler computes in naive wall-clock time. Callers hand in
instants; these helpers convert an instant to the wall clock of a zone and
back again.
"""

from datetime import datetime, tzinfo

from dateutil import tz
from tzlocal import get_localzone

from .conf import SettingValidationError


def get_timezone(name=None) -> tzinfo:
    """
    Resolve a zone name such as ``"Asia/Seoul"`` or ``"UTC"``.

    ``None`` and ``"local"`` resolve to the machine's zone.

    Raises:
        SettingValidationError: if the name is unknown.
    """
    if name is None or name.lower() == "local":
        return get_localzone()
    zone = tz.gettz(name)
    if zone is None:
        raise SettingValidationError('"{}" is not a valid timezone'.format(name))
    return zone


def to_wall_clock(instant: datetime, zone: tzinfo) -> datetime:
    """Return the naive wall-clock reading of ``instant`` in ``zone``.

    Naive values are taken to already be wall-clock time in ``zone``.
    """
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(zone).replace(tzinfo=None)


def from_wall_clock(wall: datetime, zone: tzinfo) -> datetime:
    """Attach ``zone`` to a naive wall-clock value.

    Wall-clock times skipped by a DST gap are moved forward past the gap.
    """
    return tz.resolve_imaginary(wall.replace(tzinfo=zone))
