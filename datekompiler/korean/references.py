"""
Date references: the rules the parser stacks up and folds over a base date.

Both kinds implement ``apply(base) -> datetime``, in the manner of an
executable temporal expression evaluated against an anchor.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta

from ..units import (
    DateUnit,
    add_duration,
    set_unit,
    start_of_iso_week,
    start_of_month,
    subtract_duration,
    truncate,
)
from ..utils import TRACE

logger = logging.getLogger(__name__)


class DateReference(ABC):
    """Base class for the references kept on the parser stack."""
    value: int
    unit: DateUnit

    @abstractmethod
    def apply(self, base: datetime) -> datetime:
        """Return ``base`` transformed by this reference."""


@dataclass(frozen=True)
class AbsoluteDateReference(DateReference):
    """
    Overwrite one calendar field of the base date.

    Examples:
        AbsoluteDateReference(3, DateUnit.DAY)       # the 3rd of the base month
        AbsoluteDateReference(1, DateUnit.WEEKDAY)   # the coming Monday
        AbsoluteDateReference(2, DateUnit.WEEK)      # 2nd week of the base month
    """
    value: int
    unit: DateUnit

    def apply(self, base: datetime) -> datetime:
        if self.unit is DateUnit.WEEKDAY:
            applied = start_of_iso_week(base) + timedelta(days=self.value - 1)
            if applied < base:
                # "월요일" said on a Thursday means next week's Monday
                applied += timedelta(weeks=1)
        elif self.unit is DateUnit.WEEK:
            applied = start_of_iso_week(start_of_month(base) + relativedelta(weeks=self.value - 1))
        else:
            applied = set_unit(base, self.unit, self.value)
        logger.log(TRACE, "apply %r to %s -> %s", self, base, applied)
        return applied

    def __repr__(self) -> str:
        return "Absolute(%dth %s)" % (self.value, self.unit.value)


@dataclass(frozen=True)
class RelativeDateReference(DateReference):
    """Add or subtract ``value`` units, then truncate to ``unit``."""
    mode: str
    value: int
    unit: DateUnit

    def apply(self, base: datetime) -> datetime:
        if self.mode == 'subtract':
            moved = subtract_duration(base, self.value, self.unit)
        else:
            moved = add_duration(base, self.value, self.unit)
        applied = truncate(moved, self.unit)
        logger.log(TRACE, "apply %r to %s -> %s", self, base, applied)
        return applied

    def __repr__(self) -> str:
        return "Relative(%s %d %ss)" % (self.mode, self.value, self.unit.normalize().value)
