"""Budget cycle resolution and day enumeration.

A budget cycle runs from the 25th of one month to the 24th of the next.
The cycle that is current on a given day is recomputed on every call and
never stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

import numpy as np
import pandas as pd
from dateutil.relativedelta import relativedelta

CYCLE_START_DAY = 25
CYCLE_END_DAY = 24


class DayFilter(str, Enum):
    """Which days of a cycle count as eligible."""

    WEEKDAYS = 'weekdays'
    ALL_DAYS = 'all_days'


@dataclass(frozen=True)
class Cycle:
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= as_date(day) <= self.end

    def days(self, day_filter: DayFilter = DayFilter.ALL_DAYS) -> List[date]:
        """Return the eligible days of the cycle in ascending order."""
        days = pd.date_range(self.start, self.end, freq='D')
        if DayFilter(day_filter) is DayFilter.WEEKDAYS:
            days = days[np.is_busday(days.values.astype('datetime64[D]'))]
        return [ts.date() for ts in days]

    def length(self, day_filter: DayFilter = DayFilter.ALL_DAYS) -> int:
        return len(self.days(day_filter))


def as_date(value: date) -> date:
    """Drop the time component of a ``datetime``; pass dates through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def resolve_cycle(today: Optional[date] = None) -> Cycle:
    """Return the 25th-to-24th cycle that ``today`` falls in.

    Args:
        today: Reference day, defaults to ``date.today()``

    Returns:
        Cycle whose start is a 25th and whose end is the 24th of the
        following month

    Example:
        >>> resolve_cycle(date(2025, 8, 20))
        Cycle(start=datetime.date(2025, 7, 25), end=datetime.date(2025, 8, 24))
        >>> resolve_cycle(date(2025, 12, 25))
        Cycle(start=datetime.date(2025, 12, 25), end=datetime.date(2026, 1, 24))
    """
    today = as_date(today or date.today())
    anchor = today.replace(day=CYCLE_START_DAY)
    start = anchor - relativedelta(months=1) if today < anchor else anchor
    # every month has a 25th, so shifting by a month never clamps
    end = (start + relativedelta(months=1)).replace(day=CYCLE_END_DAY)
    return Cycle(start=start, end=end)
