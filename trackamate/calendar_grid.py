"""Week-chunked calendar grids for a budget cycle.

A grid is a list of weeks, each a list of ``date`` or ``None`` (blank) of
fixed length. Weeks start on Monday; blanks only pad the front of the
first week and the back of the last one.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

import pandas as pd

from .cycle import Cycle, DayFilter
from .ledger import classify_spend

Week = List[Optional[date]]
CalendarGrid = List[Week]

WEEK_LENGTHS = (5, 7)
HEADERS = {
    5: ['M', 'T', 'W', 'T', 'F'],
    7: ['M', 'T', 'W', 'T', 'F', 'S', 'S'],
}


def default_week_length(day_filter: DayFilter) -> int:
    return 5 if DayFilter(day_filter) is DayFilter.WEEKDAYS else 7


def week_header(week_length: int) -> List[str]:
    """Column labels for a grid of the given width."""
    return list(HEADERS[week_length])


def build_calendar(
    cycle: Cycle,
    day_filter: DayFilter = DayFilter.WEEKDAYS,
    week_length: Optional[int] = None,
) -> CalendarGrid:
    """Lay the cycle's eligible days out into Monday-first weeks.

    Args:
        cycle: The budget cycle to lay out
        day_filter: Which days are shown
        week_length: Cells per row (5 or 7); defaults to 5 for weekdays and
            7 for every day

    Returns:
        List of rows. Non-blank cells, read in order, reproduce
        ``cycle.days(day_filter)`` exactly.

    Raises:
        ValueError: If ``week_length`` is not 5 or 7, or is 5 while weekend
            days are shown
    """
    day_filter = DayFilter(day_filter)
    if week_length is None:
        week_length = default_week_length(day_filter)
    if week_length not in WEEK_LENGTHS:
        raise ValueError(f"week_length must be one of {WEEK_LENGTHS}, got {week_length!r}")
    if day_filter is DayFilter.ALL_DAYS and week_length < 7:
        raise ValueError("a grid showing every day needs a week_length of 7")

    days = cycle.days(day_filter)
    if not days:
        return []

    # date.weekday() is already Monday=0
    week: Week = [None] * days[0].weekday()
    weeks: CalendarGrid = []
    for day in days:
        week.append(day)
        if len(week) == week_length:
            weeks.append(week)
            week = []

    if week:
        week.extend([None] * (week_length - len(week)))
        weeks.append(week)
    return weeks


def flatten_grid(grid: CalendarGrid) -> List[date]:
    return [cell for week in grid for cell in week if cell is not None]


def calendar_frame(
    grid: CalendarGrid,
    spending_by_day: Optional[Dict[date, Decimal]] = None,
    threshold: Decimal = Decimal('10'),
) -> pd.DataFrame:
    """One row per grid cell with the day's spend and its status.

    Blank cells keep their position with ``date`` and ``spent`` set to
    ``None`` and status ``"none"``.
    """
    spending_by_day = spending_by_day or {}
    rows = []
    for week_no, week in enumerate(grid):
        for slot, cell in enumerate(week):
            spent = spending_by_day.get(cell) if cell is not None else None
            rows.append({
                'week': week_no,
                'slot': slot,
                'date': cell,
                'spent': float(spent) if spent is not None else None,
                'status': classify_spend(spent, threshold),
            })
    return pd.DataFrame(rows, columns=['week', 'slot', 'date', 'spent', 'status'])
