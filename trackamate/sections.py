"""Plain-data view models for the manage-section screens.

The presentation layer asks for a section by slug and renders whatever
comes back; nothing here formats money or picks colours.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from .allowance import (
    AllowanceState,
    CarryOverDaily,
    FixedPool,
    compute_allowance,
    cycle_progress,
    pool_progress,
)
from .calendar_grid import CalendarGrid, build_calendar, week_header
from .cycle import Cycle, as_date, resolve_cycle
from .ledger import ExpenseEntry, Ledger, derive_spending_by_day, entries_in_cycle
from .settings import SectionSettings, load_budget_settings

FOOD_SPENDING = 'food-spending'
BURN_MONEY = 'burn-money'

SECTION_TITLES = {
    FOOD_SPENDING: 'Food Spending',
    BURN_MONEY: 'Burn Money',
    'investments': 'Investments',
    'commitments': 'Commitments',
}
CALENDAR_SECTIONS = (FOOD_SPENDING, BURN_MONEY)


@dataclass(frozen=True)
class SectionView:
    section: str
    title: str
    cycle: Cycle
    grid: CalendarGrid
    header: List[str]
    spending_by_day: Dict[date, Decimal]
    allowance: AllowanceState
    cycle_progress: float
    pool_progress: float
    entries: Ledger


def section_title(section: str) -> str:
    return SECTION_TITLES.get(section, section)


def _policy_for(section: str, settings: SectionSettings):
    if section == BURN_MONEY:
        return FixedPool(cap=settings.pool or Decimal('0'), day_filter=settings.day_filter)
    return CarryOverDaily(day_filter=settings.day_filter)


def build_section_view(
    section: str,
    today: Optional[date],
    ledger: Iterable[ExpenseEntry],
    settings: Optional[Dict[str, SectionSettings]] = None,
) -> SectionView:
    """Assemble everything a calendar section screen displays.

    Args:
        section: ``"food-spending"`` or ``"burn-money"``
        today: Reference day, defaults to ``date.today()``
        ledger: The section's expense entries
        settings: Per-section settings, defaults to ``load_budget_settings()``

    Returns:
        SectionView for the current cycle

    Raises:
        KeyError: If the section has no calendar view
    """
    if section not in CALENDAR_SECTIONS:
        raise KeyError(f"section '{section}' has no calendar view")
    settings = settings or load_budget_settings()
    section_settings = settings[section]

    today = as_date(today or date.today())
    cycle = resolve_cycle(today)
    entries = entries_in_cycle(ledger, cycle)
    allowance = compute_allowance(
        cycle,
        today,
        section_settings.daily_release,
        _policy_for(section, section_settings),
        entries,
    )
    return SectionView(
        section=section,
        title=section_title(section),
        cycle=cycle,
        grid=build_calendar(cycle, section_settings.day_filter, section_settings.week_length),
        header=week_header(section_settings.week_length),
        spending_by_day=derive_spending_by_day(entries),
        allowance=allowance,
        cycle_progress=cycle_progress(allowance),
        pool_progress=pool_progress(allowance),
        entries=entries,
    )
