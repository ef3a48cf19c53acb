"""Allowance calculation for a budget cycle.

Two pool policies are supported and selected explicitly:

* :class:`FixedPool` - the "burn money" model. A fixed cap of which one
  daily release per cycle day is held back and released day by day.
* :class:`CarryOverDaily` - the "food spending" model. The pool is the
  daily release times the number of eligible days; unspent allowance
  carries forward and overspend is deducted from later days.

All functions are pure: the state is derived fresh from the cycle, the
reference day, the release amount, the policy and the ledger.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Union

import pandas as pd

from .cycle import Cycle, DayFilter, as_date
from .ledger import ZERO, ExpenseEntry, derive_spending_by_day, parse_amount


@dataclass(frozen=True)
class FixedPool:
    cap: Decimal
    day_filter: DayFilter = DayFilter.ALL_DAYS
    name = 'fixed_pool'

    def __post_init__(self):
        object.__setattr__(self, 'cap', _non_negative(self.cap, 'pool cap'))


@dataclass(frozen=True)
class CarryOverDaily:
    """Pool capped by the number of eligible days in the cycle."""

    day_filter: DayFilter = DayFilter.WEEKDAYS
    name = 'carry_over_daily'


PoolPolicy = Union[FixedPool, CarryOverDaily]


def _non_negative(value, label: str) -> Decimal:
    amount = parse_amount(value)
    if amount is None:
        raise ValueError(f"{label} must be a non-negative number, got {value!r}")
    return amount


@dataclass(frozen=True)
class AllowanceState:
    policy: str
    pool: Decimal
    daily_release: Decimal
    available_today: Decimal
    days_in_cycle: int
    days_elapsed: int
    reserved: Decimal = ZERO
    spent_to_date: Decimal = ZERO


def _eligible_days_through(cycle: Cycle, today: date, day_filter: DayFilter):
    return [day for day in cycle.days(day_filter) if day <= today]


def _spent_on(days, spending):
    return sum((spending.get(day, ZERO) for day in days), ZERO)


def carry_over_by_day(
    cycle: Cycle,
    today: date,
    daily_release: Decimal,
    ledger: Iterable[ExpenseEntry],
    day_filter: DayFilter = DayFilter.WEEKDAYS,
) -> pd.Series:
    """Running carry-over for each eligible day up to ``min(today, cycle.end)``.

    Each day adds ``daily_release`` and subtracts what was spent that day.
    Values are ``Decimal`` and may go negative after overspending.

    Example:
        >>> cycle = Cycle(date(2025, 7, 25), date(2025, 8, 24))
        >>> ledger = [ExpenseEntry(date(2025, 8, 1), Decimal('12'))]
        >>> carry_over_by_day(cycle, date(2025, 8, 4), Decimal('10'), ledger).iloc[-1]
        Decimal('58')
    """
    daily_release = _non_negative(daily_release, 'daily_release')
    spending = derive_spending_by_day(ledger)
    running = ZERO
    values = {}
    for day in _eligible_days_through(cycle, as_date(today), day_filter):
        running += daily_release - spending.get(day, ZERO)
        values[day] = running
    return pd.Series(values, dtype=object, name='carry_over')


def compute_allowance(
    cycle: Cycle,
    today: date,
    daily_release: Decimal,
    policy: PoolPolicy,
    ledger: Iterable[ExpenseEntry] = (),
) -> AllowanceState:
    """Derive the allowance state for ``today``.

    Args:
        cycle: Current budget cycle
        today: Reference day; days outside the cycle are clamped
        daily_release: Amount released per eligible day
        policy: ``FixedPool(cap)`` or ``CarryOverDaily()``
        ledger: Recorded expenses

    Returns:
        AllowanceState for the chosen policy

    Raises:
        ValueError: If ``daily_release`` is negative or not a number
    """
    daily_release = _non_negative(daily_release, 'daily_release')
    today = as_date(today)
    ledger = tuple(ledger)
    spending = derive_spending_by_day(ledger)
    elapsed_days = _eligible_days_through(cycle, today, policy.day_filter)
    days_in_cycle = cycle.length(policy.day_filter)
    spent = _spent_on(elapsed_days, spending)

    if isinstance(policy, FixedPool):
        cap = policy.cap
        reserved = days_in_cycle * daily_release
        instant_pool = cap - reserved
        days_elapsed = min(max(len(elapsed_days), 1), days_in_cycle)
        available = max(ZERO, instant_pool + days_elapsed * daily_release)
        return AllowanceState(
            policy=policy.name,
            pool=cap,
            daily_release=daily_release,
            available_today=available,
            days_in_cycle=days_in_cycle,
            days_elapsed=days_elapsed,
            reserved=reserved,
            spent_to_date=spent,
        )

    if isinstance(policy, CarryOverDaily):
        carry = carry_over_by_day(cycle, today, daily_release, ledger, policy.day_filter)
        available = carry.iloc[-1] if not carry.empty else ZERO
        return AllowanceState(
            policy=policy.name,
            pool=days_in_cycle * daily_release,
            daily_release=daily_release,
            available_today=available,
            days_in_cycle=days_in_cycle,
            days_elapsed=len(elapsed_days),
            spent_to_date=spent,
        )

    raise TypeError(f"unsupported pool policy: {policy!r}")


def _percent(part, whole) -> float:
    if not whole:
        return 0.0
    return float(min(max(Decimal(part) / Decimal(whole) * 100, ZERO), Decimal(100)))


def cycle_progress(state: AllowanceState) -> float:
    """Share of the cycle's eligible days already elapsed, 0-100."""
    return _percent(state.days_elapsed, state.days_in_cycle)


def pool_progress(state: AllowanceState) -> float:
    """Available amount as a share of the pool, 0-100."""
    return _percent(state.available_today, state.pool)
