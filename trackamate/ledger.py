"""Expense ledger values and the operations that derive views from them.

The ledger is an immutable tuple of :class:`ExpenseEntry` owned by the
caller. Every mutation returns a new tuple; invalid input returns the
ledger unchanged. Per-day totals are always recomputed from the entries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Optional, Tuple

import pandas as pd

from .cycle import Cycle

logger = logging.getLogger(__name__)

Ledger = Tuple['ExpenseEntry', ...]

ZERO = Decimal('0')

SPEND_NONE = 'none'
SPEND_UNDER = 'under'
SPEND_OVER = 'over'


@dataclass(frozen=True)
class ExpenseEntry:
    date: date
    amount: Decimal
    description: str = ''

    def __post_init__(self):
        amount = parse_amount(self.amount)
        if amount is None:
            raise ValueError(f"expense amount must be a non-negative number, got {self.amount!r}")
        object.__setattr__(self, 'amount', amount)


def parse_amount(value: Any) -> Optional[Decimal]:
    """Convert a typed amount into a non-negative ``Decimal``.

    Args:
        value: Decimal, int, float, or text such as ``"12.50"`` or ``"RM 1,200"``

    Returns:
        The amount, or ``None`` when it is blank, non-numeric, non-finite
        or negative

    Example:
        >>> parse_amount(" RM 1,250.00 ")
        Decimal('1250.00')
        >>> parse_amount("-3") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = value.strip()
        if cleaned.upper().startswith('RM'):
            cleaned = cleaned[2:]
        cleaned = cleaned.replace(',', '').strip()
        if not cleaned:
            return None
        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            return None
    else:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    # drop the sign of negative zero
    return abs(amount) if amount == 0 else amount


def parse_day(value: Any) -> Optional[date]:
    """Accept a date, datetime or ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def add_entry(ledger: Iterable[ExpenseEntry], entry_date: Any, amount: Any, description: str = '') -> Ledger:
    """Append an expense to the ledger.

    Args:
        ledger: Current ledger snapshot
        entry_date: Selected day; ``None`` means nothing was selected
        amount: Raw amount as typed by the user
        description: Free text, stripped

    Returns:
        A new ledger with the entry appended, or the same entries when the
        date is missing or the amount is invalid
    """
    current = tuple(ledger)
    day = parse_day(entry_date)
    if day is None:
        logger.info("Expense not added: no date selected (%r)", entry_date)
        return current
    parsed = parse_amount(amount)
    if parsed is None:
        logger.warning("Expense not added: invalid amount %r for %s", amount, day.isoformat())
        return current
    entry = ExpenseEntry(date=day, amount=parsed, description=(description or '').strip())
    logger.debug("Expense added: %s %s", day.isoformat(), parsed)
    return current + (entry,)


def derive_spending_by_day(ledger: Iterable[ExpenseEntry]) -> Dict[date, Decimal]:
    """Sum entry amounts per date."""
    totals: Dict[date, Decimal] = {}
    for entry in ledger:
        totals[entry.date] = totals.get(entry.date, ZERO) + entry.amount
    return totals


def entries_in_cycle(ledger: Iterable[ExpenseEntry], cycle: Cycle) -> Ledger:
    return tuple(entry for entry in ledger if cycle.contains(entry.date))


def classify_spend(amount: Optional[Decimal], threshold: Decimal) -> str:
    """Label a day's spend relative to the threshold.

    Days with no recorded spend are ``"none"``; a spend strictly above the
    threshold is ``"over"``, anything else ``"under"``.
    """
    if amount is None:
        return SPEND_NONE
    return SPEND_OVER if amount > threshold else SPEND_UNDER


def ledger_frame(ledger: Iterable[ExpenseEntry]) -> pd.DataFrame:
    """Tabular view of the ledger in entry order."""
    rows = [
        {'date': entry.date, 'amount': float(entry.amount), 'description': entry.description}
        for entry in ledger
    ]
    return pd.DataFrame(rows, columns=['date', 'amount', 'description'])
