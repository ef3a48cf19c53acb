"""Investments and commitments tracked alongside the budget cycle."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional, Tuple

from .ledger import ZERO, parse_amount

logger = logging.getLogger(__name__)

INVESTMENT = 'investment'
COMMITMENT = 'commitment'
ITEM_KINDS = {INVESTMENT, COMMITMENT}


@dataclass(frozen=True)
class RecurringItem:
    id: str
    kind: str
    name: str
    amount: Decimal
    is_recurring: bool = False
    is_done: bool = False
    value_percent: Optional[Decimal] = None


Items = Tuple[RecurringItem, ...]


def add_item(
    items: Iterable[RecurringItem],
    kind: str,
    name: str,
    amount: Any,
    value_percent: Any = None,
    is_recurring: bool = False,
    item_id: Optional[str] = None,
) -> Items:
    """Append a new investment or commitment.

    Returns the items unchanged when the kind is unknown, the name is
    blank, the amount is invalid, ``value_percent`` falls outside 0-100, or
    ``item_id`` already belongs to another item.
    Investments are never recurring.
    """
    current = tuple(items)
    if item_id is not None and any(item.id == item_id for item in current):
        logger.warning("Item not added: id %s is already in use", item_id)
        return current
    if kind not in ITEM_KINDS:
        logger.warning("Item not added: unknown kind %r", kind)
        return current
    name = (name or '').strip()
    if not name:
        logger.info("Item not added: blank name")
        return current
    parsed = parse_amount(amount)
    if parsed is None:
        logger.warning("Item not added: invalid amount %r for %s", amount, name)
        return current
    percent = None
    if value_percent is not None and not (isinstance(value_percent, str) and not value_percent.strip()):
        percent = parse_amount(value_percent)
        if percent is None or percent > 100:
            logger.warning("Item not added: invalid value %% %r for %s", value_percent, name)
            return current
    item = RecurringItem(
        id=item_id or uuid.uuid4().hex,
        kind=kind,
        name=name,
        amount=parsed,
        is_recurring=bool(is_recurring) and kind == COMMITMENT,
        value_percent=percent,
    )
    return current + (item,)


def toggle_done(items: Iterable[RecurringItem], item_id: str) -> Items:
    current = tuple(items)
    if not any(item.id == item_id for item in current):
        logger.info("Toggle ignored: no item with id %s", item_id)
        return current
    return tuple(
        replace(item, is_done=not item.is_done) if item.id == item_id else item
        for item in current
    )


def total_amount(items: Iterable[RecurringItem], kind: Optional[str] = None) -> Decimal:
    return sum((item.amount for item in items if kind is None or item.kind == kind), ZERO)


def allocation_shares(items: Iterable[RecurringItem], kind: str) -> Dict[str, float]:
    """Percentage of the kind's total held by each item name.

    Items sharing a name are combined. Returns an empty mapping when the
    total is zero.
    """
    totals: Dict[str, Decimal] = {}
    for item in items:
        if item.kind == kind:
            totals[item.name] = totals.get(item.name, ZERO) + item.amount
    grand_total = sum(totals.values(), ZERO)
    if not grand_total:
        return {}
    return {name: float(amount / grand_total * 100) for name, amount in totals.items()}
