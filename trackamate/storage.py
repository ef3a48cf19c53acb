"""Persistence for expense entries and recurring items.

Expense stores only need ``load()`` and ``append(entry)``; the engine never
cares where entries live. Recurring items are kept in a small JSON file.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterator, List, Optional, Protocol, Tuple

from .config import DB_PATH, ITEMS_PATH
from .ledger import ExpenseEntry, Ledger
from .recurring_items import ITEM_KINDS, Items, RecurringItem

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;

CREATE TABLE IF NOT EXISTS expenses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    entry_date TEXT NOT NULL,
    amount TEXT NOT NULL,
    description TEXT,
    created_at TEXT
);

CREATE INDEX IF NOT EXISTS ix_expenses_date ON expenses (entry_date);
"""


class ExpenseStore(Protocol):
    def load(self) -> Ledger: ...

    def append(self, entry: ExpenseEntry) -> None: ...


class InMemoryExpenseStore:
    """Expense store that lives for the lifetime of the object."""

    def __init__(self, entries: Optional[List[ExpenseEntry]] = None):
        self._entries: List[ExpenseEntry] = list(entries or [])

    def load(self) -> Ledger:
        return tuple(self._entries)

    def append(self, entry: ExpenseEntry) -> None:
        self._entries.append(entry)


class SqliteExpenseStore:
    """Expense store backed by a SQLite file.

    Amounts are stored as text so ``Decimal`` values round-trip exactly.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or DB_PATH)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.connect() as conn:
            conn.executescript(SCHEMA_SQL)
            conn.commit()

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(str(self.path))
        try:
            yield conn
        finally:
            conn.close()

    def load(self) -> Ledger:
        with self.connect() as conn:
            rows = conn.execute(
                "SELECT entry_date, amount, description FROM expenses ORDER BY id"
            ).fetchall()
        return tuple(
            ExpenseEntry(
                date=date.fromisoformat(entry_date),
                amount=Decimal(amount),
                description=description or '',
            )
            for entry_date, amount, description in rows
        )

    def append(self, entry: ExpenseEntry) -> None:
        with self.connect() as conn:
            conn.execute(
                "INSERT INTO expenses (entry_date, amount, description, created_at) VALUES (?, ?, ?, ?)",
                (entry.date.isoformat(), str(entry.amount), entry.description, datetime.utcnow().isoformat()),
            )
            conn.commit()
        logger.debug("Stored expense %s %s in %s", entry.date.isoformat(), entry.amount, self.path)


def _item_to_json(item: RecurringItem) -> dict:
    return {
        'id': item.id,
        'kind': item.kind,
        'name': item.name,
        'amount': str(item.amount),
        'is_recurring': item.is_recurring,
        'is_done': item.is_done,
        'value_percent': None if item.value_percent is None else str(item.value_percent),
    }


def _item_from_json(data: dict) -> Optional[RecurringItem]:
    try:
        kind = data['kind']
        if kind not in ITEM_KINDS:
            return None
        percent = data.get('value_percent')
        return RecurringItem(
            id=str(data['id']),
            kind=kind,
            name=str(data['name']),
            amount=Decimal(str(data['amount'])),
            is_recurring=bool(data.get('is_recurring', False)),
            is_done=bool(data.get('is_done', False)),
            value_percent=None if percent is None else Decimal(str(percent)),
        )
    except (KeyError, TypeError, InvalidOperation):
        return None


def load_items(path: Path | None = None) -> Items:
    target = path or ITEMS_PATH
    if not target.exists():
        return ()
    try:
        with target.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Could not read recurring items from %s: %s", target, exc)
        return ()
    if not isinstance(data, dict) or not isinstance(data.get('items'), list):
        return ()
    items: List[RecurringItem] = []
    for raw in data['items']:
        item = _item_from_json(raw) if isinstance(raw, dict) else None
        if item is None:
            logger.warning("Skipping malformed recurring item in %s: %r", target, raw)
            continue
        items.append(item)
    return tuple(items)


def save_items(items: Tuple[RecurringItem, ...], path: Path | None = None) -> None:
    target = path or ITEMS_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = {'items': [_item_to_json(item) for item in items]}
    with target.open('w', encoding='utf-8') as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)
