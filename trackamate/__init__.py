"""Top‑level package for Trackamate's budget cycle engine.

The primary modules are:

* ``cycle`` – the 25th-to-24th budget cycle and its days
* ``calendar_grid`` – Monday-first week grids for a cycle
* ``allowance`` – fixed-pool and carry-over allowance calculations
* ``ledger`` – the append-only expense ledger and its derived views
* ``sections`` – view models for the manage-section screens

Collaborators such as the session store, the account API client and the
expense stores live in ``session``, ``api`` and ``storage``.
"""

from .allowance import AllowanceState, CarryOverDaily, FixedPool, compute_allowance
from .calendar_grid import build_calendar
from .cycle import Cycle, DayFilter, resolve_cycle
from .ledger import ExpenseEntry, add_entry, derive_spending_by_day

__all__ = [
    'AllowanceState',
    'CarryOverDaily',
    'Cycle',
    'DayFilter',
    'ExpenseEntry',
    'FixedPool',
    'add_entry',
    'build_calendar',
    'compute_allowance',
    'derive_spending_by_day',
    'resolve_cycle',
]
