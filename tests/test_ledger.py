import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

from trackamate.cycle import Cycle
from trackamate.ledger import (
    ExpenseEntry,
    add_entry,
    classify_spend,
    derive_spending_by_day,
    entries_in_cycle,
    ledger_frame,
    parse_amount,
    parse_day,
)


def test_add_entry_appends_new_entry():
    ledger = add_entry((), date(2025, 8, 1), '12.50', '  nasi lemak ')
    assert ledger == (ExpenseEntry(date(2025, 8, 1), Decimal('12.50'), 'nasi lemak'),)


def test_add_entry_without_date_is_noop():
    ledger = (ExpenseEntry(date(2025, 8, 1), Decimal('3')),)
    assert add_entry(ledger, None, '5', 'x') == ledger


@pytest.mark.parametrize('amount', ['', '   ', 'abc', '-1', 'nan', 'Infinity', None, True, float('inf'), -0.5])
def test_add_entry_rejects_invalid_amounts(amount):
    ledger = (ExpenseEntry(date(2025, 8, 1), Decimal('3')),)
    assert add_entry(ledger, date(2025, 8, 2), amount) == ledger


def test_add_entry_logs_rejected_amount(caplog):
    with caplog.at_level(logging.WARNING, logger='trackamate.ledger'):
        add_entry((), date(2025, 8, 2), 'ten')
    assert 'invalid amount' in caplog.text


def test_add_entry_accepts_iso_date_strings():
    ledger = add_entry([], '2025-08-05', 15)
    assert ledger[0].date == date(2025, 8, 5)
    assert add_entry([], '05/08/2025', 15) == ()


def test_add_entry_does_not_mutate_input():
    original = [ExpenseEntry(date(2025, 8, 1), Decimal('3'))]
    updated = add_entry(original, date(2025, 8, 1), '2')
    assert len(original) == 1
    assert len(updated) == 2


def test_parse_amount_variants():
    assert parse_amount('RM 1,200.50') == Decimal('1200.50')
    assert parse_amount(Decimal('0')) == Decimal('0')
    assert parse_amount(7) == Decimal('7')
    assert parse_amount(0.1) == Decimal('0.1')
    assert parse_amount('RM') is None
    assert parse_amount(['1']) is None


def test_parse_day_variants():
    assert parse_day(datetime(2025, 8, 1, 9, 30)) == date(2025, 8, 1)
    assert parse_day(' 2025-08-01 ') == date(2025, 8, 1)
    assert parse_day('') is None
    assert parse_day(20250801) is None


def test_spending_by_day_sums_per_date():
    ledger = ()
    ledger = add_entry(ledger, date(2025, 8, 1), '12')
    ledger = add_entry(ledger, date(2025, 8, 1), '3.5')
    ledger = add_entry(ledger, date(2025, 8, 4), '8')

    assert derive_spending_by_day(ledger) == {
        date(2025, 8, 1): Decimal('15.5'),
        date(2025, 8, 4): Decimal('8'),
    }


def test_spending_by_day_agrees_with_ledger_after_many_adds():
    ledger = ()
    inputs = [
        (date(2025, 8, day % 7 + 1), f"{day * 1.25:.2f}") for day in range(40)
    ] + [(None, '4'), (date(2025, 8, 2), 'bad')]
    for entry_date, amount in inputs:
        ledger = add_entry(ledger, entry_date, amount)

    totals = derive_spending_by_day(ledger)
    for day, total in totals.items():
        assert total == sum((e.amount for e in ledger if e.date == day), Decimal('0'))
    assert set(totals) == {entry.date for entry in ledger}
    assert len(ledger) == 40


def test_entries_in_cycle_filters_by_range():
    cycle = Cycle(date(2025, 7, 25), date(2025, 8, 24))
    ledger = (
        ExpenseEntry(date(2025, 7, 24), Decimal('1')),
        ExpenseEntry(date(2025, 7, 25), Decimal('2')),
        ExpenseEntry(date(2025, 8, 24), Decimal('3')),
        ExpenseEntry(date(2025, 8, 25), Decimal('4')),
    )
    assert [e.amount for e in entries_in_cycle(ledger, cycle)] == [Decimal('2'), Decimal('3')]


def test_classify_spend_threshold():
    threshold = Decimal('10')
    assert classify_spend(None, threshold) == 'none'
    assert classify_spend(Decimal('10'), threshold) == 'under'
    assert classify_spend(Decimal('10.01'), threshold) == 'over'


def test_ledger_frame_lists_entries_in_order():
    ledger = add_entry(add_entry((), date(2025, 8, 4), '8', 'teh'), date(2025, 8, 1), '12', 'roti')
    frame = ledger_frame(ledger)
    assert list(frame.columns) == ['date', 'amount', 'description']
    assert frame['description'].tolist() == ['teh', 'roti']
    assert frame['amount'].sum() == 20.0
    assert ledger_frame(()).empty


def test_expense_entry_normalises_float_amount():
    entry = ExpenseEntry(date(2025, 8, 1), 12.5)
    assert entry.amount == Decimal('12.5')
    assert isinstance(entry.amount, Decimal)
    assert derive_spending_by_day([entry, ExpenseEntry(date(2025, 8, 1), '2')]) == {
        date(2025, 8, 1): Decimal('14.5'),
    }


@pytest.mark.parametrize('amount', [Decimal('-50'), -1, 'abc', None, float('nan')])
def test_expense_entry_rejects_invalid_amounts(amount):
    with pytest.raises(ValueError):
        ExpenseEntry(date(2025, 8, 1), amount)


def test_parse_amount_drops_negative_zero_sign():
    assert str(parse_amount('-0')) == '0'
    assert str(parse_amount(Decimal('-0.00'))) == '0.00'
    assert not parse_amount('-0').is_signed()
