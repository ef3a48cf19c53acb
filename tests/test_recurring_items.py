from decimal import Decimal

import pytest

from trackamate.recurring_items import (
    COMMITMENT,
    INVESTMENT,
    add_item,
    allocation_shares,
    toggle_done,
    total_amount,
)


def _portfolio():
    items = add_item((), INVESTMENT, 'Stocks', '500', value_percent='50', item_id='stocks')
    items = add_item(items, INVESTMENT, 'Crypto', '300', item_id='crypto')
    items = add_item(items, INVESTMENT, 'Real Estate', '200')
    items = add_item(items, COMMITMENT, 'Rent', '1200', is_recurring=True, item_id='rent')
    return items


def test_add_item_assigns_ids_and_defaults():
    items = _portfolio()
    assert len(items) == 4
    assert items[0].id == 'stocks'
    assert items[0].value_percent == Decimal('50')
    assert items[1].value_percent is None
    assert len(items[2].id) == 32
    assert not any(item.is_done for item in items)


def test_investments_are_never_recurring():
    items = add_item((), INVESTMENT, 'ETF', '100', is_recurring=True)
    assert items[0].is_recurring is False
    commitments = add_item((), COMMITMENT, 'Loan', '350', is_recurring=True)
    assert commitments[0].is_recurring is True


@pytest.mark.parametrize('kind, name, amount, percent', [
    ('savings', 'Stocks', '10', None),
    (INVESTMENT, '   ', '10', None),
    (INVESTMENT, 'Stocks', 'ten', None),
    (INVESTMENT, 'Stocks', '-10', None),
    (INVESTMENT, 'Stocks', '10', '150'),
    (INVESTMENT, 'Stocks', '10', 'half'),
])
def test_add_item_rejects_invalid_input(kind, name, amount, percent):
    items = _portfolio()
    assert add_item(items, kind, name, amount, value_percent=percent) == items


def test_blank_value_percent_is_treated_as_missing():
    items = add_item((), INVESTMENT, 'Bonds', '50', value_percent='  ')
    assert items[0].value_percent is None


def test_toggle_done_flips_only_matching_item():
    items = _portfolio()
    toggled = toggle_done(items, 'rent')
    assert [item.is_done for item in toggled] == [False, False, False, True]
    assert toggle_done(toggled, 'rent') == items
    assert items[3].is_done is False


def test_toggle_done_unknown_id_is_noop():
    items = _portfolio()
    assert toggle_done(items, 'missing') == items


def test_totals_by_kind():
    items = _portfolio()
    assert total_amount(items) == Decimal('2200')
    assert total_amount(items, INVESTMENT) == Decimal('1000')
    assert total_amount(items, COMMITMENT) == Decimal('1200')


def test_allocation_shares():
    shares = allocation_shares(_portfolio(), INVESTMENT)
    assert shares == pytest.approx({'Stocks': 50.0, 'Crypto': 30.0, 'Real Estate': 20.0})
    assert allocation_shares((), COMMITMENT) == {}


def test_add_item_rejects_duplicate_id():
    items = add_item((), COMMITMENT, 'Rent', '1200', item_id='x')
    again = add_item(items, COMMITMENT, 'Gym', '80', item_id='x')
    assert again == items
    assert len({item.id for item in _portfolio()}) == len(_portfolio())
