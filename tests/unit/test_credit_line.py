"""Unit tests for credit line state and ownership"""

import pytest
from credit_ledger.domain.credit_line import CreditLine, CreditLineState, OwnerToken
from credit_ledger.domain.exceptions import UnauthorizedError
from credit_ledger.utils.units import percent_to_wad, to_wad

BLOCKS_PER_DAY = 5760


def make_line(owner: OwnerToken) -> CreditLine:
    return CreditLine(
        address="line-1",
        borrower="person3",
        underwriter="person2",
        limit=to_wad(500),
        interest_apr=percent_to_wad(5),
        min_collateral_percent=to_wad(10),
        payment_period_in_days=30,
        term_in_days=365,
        owner=owner,
    )


def test_new_line_starts_created():
    """Test a fresh line holds its terms with zero balances"""
    line = make_line(OwnerToken("desk"))

    assert line.state == CreditLineState.CREATED
    assert line.term_end_block == 0
    assert line.balance == 0
    assert line.prepayment_balance == 0
    assert line.available_credit == to_wad(500)
    assert line.interest_apr == 5 * 10**16


def test_activate_term_only_once():
    """Test the first activation sets the end block and later calls keep it"""
    owner = OwnerToken("desk")
    line = make_line(owner)

    first = line.activate_term(1000, BLOCKS_PER_DAY, owner)
    second = line.activate_term(99999, BLOCKS_PER_DAY, owner)

    assert first == 1000 + 365 * BLOCKS_PER_DAY
    assert second == first
    assert line.term_end_block == first


def test_state_follows_balance():
    """Test activated with balance, retired once activated with none"""
    owner = OwnerToken("desk")
    line = make_line(owner)

    line.activate_term(10, BLOCKS_PER_DAY, owner)
    assert line.state == CreditLineState.RETIRED

    line.increase_balance(to_wad(100), owner)
    assert line.state == CreditLineState.ACTIVATED
    assert line.available_credit == to_wad(400)


def test_balances_accumulate():
    owner = OwnerToken("desk")
    line = make_line(owner)

    line.increase_balance(to_wad(10), owner)
    line.increase_balance(to_wad(15), owner)
    line.increase_prepayment(to_wad(3), owner)

    assert line.balance == to_wad(25)
    assert line.prepayment_balance == to_wad(3)


def test_mutators_reject_other_tokens():
    """Test a token with the same name is still not the owner"""
    line = make_line(OwnerToken("desk"))
    impostor = OwnerToken("desk")

    with pytest.raises(UnauthorizedError):
        line.activate_term(10, BLOCKS_PER_DAY, impostor)
    with pytest.raises(UnauthorizedError):
        line.increase_balance(to_wad(1), impostor)
    with pytest.raises(UnauthorizedError):
        line.increase_prepayment(to_wad(1), impostor)

    assert line.term_end_block == 0
    assert line.balance == 0
    assert line.prepayment_balance == 0
