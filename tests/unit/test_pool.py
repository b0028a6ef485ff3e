"""Unit tests for in-memory pool custody"""

import pytest
from credit_ledger.domain.exceptions import (
    InsufficientPoolFundsError,
    InvalidAmountError,
    PoolAccessError,
)
from credit_ledger.domain.pool import CustodyCapability, InMemoryPool
from credit_ledger.utils.units import to_wad


def test_deposit_tracks_depositor():
    pool = InMemoryPool(owner="owner")

    pool.deposit(to_wad(90), sender="person2")
    pool.deposit(to_wad(10), sender="person4")

    assert pool.total_funds == to_wad(100)
    assert pool.deposited_by("person2") == to_wad(90)


def test_deposit_rejects_non_positive():
    pool = InMemoryPool(owner="owner")
    with pytest.raises(InvalidAmountError):
        pool.deposit(0, sender="person2")


def test_withdraw_limited_to_own_deposit():
    pool = InMemoryPool(owner="owner")
    pool.deposit(to_wad(90), sender="person2")

    pool.withdraw(to_wad(40), depositor="person2")
    assert pool.total_funds == to_wad(50)

    with pytest.raises(InvalidAmountError):
        pool.withdraw(to_wad(1), depositor="person4")


def test_transfer_ownership_requires_owner():
    pool = InMemoryPool(owner="owner")
    with pytest.raises(PoolAccessError):
        pool.transfer_ownership("person2", "person2")


def test_transfer_to_with_capability():
    """Test the capability holder can disburse funds"""
    pool = InMemoryPool(owner="owner")
    pool.deposit(to_wad(90), sender="person2")
    capability = pool.transfer_ownership("owner", "credit-desk")

    pool.transfer_to(to_wad(10), "person3", capability)

    assert pool.owner == "credit-desk"
    assert pool.total_funds == to_wad(80)
    assert pool.disbursed_to("person3") == to_wad(10)


def test_transfer_to_rejects_forged_or_revoked_capability():
    """Test a guessed token or a superseded capability cannot move funds"""
    pool = InMemoryPool(owner="owner")
    pool.deposit(to_wad(90), sender="person2")
    first = pool.transfer_ownership("owner", "credit-desk")

    with pytest.raises(PoolAccessError):
        pool.transfer_to(to_wad(1), "person3", CustodyCapability(holder="credit-desk", token="guess"))

    pool.transfer_ownership("credit-desk", "other-desk")
    with pytest.raises(PoolAccessError):
        pool.transfer_to(to_wad(1), "person3", first)

    assert pool.total_funds == to_wad(90)


def test_transfer_to_insufficient_funds():
    pool = InMemoryPool(owner="owner")
    pool.deposit(to_wad(90), sender="person2")
    capability = pool.transfer_ownership("owner", "credit-desk")

    with pytest.raises(InsufficientPoolFundsError):
        pool.transfer_to(to_wad(91), "person3", capability)
    assert pool.total_funds == to_wad(90)
