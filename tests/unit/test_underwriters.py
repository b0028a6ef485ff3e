"""Unit tests for the underwriter registry"""

import pytest
from credit_ledger.domain.credit_line import CreditLine, OwnerToken
from credit_ledger.domain.exceptions import NotFoundError
from credit_ledger.domain.underwriters import UnderwriterRegistry
from credit_ledger.utils.units import to_wad

OWNER = OwnerToken("desk")


def make_line(address: str, limit: int) -> CreditLine:
    return CreditLine(address, "person3", "person2", limit, 0, 0, 30, 365, OWNER)


def test_set_governance_limit_registers_underwriter():
    registry = UnderwriterRegistry()
    assert not registry.is_registered("person2")

    registry.set_governance_limit("person2", to_wad(600))

    assert registry.is_registered("person2")
    assert registry.governance_limit("person2") == to_wad(600)
    assert registry.current_exposure("person2") == 0
    assert registry.credit_lines("person2") == ()


def test_set_governance_limit_replaces_and_keeps_lines():
    """Test lowering the limit leaves existing lines in place"""
    registry = UnderwriterRegistry()
    registry.set_governance_limit("person2", to_wad(600))
    registry.authorize("person2", make_line("a", to_wad(500)))

    registry.set_governance_limit("person2", to_wad(100))

    assert registry.governance_limit("person2") == to_wad(100)
    assert [line.address for line in registry.credit_lines("person2")] == ["a"]
    assert not registry.can_authorize("person2", to_wad(1))


def test_can_authorize_sums_line_limits():
    """Test exposure is the sum of authorized limits, inclusive of the cap"""
    registry = UnderwriterRegistry()
    registry.set_governance_limit("person2", to_wad(600))
    registry.authorize("person2", make_line("a", to_wad(300)))
    registry.authorize("person2", make_line("b", to_wad(200)))

    assert registry.current_exposure("person2") == to_wad(500)
    assert registry.can_authorize("person2", to_wad(100))
    assert not registry.can_authorize("person2", to_wad(100) + 1)


def test_unknown_underwriter():
    registry = UnderwriterRegistry()
    with pytest.raises(NotFoundError):
        registry.governance_limit("nobody")
    with pytest.raises(NotFoundError):
        registry.credit_lines("nobody")
