"""Unit tests for WAD unit conversion"""

from decimal import Decimal

import pytest
from credit_ledger.domain.exceptions import InvalidAmountError
from credit_ledger.utils.units import from_wad, percent_to_wad, to_wad


def test_to_wad():
    assert to_wad(1) == 10**18
    assert to_wad("1.5") == 1_500_000_000_000_000_000
    assert to_wad("0.000000000000000001") == 1


def test_percent_to_wad():
    """Test percentages become fractional WAD rates"""
    assert percent_to_wad(12) == 12 * 10**16
    assert percent_to_wad("12.345") == 12345 * 10**13
    assert percent_to_wad("0.002") == 2 * 10**13


def test_too_many_decimals_rejected():
    with pytest.raises(InvalidAmountError):
        to_wad("0.0000000000000000001")


def test_from_wad():
    assert from_wad(887719069147705830000) == Decimal("887.71906914770583")
