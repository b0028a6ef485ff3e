"""Unit tests for fixed-point arithmetic"""

import pytest
from credit_ledger.domain import fixed_point as fp
from credit_ledger.domain.exceptions import ArithmeticOverflowError, DivideByZeroError


def test_wad_mul_rounds_down():
    """Test WAD multiplication keeps 18 decimals and truncates the rest"""
    assert fp.wad_mul(3 * fp.WAD, fp.WAD // 2) == 3 * fp.WAD // 2
    assert fp.wad_mul(1, 1) == 0  # 1e-36 truncates to zero


def test_wad_div():
    """Test WAD division of 10 by 4"""
    assert fp.wad_div(10 * fp.WAD, 4 * fp.WAD) == 2_500_000_000_000_000_000


def test_wad_div_by_zero():
    with pytest.raises(DivideByZeroError):
        fp.wad_div(fp.WAD, 0)


def test_wad_mul_overflow():
    """Test result beyond uint256 raises instead of wrapping"""
    with pytest.raises(ArithmeticOverflowError):
        fp.wad_mul(fp.MAX_UINT256, 2 * fp.WAD)


def test_wad_pow():
    """Test repeated squaring matches simple powers"""
    assert fp.wad_pow(2 * fp.WAD, 10) == 1024 * fp.WAD
    assert fp.wad_pow(5 * fp.WAD, 0) == fp.WAD
    assert fp.wad_pow(fp.WAD, 10_000) == fp.WAD


def test_wad_pow_overflow():
    """Test an intermediate square that leaves uint256 aborts the computation"""
    with pytest.raises(ArithmeticOverflowError):
        fp.wad_pow(10**30 * fp.WAD, 4)


def test_checked_sub_underflow():
    with pytest.raises(ArithmeticOverflowError):
        fp.checked_sub(1, 2)


def test_64x64_conversions():
    """Test integer round trip and WAD conversion through mulu"""
    assert fp.to_uint(fp.from_uint(42)) == 42
    assert fp.divu(1, 2) == fp.ONE_64x64 // 2
    assert fp.mulu(fp.divu(3, 4), fp.WAD) == 750_000_000_000_000_000


def test_64x64_from_uint_range():
    with pytest.raises(ArithmeticOverflowError):
        fp.from_uint(2**63)


def test_64x64_div_and_inv():
    """Test division and reciprocal of exact binary fractions"""
    two = fp.from_uint(2)
    assert fp.div(fp.ONE_64x64, two) == fp.ONE_64x64 // 2
    assert fp.inv(two) == fp.ONE_64x64 // 2
    assert fp.div(-fp.ONE_64x64, two) == -(fp.ONE_64x64 // 2)


def test_64x64_divide_by_zero():
    with pytest.raises(DivideByZeroError):
        fp.div(fp.ONE_64x64, 0)
    with pytest.raises(DivideByZeroError):
        fp.inv(0)
    with pytest.raises(DivideByZeroError):
        fp.divu(1, 0)


def test_64x64_pow_exact_powers():
    """Test integer and fractional bases with exact binary results"""
    assert fp.pow(fp.from_uint(2), 10) == fp.from_uint(1024)
    assert fp.pow(fp.from_uint(3), 0) == fp.ONE_64x64
    assert fp.pow(fp.ONE_64x64 // 2, 3) == fp.ONE_64x64 // 8
    assert fp.pow(-fp.from_uint(2), 3) == -fp.from_uint(8)


def test_64x64_pow_small_rate_long_term():
    """Test daily compounding over thousands of days stays in range"""
    daily_rate = fp.divu(1, 3650)  # ~0.027% per day
    growth = fp.pow(fp.add(fp.ONE_64x64, daily_rate), 3600)
    # (1 + 1/3650) ** 3600 is a little under e ** 0.9863
    assert fp.from_uint(2) < growth < fp.from_uint(3)


def test_64x64_pow_overflow():
    with pytest.raises(ArithmeticOverflowError):
        fp.pow(fp.from_uint(2), 64)


def test_64x64_mul_overflow():
    with pytest.raises(ArithmeticOverflowError):
        fp.mul(fp.from_uint(2**62), fp.from_uint(4))
