"""Conversion between human-readable numbers and WAD fixed-point integers"""

from decimal import Decimal, localcontext
from typing import Union

from credit_ledger.domain.exceptions import InvalidAmountError
from credit_ledger.domain.fixed_point import WAD

Number = Union[int, str, Decimal]


def to_wad(value: Number) -> int:
    """Scale a decimal amount to WAD; "1.5" → 1_500_000_000_000_000_000"""
    with localcontext() as ctx:
        ctx.prec = 80
        scaled = Decimal(str(value)) * WAD
        if scaled != scaled.to_integral_value():
            raise InvalidAmountError(f"{value} has more than 18 decimal places")
        return int(scaled)


def percent_to_wad(percent: Number) -> int:
    """Scale a percentage to a WAD rate; "12.5" → 0.125 * 10**18"""
    with localcontext() as ctx:
        ctx.prec = 80
        return to_wad(Decimal(str(percent)) / 100)


def from_wad(value: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = 80
        return Decimal(value) / WAD
