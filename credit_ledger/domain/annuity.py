"""Annuity payment calculation for fixed periodic credit line repayment"""

from typing import List

from credit_ledger.domain import fixed_point as fp
from credit_ledger.domain.exceptions import InvalidAmountError, InvalidCreditTermsError
from credit_ledger.domain.models import AmortizationRow

DAYS_PER_YEAR = 365


def validate_terms(term_in_days: int, payment_period_in_days: int) -> None:
    """Reject schedules that cannot produce at least one payment period"""
    for name, value in (("term_in_days", term_in_days), ("payment_period_in_days", payment_period_in_days)):
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise InvalidCreditTermsError(f"{name} must be a positive integer, got {value!r}")


def number_of_periods(term_in_days: int, payment_period_in_days: int) -> int:
    """Payment periods in a term; a trailing partial period counts as a full one"""
    validate_terms(term_in_days, payment_period_in_days)
    return max(1, -(-term_in_days // payment_period_in_days))


def calculate_period_rate(interest_apr: int, payment_period_in_days: int) -> int:
    """
    Convert a WAD annual rate into a 64.64 rate for one payment period.

    The daily rate is taken first (apr / 365) and then scaled by the period
    length. A result of zero means the rate is below one 64.64 unit (2**-64)
    and cannot be represented.
    """
    if interest_apr < 0:
        raise InvalidCreditTermsError(f"interest_apr must be non-negative, got {interest_apr}")
    daily_rate = fp.divu(interest_apr, DAYS_PER_YEAR * fp.WAD)
    return fp.mul(daily_rate, fp.from_uint(payment_period_in_days))


def calculate_annuity_payment(
    balance: int,
    interest_apr: int,
    term_in_days: int,
    payment_period_in_days: int,
) -> int:
    """
    Constant payment per period that amortizes `balance` to zero over the term.

    Standard annuity formula, evaluated in 64.64 fixed point:
        payment = balance * r / (1 - (1 + r) ** -n)
    where r is the period rate and n the number of periods.

    Requirements:
    - Zero balance pays nothing (short-circuit)
    - Rates too small to represent fall back to straight-line amortization
      (balance / n) instead of dividing by a zero denominator
    - A single period reduces to balance * (1 + r)

    Args:
        balance: Outstanding principal (WAD)
        interest_apr: Annualized interest rate (WAD, 0.12 == 12%)
        term_in_days: Length of the credit term
        payment_period_in_days: Days between payments

    Returns:
        Payment per period (WAD), rounded down

    Example:
        10000 units at 12.000% over 360 days, paid every 30 days
        → 887.71906914770583 units per period
    """
    if balance < 0:
        raise InvalidAmountError(f"balance must be non-negative, got {balance}")

    num_periods = number_of_periods(term_in_days, payment_period_in_days)

    if balance == 0:
        return 0

    period_rate = calculate_period_rate(interest_apr, payment_period_in_days)
    if period_rate == 0:
        return balance // num_periods

    growth = fp.pow(fp.add(fp.ONE_64x64, period_rate), num_periods)
    annuity_factor = fp.div(period_rate, fp.sub(fp.ONE_64x64, fp.inv(growth)))

    return fp.wad_mul(balance, fp.mulu(annuity_factor, fp.WAD))


def build_amortization_schedule(
    balance: int,
    interest_apr: int,
    term_in_days: int,
    payment_period_in_days: int,
) -> List[AmortizationRow]:
    """
    Expand an annuity payment into its per-period repayment schedule.

    Interest accrues on the remaining balance at the period rate each period.
    Payments are rounded down, so a small remainder (well under one currency
    unit) is left after the last regular payment; the final row absorbs it and
    the schedule always ends at exactly zero.
    """
    payment = calculate_annuity_payment(balance, interest_apr, term_in_days, payment_period_in_days)
    if balance == 0:
        return []

    num_periods = number_of_periods(term_in_days, payment_period_in_days)
    period_rate = calculate_period_rate(interest_apr, payment_period_in_days)

    schedule = []
    remaining = balance
    for period in range(1, num_periods + 1):
        interest = fp.mulu(period_rate, remaining)
        owed = fp.checked_add(remaining, interest)

        # Last period absorbs the rounding remainder to retire the balance exactly
        amount = owed if period == num_periods else min(payment, owed)
        remaining = fp.checked_sub(owed, amount)

        schedule.append(
            AmortizationRow(
                period=period,
                payment=amount,
                interest=interest,
                principal=amount - interest,
                remaining_balance=remaining,
            )
        )

    return schedule
