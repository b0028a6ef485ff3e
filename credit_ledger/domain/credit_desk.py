"""Credit desk - orchestrates underwriting, drawdowns and prepayments"""

import threading
import uuid
from typing import Dict, Optional, Tuple

from credit_ledger.domain import fixed_point as fp
from credit_ledger.domain.annuity import calculate_annuity_payment, validate_terms
from credit_ledger.domain.credit_line import CreditLine, OwnerToken
from credit_ledger.domain.exceptions import (
    InvalidAmountError,
    LimitExceededError,
    NotFoundError,
    PoolUnavailableError,
    UnauthorizedError,
)
from credit_ledger.domain.pool import CustodyCapability, PoolCustody
from credit_ledger.domain.underwriters import UnderwriterRegistry

# 15 second blocks
BLOCKS_PER_DAY = 60 * 60 * 24 // 15


def _require_amount(value: int, name: str, allow_zero: bool = False) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidAmountError(f"{name} must be an integer fixed-point amount, got {value!r}")
    if value < 0 or (value == 0 and not allow_zero):
        qualifier = "non-negative" if allow_zero else "positive"
        raise InvalidAmountError(f"{name} must be {qualifier}, got {value}")


class CreditDesk:
    """
    Sole owner of every credit line and of the underwriter registry.

    Each public mutating method is one atomic unit: all checks and the pool
    transfer (the only call that can fail outside the desk) run before any
    state is written, and a lock keeps operations from interleaving.
    """

    def __init__(
        self,
        admin: str,
        blocks_per_day: int = BLOCKS_PER_DAY,
        pool: Optional[PoolCustody] = None,
        pool_capability: Optional[CustodyCapability] = None,
    ):
        if blocks_per_day <= 0:
            raise ValueError(f"blocks_per_day must be positive, got {blocks_per_day}")

        self.admin = admin
        self.blocks_per_day = blocks_per_day
        self.owner_token = OwnerToken(f"credit-desk:{uuid.uuid4().hex}")

        self._registry = UnderwriterRegistry()
        self._credit_lines: Dict[str, CreditLine] = {}
        self._pool = pool
        self._pool_capability = pool_capability
        self._lock = threading.RLock()

    def _require_admin(self, caller: str) -> None:
        if caller != self.admin:
            raise UnauthorizedError(f"{caller} is not the administrator")

    def set_pool(self, pool: PoolCustody, capability: CustodyCapability, caller: str) -> None:
        """Point the desk at a pool whose custody capability it now holds"""
        with self._lock:
            self._require_admin(caller)
            self._pool = pool
            self._pool_capability = capability

    def set_underwriter_governance_limit(self, caller: str, underwriter: str, limit: int) -> None:
        with self._lock:
            self._require_admin(caller)
            _require_amount(limit, "limit", allow_zero=True)
            self._registry.set_governance_limit(underwriter, limit)

    def create_credit_line(
        self,
        caller: str,
        borrower: str,
        limit: int,
        interest_apr: int,
        min_collateral_percent: int,
        payment_period_in_days: int,
        term_in_days: int,
    ) -> CreditLine:
        """
        Authorize a new credit line on behalf of the calling underwriter.

        The underwriter's existing exposure plus the new limit must stay
        within its governance limit at the time of the call.

        Raises:
            UnauthorizedError: Caller has never been given a governance limit
            LimitExceededError: Aggregate exposure would exceed the limit
            InvalidAmountError, InvalidCreditTermsError: Malformed terms
        """
        with self._lock:
            if not self._registry.is_registered(caller):
                raise UnauthorizedError(f"{caller} is not a registered underwriter")

            _require_amount(limit, "limit")
            _require_amount(interest_apr, "interest_apr", allow_zero=True)
            _require_amount(min_collateral_percent, "min_collateral_percent", allow_zero=True)
            validate_terms(term_in_days, payment_period_in_days)

            if not self._registry.can_authorize(caller, limit):
                raise LimitExceededError(
                    f"The underwriter cannot create this credit line: exposure "
                    f"{self._registry.current_exposure(caller)} + {limit} exceeds governance limit "
                    f"{self._registry.governance_limit(caller)}"
                )

            credit_line = CreditLine(
                address=uuid.uuid4().hex,
                borrower=borrower,
                underwriter=caller,
                limit=limit,
                interest_apr=interest_apr,
                min_collateral_percent=min_collateral_percent,
                payment_period_in_days=payment_period_in_days,
                term_in_days=term_in_days,
                owner=self.owner_token,
            )
            self._registry.authorize(caller, credit_line)
            self._credit_lines[credit_line.address] = credit_line
            return credit_line

    def drawdown(self, caller: str, amount: int, credit_line_address: str, current_block: int) -> CreditLine:
        """
        Move `amount` from the pool to the borrower and book it on the line.

        The first drawdown starts the term: term_end_block is set from
        `current_block`. Every check, including the term end and balance
        arithmetic, runs before the pool transfer; after it only values
        already known to fit are written. If the pool transfer fails, its
        error propagates and the credit line is left untouched.
        """
        with self._lock:
            credit_line = self.get_credit_line(credit_line_address)
            if caller != credit_line.borrower:
                raise UnauthorizedError(f"{caller} is not the borrower on credit line {credit_line_address}")

            _require_amount(amount, "amount")
            _require_amount(current_block, "current_block", allow_zero=True)
            if not credit_line.is_activated:
                credit_line.term_end_block_for(current_block, self.blocks_per_day)
            if fp.checked_add(credit_line.balance, amount) > credit_line.limit:
                raise LimitExceededError(
                    f"Drawdown of {amount} exceeds available credit {credit_line.available_credit} "
                    f"on credit line {credit_line_address}"
                )

            if self._pool is None or self._pool_capability is None:
                raise PoolUnavailableError("No pool custody is configured for drawdowns")
            self._pool.transfer_to(amount, credit_line.borrower, self._pool_capability)

            credit_line.activate_term(current_block, self.blocks_per_day, self.owner_token)
            credit_line.increase_balance(amount, self.owner_token)
            return credit_line

    def prepayment(self, caller: str, credit_line_address: str, amount: int) -> CreditLine:
        """
        Hold `amount` against the line ahead of scheduled dues.

        Any caller may prepay; the funds are not applied to principal or
        interest here.
        """
        with self._lock:
            credit_line = self.get_credit_line(credit_line_address)
            _require_amount(amount, "amount")
            credit_line.increase_prepayment(amount, self.owner_token)
            return credit_line

    # Queries

    def get_credit_line(self, credit_line_address: str) -> CreditLine:
        try:
            return self._credit_lines[credit_line_address]
        except KeyError:
            raise NotFoundError(f"Credit line {credit_line_address} not found") from None

    def underwriter_credit_lines(self, underwriter: str) -> Tuple[CreditLine, ...]:
        return self._registry.credit_lines(underwriter)

    def underwriter_governance_limit(self, underwriter: str) -> int:
        return self._registry.governance_limit(underwriter)

    def underwriter_exposure(self, underwriter: str) -> int:
        return self._registry.current_exposure(underwriter)

    def annuity_payment(self, credit_line_address: str) -> int:
        """Payment per period on the line's current balance over its full term"""
        credit_line = self.get_credit_line(credit_line_address)
        return calculate_annuity_payment(
            credit_line.balance,
            credit_line.interest_apr,
            credit_line.term_in_days,
            credit_line.payment_period_in_days,
        )
