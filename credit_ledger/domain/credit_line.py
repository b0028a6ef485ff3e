"""Credit line state holder - mutable only through its owner's token"""

from enum import Enum

from credit_ledger.domain import fixed_point as fp
from credit_ledger.domain.exceptions import InvalidAmountError, UnauthorizedError


class OwnerToken:
    """Opaque capability identifying the single component allowed to mutate credit lines"""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"OwnerToken({self.name!r})"


class CreditLineState(str, Enum):
    CREATED = "created"
    ACTIVATED = "activated"
    RETIRED = "retired"


class CreditLine:
    """
    A single borrower obligation.

    Terms are fixed at construction. Balances and the term end block change
    only through the mutators, each of which checks that the caller presents
    the exact OwnerToken the line was created with.
    """

    def __init__(
        self,
        address: str,
        borrower: str,
        underwriter: str,
        limit: int,
        interest_apr: int,
        min_collateral_percent: int,
        payment_period_in_days: int,
        term_in_days: int,
        owner: OwnerToken,
    ):
        self._address = address
        self._borrower = borrower
        self._underwriter = underwriter
        self._limit = limit
        self._interest_apr = interest_apr
        self._min_collateral_percent = min_collateral_percent
        self._payment_period_in_days = payment_period_in_days
        self._term_in_days = term_in_days
        self._owner = owner

        self._term_end_block = 0
        self._balance = 0
        self._prepayment_balance = 0

    def __repr__(self) -> str:
        return f"CreditLine(address={self._address!r}, borrower={self._borrower!r}, state={self.state.value})"

    @property
    def address(self) -> str:
        return self._address

    @property
    def borrower(self) -> str:
        return self._borrower

    @property
    def underwriter(self) -> str:
        return self._underwriter

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def interest_apr(self) -> int:
        return self._interest_apr

    @property
    def min_collateral_percent(self) -> int:
        return self._min_collateral_percent

    @property
    def payment_period_in_days(self) -> int:
        return self._payment_period_in_days

    @property
    def term_in_days(self) -> int:
        return self._term_in_days

    @property
    def owner(self) -> OwnerToken:
        return self._owner

    @property
    def term_end_block(self) -> int:
        return self._term_end_block

    @property
    def balance(self) -> int:
        return self._balance

    @property
    def prepayment_balance(self) -> int:
        return self._prepayment_balance

    @property
    def is_activated(self) -> bool:
        return self._term_end_block != 0

    @property
    def is_retired(self) -> bool:
        return self.is_activated and self._balance == 0

    @property
    def available_credit(self) -> int:
        return self._limit - self._balance

    @property
    def state(self) -> CreditLineState:
        if self.is_retired:
            return CreditLineState.RETIRED
        if self.is_activated:
            return CreditLineState.ACTIVATED
        return CreditLineState.CREATED

    def _require_owner(self, owner: OwnerToken) -> None:
        if owner is not self._owner:
            raise UnauthorizedError(f"Only the owner of credit line {self._address} may modify it")

    def term_end_block_for(self, current_block: int, blocks_per_day: int) -> int:
        """Block at which a term starting at `current_block` would end"""
        if current_block < 0:
            raise InvalidAmountError(f"current_block must be non-negative, got {current_block}")
        return fp.checked_add(current_block, self._term_in_days * blocks_per_day)

    def activate_term(self, current_block: int, blocks_per_day: int, owner: OwnerToken) -> int:
        """
        Start the term clock on first drawdown.

        Only the first call takes effect; later calls leave term_end_block
        untouched and return it.
        """
        self._require_owner(owner)
        if self._term_end_block == 0:
            self._term_end_block = self.term_end_block_for(current_block, blocks_per_day)
        return self._term_end_block

    def increase_balance(self, amount: int, owner: OwnerToken) -> int:
        self._require_owner(owner)
        self._balance = fp.checked_add(self._balance, amount)
        return self._balance

    def increase_prepayment(self, amount: int, owner: OwnerToken) -> int:
        self._require_owner(owner)
        self._prepayment_balance = fp.checked_add(self._prepayment_balance, amount)
        return self._prepayment_balance
