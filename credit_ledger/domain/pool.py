"""Pooled-fund custody contract and an in-process reference implementation"""

import secrets
from dataclasses import dataclass
from typing import Dict, Optional, Protocol

from credit_ledger.domain import fixed_point as fp
from credit_ledger.domain.exceptions import (
    InsufficientPoolFundsError,
    InvalidAmountError,
    PoolAccessError,
)


@dataclass(frozen=True)
class CustodyCapability:
    """Handle proving the holder may move funds out of a pool"""

    holder: str
    token: str


class PoolCustody(Protocol):
    """What the credit desk needs from pool custody"""

    def deposit(self, amount: int, sender: str) -> int:
        ...

    def transfer_to(self, amount: int, recipient: str, capability: CustodyCapability) -> None:
        ...


class InMemoryPool:
    """
    Pool custody kept in process memory.

    Anyone may deposit. Moving funds out requires the capability issued by the
    most recent ownership transfer; issuing a new one revokes the previous one.
    """

    def __init__(self, owner: str):
        self._owner = owner
        self._capability: Optional[CustodyCapability] = None
        self._total_funds = 0
        self._deposits: Dict[str, int] = {}
        self._disbursements: Dict[str, int] = {}

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def total_funds(self) -> int:
        return self._total_funds

    def deposited_by(self, sender: str) -> int:
        return self._deposits.get(sender, 0)

    def disbursed_to(self, recipient: str) -> int:
        return self._disbursements.get(recipient, 0)

    def deposit(self, amount: int, sender: str) -> int:
        if amount <= 0:
            raise InvalidAmountError(f"Deposit amount must be positive, got {amount}")
        self._total_funds = fp.checked_add(self._total_funds, amount)
        self._deposits[sender] = self.deposited_by(sender) + amount
        return self._total_funds

    def withdraw(self, amount: int, depositor: str) -> int:
        """Return previously deposited funds to their depositor"""
        if amount <= 0:
            raise InvalidAmountError(f"Withdrawal amount must be positive, got {amount}")
        if amount > self.deposited_by(depositor):
            raise InvalidAmountError(f"{depositor} cannot withdraw {amount}; deposited {self.deposited_by(depositor)}")
        if amount > self._total_funds:
            raise InsufficientPoolFundsError(f"Pool holds {self._total_funds}, cannot withdraw {amount}")
        self._total_funds -= amount
        self._deposits[depositor] -= amount
        return self._total_funds

    def transfer_ownership(self, caller: str, new_owner: str) -> CustodyCapability:
        if caller != self._owner:
            raise PoolAccessError(f"{caller} does not own this pool")
        self._owner = new_owner
        self._capability = CustodyCapability(holder=new_owner, token=secrets.token_hex(16))
        return self._capability

    def transfer_to(self, amount: int, recipient: str, capability: CustodyCapability) -> None:
        if self._capability is None or capability != self._capability:
            raise PoolAccessError("Custody capability is not valid for this pool")
        if amount <= 0:
            raise InvalidAmountError(f"Transfer amount must be positive, got {amount}")
        if amount > self._total_funds:
            raise InsufficientPoolFundsError(f"Pool holds {self._total_funds}, cannot transfer {amount}")
        self._total_funds -= amount
        self._disbursements[recipient] = self.disbursed_to(recipient) + amount
