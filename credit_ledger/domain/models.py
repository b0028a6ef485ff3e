"""Domain models - pure Python dataclasses representing ledger entities"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from credit_ledger.domain.credit_line import CreditLine


@dataclass
class Underwriter:
    """Principal allowed to authorize credit lines up to a governance limit"""

    identity: str
    governance_limit: int  # WAD
    credit_lines: List["CreditLine"] = field(default_factory=list)  # append-only, authorization order


@dataclass(frozen=True)
class AmortizationRow:
    """Single period of an annuity repayment schedule"""

    period: int
    payment: int
    interest: int
    principal: int
    remaining_balance: int
