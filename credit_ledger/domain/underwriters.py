"""Underwriter governance limits and the credit lines each has authorized"""

from typing import Dict, Tuple

from credit_ledger.domain.credit_line import CreditLine
from credit_ledger.domain.exceptions import NotFoundError
from credit_ledger.domain.models import Underwriter


class UnderwriterRegistry:
    """
    Maps underwriter identity to its governance limit and authorized credit lines.

    Exposure is always recomputed by summing line limits; no running total is
    kept, so the aggregate check can be audited against the sequence itself.
    """

    def __init__(self):
        self._underwriters: Dict[str, Underwriter] = {}

    def set_governance_limit(self, underwriter: str, limit: int) -> Underwriter:
        """Replace the limit unconditionally; existing credit lines are unaffected"""
        entry = self._underwriters.get(underwriter)
        if entry is None:
            entry = Underwriter(identity=underwriter, governance_limit=limit)
            self._underwriters[underwriter] = entry
        else:
            entry.governance_limit = limit
        return entry

    def is_registered(self, underwriter: str) -> bool:
        return underwriter in self._underwriters

    def get(self, underwriter: str) -> Underwriter:
        try:
            return self._underwriters[underwriter]
        except KeyError:
            raise NotFoundError(f"Underwriter {underwriter} not found") from None

    def governance_limit(self, underwriter: str) -> int:
        return self.get(underwriter).governance_limit

    def current_exposure(self, underwriter: str) -> int:
        return sum(line.limit for line in self.get(underwriter).credit_lines)

    def can_authorize(self, underwriter: str, limit: int) -> bool:
        entry = self.get(underwriter)
        return self.current_exposure(underwriter) + limit <= entry.governance_limit

    def authorize(self, underwriter: str, credit_line: CreditLine) -> None:
        self.get(underwriter).credit_lines.append(credit_line)

    def credit_lines(self, underwriter: str) -> Tuple[CreditLine, ...]:
        return tuple(self.get(underwriter).credit_lines)
