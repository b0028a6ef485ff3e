"""Pydantic schemas for API request/response validation

All amounts and rates are WAD fixed-point integers (10**18 == 1.0).
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class GovernanceLimitRequest(BaseModel):
    """Request body for PUT /v1/underwriters/{underwriter_id}/governance-limit"""

    limit: int = Field(..., description="Maximum aggregate credit line limit (WAD)")


class UnderwriterResponse(BaseModel):
    """Response for underwriter endpoints"""

    underwriter_id: str
    governance_limit: int
    current_exposure: int
    credit_lines: List[str]


class CreateCreditLineRequest(BaseModel):
    """Request body for POST /v1/credit-lines"""

    borrower: str = Field(..., min_length=1, description="Borrower principal id")
    limit: int
    interest_apr: int = Field(..., description="Annual rate (WAD, 0.12 == 12%)")
    min_collateral_percent: int
    payment_period_in_days: int
    term_in_days: int


class CreditLineResponse(BaseModel):
    """Credit line fields plus the payment due on its current balance"""

    address: str
    borrower: str
    underwriter: str
    limit: int
    interest_apr: int
    min_collateral_percent: int
    payment_period_in_days: int
    term_in_days: int
    term_end_block: int
    balance: int
    prepayment_balance: int
    state: str
    annuity_payment: int


class DrawdownRequest(BaseModel):
    """Request body for POST /v1/credit-lines/{address}/drawdown"""

    amount: int
    current_block: int = Field(..., ge=0, description="Current block index supplied by the caller")


class PrepaymentRequest(BaseModel):
    """Request body for POST /v1/credit-lines/{address}/prepayment"""

    amount: int


class AnnuityQuoteRequest(BaseModel):
    """Request body for POST /v1/annuity/quote"""

    balance: int
    interest_apr: int
    term_in_days: int
    payment_period_in_days: int
    include_schedule: bool = False


class AmortizationRowSchema(BaseModel):
    """Single period in a repayment schedule"""

    period: int
    payment: int
    interest: int
    principal: int
    remaining_balance: int


class AnnuityQuoteResponse(BaseModel):
    """Response for POST /v1/annuity/quote"""

    payment: int
    num_periods: int
    schedule: Optional[List[AmortizationRowSchema]] = None


class LedgerEventItem(BaseModel):
    """Single committed ledger operation"""

    event_type: str
    principal: str
    credit_line_address: Optional[str] = None
    amount: int
    created_at: str


class CreditLineEventsResponse(BaseModel):
    """Response for GET /v1/credit-lines/{address}/events"""

    credit_line_address: str
    events: List[LedgerEventItem]


class HistoryResponse(BaseModel):
    """Response for GET /v1/ledger/history"""

    principal: str
    events: List[LedgerEventItem]
