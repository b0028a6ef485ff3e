"""POST /v1/annuity/quote - Stateless annuity payment and schedule"""

from dataclasses import asdict
from fastapi import APIRouter, Request

from credit_ledger.api.dependencies import get_request_id
from credit_ledger.api.errors import reject_operation
from credit_ledger.api.v1.schemas import AmortizationRowSchema, AnnuityQuoteRequest, AnnuityQuoteResponse
from credit_ledger.domain.annuity import (
    build_amortization_schedule,
    calculate_annuity_payment,
    number_of_periods,
)
from credit_ledger.domain.exceptions import DomainException

router = APIRouter()


@router.post("/annuity/quote", response_model=AnnuityQuoteResponse)
def quote_annuity(request_body: AnnuityQuoteRequest, request: Request):
    """Payment per period for the given terms, optionally with the full schedule"""
    try:
        payment = calculate_annuity_payment(
            request_body.balance,
            request_body.interest_apr,
            request_body.term_in_days,
            request_body.payment_period_in_days,
        )
        schedule = None
        if request_body.include_schedule:
            schedule = [
                AmortizationRowSchema(**asdict(row))
                for row in build_amortization_schedule(
                    request_body.balance,
                    request_body.interest_apr,
                    request_body.term_in_days,
                    request_body.payment_period_in_days,
                )
            ]
    except DomainException as e:
        raise reject_operation(e, "annuity_quote", get_request_id(request))

    return AnnuityQuoteResponse(
        payment=payment,
        num_periods=number_of_periods(request_body.term_in_days, request_body.payment_period_in_days),
        schedule=schedule,
    )
