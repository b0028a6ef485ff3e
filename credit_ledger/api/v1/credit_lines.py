"""Credit line endpoints - creation, drawdown, prepayment and queries"""

import time
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from credit_ledger.api.dependencies import get_credit_desk, get_principal, get_request_id
from credit_ledger.api.errors import journal_failure, reject_operation
from credit_ledger.api.v1.schemas import (
    CreateCreditLineRequest,
    CreditLineEventsResponse,
    CreditLineResponse,
    DrawdownRequest,
    LedgerEventItem,
    PrepaymentRequest,
)
from credit_ledger.domain.credit_desk import CreditDesk
from credit_ledger.domain.credit_line import CreditLine
from credit_ledger.domain.exceptions import DomainException, NotFoundError
from credit_ledger.infrastructure.database.repositories import LedgerEventRepository
from credit_ledger.infrastructure.database.session import get_db
from credit_ledger.infrastructure.observability.logging import log_ledger_operation
from credit_ledger.infrastructure.observability.metrics import record_drawdown, record_operation

router = APIRouter()


def _credit_line_response(desk: CreditDesk, credit_line: CreditLine) -> CreditLineResponse:
    return CreditLineResponse(
        address=credit_line.address,
        borrower=credit_line.borrower,
        underwriter=credit_line.underwriter,
        limit=credit_line.limit,
        interest_apr=credit_line.interest_apr,
        min_collateral_percent=credit_line.min_collateral_percent,
        payment_period_in_days=credit_line.payment_period_in_days,
        term_in_days=credit_line.term_in_days,
        term_end_block=credit_line.term_end_block,
        balance=credit_line.balance,
        prepayment_balance=credit_line.prepayment_balance,
        state=credit_line.state.value,
        annuity_payment=desk.annuity_payment(credit_line.address),
    )


def _get_credit_line_or_404(desk: CreditDesk, address: str) -> CreditLine:
    try:
        return desk.get_credit_line(address)
    except NotFoundError:
        raise HTTPException(status_code=404, detail={"error": "not_found", "message": "Credit line not found"})


@router.post("/credit-lines", response_model=CreditLineResponse, status_code=201)
def create_credit_line(
    request_body: CreateCreditLineRequest,
    request: Request,
    principal: str = Depends(get_principal),
    desk: CreditDesk = Depends(get_credit_desk),
    db: Session = Depends(get_db),
):
    """
    Create a credit line on behalf of the calling underwriter.

    Flow:
    1. Check the underwriter's aggregate exposure against its governance limit
    2. Create the credit line, owned by the desk
    3. Journal the authorization
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        credit_line = desk.create_credit_line(
            caller=principal,
            borrower=request_body.borrower,
            limit=request_body.limit,
            interest_apr=request_body.interest_apr,
            min_collateral_percent=request_body.min_collateral_percent,
            payment_period_in_days=request_body.payment_period_in_days,
            term_in_days=request_body.term_in_days,
        )
    except DomainException as e:
        raise reject_operation(e, "create_credit_line", request_id)

    try:
        LedgerEventRepository(db).record(
            event_type="credit_line_created",
            principal=principal,
            amount=credit_line.limit,
            credit_line_address=credit_line.address,
            underwriter=principal,
            payload={
                "borrower": credit_line.borrower,
                "interest_apr": str(credit_line.interest_apr),
                "min_collateral_percent": str(credit_line.min_collateral_percent),
                "payment_period_in_days": credit_line.payment_period_in_days,
                "term_in_days": credit_line.term_in_days,
            },
            request_id=request_id,
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise journal_failure(e, "create_credit_line", principal, credit_line.limit, request_id)

    record_operation("create_credit_line", "committed")
    log_ledger_operation(
        request_id, "create_credit_line", principal, credit_line.address, credit_line.limit,
        (time.time() - start_time) * 1000,
    )

    return _credit_line_response(desk, credit_line)


@router.get("/credit-lines/{address}", response_model=CreditLineResponse)
def get_credit_line(address: str, desk: CreditDesk = Depends(get_credit_desk)):
    """Retrieve a credit line with the payment due on its current balance"""
    return _credit_line_response(desk, _get_credit_line_or_404(desk, address))


@router.post("/credit-lines/{address}/drawdown", response_model=CreditLineResponse)
def drawdown(
    address: str,
    request_body: DrawdownRequest,
    request: Request,
    principal: str = Depends(get_principal),
    desk: CreditDesk = Depends(get_credit_desk),
    db: Session = Depends(get_db),
):
    """
    Draw pooled funds down to the borrower.

    The first drawdown activates the term from the supplied block index.
    A pool-side failure aborts the whole drawdown.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        credit_line = desk.drawdown(principal, request_body.amount, address, request_body.current_block)
    except DomainException as e:
        raise reject_operation(e, "drawdown", request_id)

    try:
        LedgerEventRepository(db).record(
            event_type="drawdown",
            principal=principal,
            amount=request_body.amount,
            credit_line_address=address,
            underwriter=credit_line.underwriter,
            payload={"current_block": request_body.current_block, "term_end_block": credit_line.term_end_block},
            request_id=request_id,
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise journal_failure(e, "drawdown", principal, request_body.amount, request_id)

    record_operation("drawdown", "committed")
    record_drawdown(request_body.amount)
    log_ledger_operation(
        request_id, "drawdown", principal, address, request_body.amount, (time.time() - start_time) * 1000
    )

    return _credit_line_response(desk, credit_line)


@router.post("/credit-lines/{address}/prepayment", response_model=CreditLineResponse)
def prepayment(
    address: str,
    request_body: PrepaymentRequest,
    request: Request,
    principal: str = Depends(get_principal),
    desk: CreditDesk = Depends(get_credit_desk),
    db: Session = Depends(get_db),
):
    """Hold a prepayment against the credit line; any principal may pay"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        credit_line = desk.prepayment(principal, address, request_body.amount)
    except DomainException as e:
        raise reject_operation(e, "prepayment", request_id)

    try:
        LedgerEventRepository(db).record(
            event_type="prepayment",
            principal=principal,
            amount=request_body.amount,
            credit_line_address=address,
            underwriter=credit_line.underwriter,
            request_id=request_id,
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise journal_failure(e, "prepayment", principal, request_body.amount, request_id)

    record_operation("prepayment", "committed")
    log_ledger_operation(
        request_id, "prepayment", principal, address, request_body.amount, (time.time() - start_time) * 1000
    )

    return _credit_line_response(desk, credit_line)


@router.get("/credit-lines/{address}/events", response_model=CreditLineEventsResponse)
def get_credit_line_events(
    address: str,
    limit: int = Query(50, ge=1, le=500),
    desk: CreditDesk = Depends(get_credit_desk),
    db: Session = Depends(get_db),
):
    """Journal of committed operations on a credit line, oldest first"""
    _get_credit_line_or_404(desk, address)

    events = LedgerEventRepository(db).list_for_credit_line(address, limit=limit)

    return CreditLineEventsResponse(
        credit_line_address=address,
        events=[
            LedgerEventItem(
                event_type=e.event_type,
                principal=e.principal,
                credit_line_address=e.credit_line_address,
                amount=int(e.amount),
                created_at=e.created_at.isoformat(),
            )
            for e in events
        ],
    )
