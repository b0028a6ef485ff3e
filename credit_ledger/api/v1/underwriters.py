"""Underwriter governance endpoints - administrator limit setting and exposure queries"""

import time
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from credit_ledger.api.dependencies import get_credit_desk, get_principal, get_request_id
from credit_ledger.api.errors import journal_failure, reject_operation
from credit_ledger.api.v1.schemas import GovernanceLimitRequest, UnderwriterResponse
from credit_ledger.domain.credit_desk import CreditDesk
from credit_ledger.domain.exceptions import DomainException, NotFoundError
from credit_ledger.infrastructure.database.repositories import LedgerEventRepository
from credit_ledger.infrastructure.database.session import get_db
from credit_ledger.infrastructure.observability.logging import log_ledger_operation
from credit_ledger.infrastructure.observability.metrics import record_operation

router = APIRouter()


def _underwriter_response(desk: CreditDesk, underwriter_id: str) -> UnderwriterResponse:
    return UnderwriterResponse(
        underwriter_id=underwriter_id,
        governance_limit=desk.underwriter_governance_limit(underwriter_id),
        current_exposure=desk.underwriter_exposure(underwriter_id),
        credit_lines=[line.address for line in desk.underwriter_credit_lines(underwriter_id)],
    )


@router.put("/underwriters/{underwriter_id}/governance-limit", response_model=UnderwriterResponse)
def set_governance_limit(
    underwriter_id: str,
    request_body: GovernanceLimitRequest,
    request: Request,
    principal: str = Depends(get_principal),
    desk: CreditDesk = Depends(get_credit_desk),
    db: Session = Depends(get_db),
):
    """
    Set an underwriter's governance limit (administrator only).

    Lowering a limit below current exposure keeps existing credit lines and
    blocks only future authorizations.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        desk.set_underwriter_governance_limit(principal, underwriter_id, request_body.limit)
    except DomainException as e:
        raise reject_operation(e, "set_governance_limit", request_id)

    try:
        LedgerEventRepository(db).record(
            event_type="governance_limit_set",
            principal=principal,
            amount=request_body.limit,
            underwriter=underwriter_id,
            request_id=request_id,
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise journal_failure(e, "set_governance_limit", principal, request_body.limit, request_id)

    record_operation("set_governance_limit", "committed")
    log_ledger_operation(
        request_id, "set_governance_limit", principal, None, request_body.limit, (time.time() - start_time) * 1000
    )

    return _underwriter_response(desk, underwriter_id)


@router.get("/underwriters/{underwriter_id}", response_model=UnderwriterResponse)
def get_underwriter(underwriter_id: str, desk: CreditDesk = Depends(get_credit_desk)):
    """
    Retrieve an underwriter's limit, exposure and credit lines.

    Returns:
        Credit line addresses in authorization order
    """
    try:
        return _underwriter_response(desk, underwriter_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail={"error": "not_found", "message": "Underwriter not found"})
