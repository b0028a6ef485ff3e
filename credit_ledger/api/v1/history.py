"""GET /v1/ledger/history - Fetch a principal's committed ledger operations"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from credit_ledger.api.v1.schemas import HistoryResponse, LedgerEventItem
from credit_ledger.infrastructure.database.session import get_db
from credit_ledger.infrastructure.database.repositories import LedgerEventRepository

router = APIRouter()


@router.get("/ledger/history", response_model=HistoryResponse)
def get_ledger_history(
    principal: str = Query(..., description="Principal identifier"),
    db: Session = Depends(get_db),
):
    """
    Retrieve recent ledger operations initiated by a principal.

    Returns:
        Limit changes, credit line creations, drawdowns and prepayments, newest first
    """
    event_repo = LedgerEventRepository(db)
    events = event_repo.list_for_principal(principal, limit=20)

    history_items = [
        LedgerEventItem(
            event_type=e.event_type,
            principal=e.principal,
            credit_line_address=e.credit_line_address,
            amount=int(e.amount),
            created_at=e.created_at.isoformat(),
        )
        for e in events
    ]

    return HistoryResponse(principal=principal, events=history_items)
