"""Data access layer for the ledger operation journal"""

from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from credit_ledger.infrastructure.database.models import LedgerEvent


class LedgerEventRepository:
    """Repository for committed ledger operations"""

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        event_type: str,
        principal: str,
        amount: int,
        credit_line_address: Optional[str] = None,
        underwriter: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ) -> LedgerEvent:
        """Add an event to the current transaction; the caller commits"""
        event = LedgerEvent(
            event_type=event_type,
            principal=principal,
            credit_line_address=credit_line_address,
            underwriter=underwriter,
            amount=str(amount),
            payload=payload,
            request_id=request_id,
        )
        self.db.add(event)
        self.db.flush()  # Get ID without committing
        return event

    def list_for_credit_line(self, credit_line_address: str, limit: int = 50) -> List[LedgerEvent]:
        """Events for one credit line in the order they were committed"""
        return (
            self.db.query(LedgerEvent)
            .filter(LedgerEvent.credit_line_address == credit_line_address)
            .order_by(LedgerEvent.id.asc())
            .limit(limit)
            .all()
        )

    def list_for_principal(self, principal: str, limit: int = 20) -> List[LedgerEvent]:
        """Most recent events initiated by a principal"""
        return (
            self.db.query(LedgerEvent)
            .filter(LedgerEvent.principal == principal)
            .order_by(LedgerEvent.id.desc())
            .limit(limit)
            .all()
        )
