"""Translation of domain errors into HTTP responses"""

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from credit_ledger.domain.exceptions import (
    ArithmeticOverflowError,
    DivideByZeroError,
    DomainException,
    InsufficientPoolFundsError,
    InvalidAmountError,
    InvalidCreditTermsError,
    LimitExceededError,
    NotFoundError,
    PoolAccessError,
    PoolUnavailableError,
    UnauthorizedError,
)
from credit_ledger.infrastructure.observability.logging import log_journal_failure, log_rejected_operation
from credit_ledger.infrastructure.observability.metrics import record_operation

# Checked in order; subclasses before their bases
_ERROR_STATUS = [
    (UnauthorizedError, 403, "unauthorized"),
    (NotFoundError, 404, "not_found"),
    (LimitExceededError, 409, "limit_exceeded"),
    (InsufficientPoolFundsError, 409, "insufficient_pool_funds"),
    (InvalidAmountError, 422, "invalid_amount"),
    (InvalidCreditTermsError, 422, "invalid_credit_terms"),
    (ArithmeticOverflowError, 422, "overflow"),
    (DivideByZeroError, 422, "divide_by_zero"),
    (PoolAccessError, 502, "pool_access_denied"),
    (PoolUnavailableError, 503, "pool_unavailable"),
]


def error_kind(exc: DomainException) -> tuple[int, str]:
    for exc_type, status_code, kind in _ERROR_STATUS:
        if isinstance(exc, exc_type):
            return status_code, kind
    return 500, "domain_error"


def reject_operation(exc: DomainException, operation: str, request_id: str) -> HTTPException:
    """Record a rejected operation and build the HTTP error for it"""
    status_code, kind = error_kind(exc)
    record_operation(operation, kind)

    log_rejected_operation(request_id, operation, kind, status_code, str(exc))

    return HTTPException(status_code=status_code, detail={"error": kind, "message": str(exc)})


def journal_failure(exc: SQLAlchemyError, operation: str, principal: str, amount: int, request_id: str) -> HTTPException:
    """
    Build the HTTP error for an operation the desk applied but the journal lost.

    The desk change is not undone (a drawdown has already moved pool funds),
    so the response says the operation took effect and must not be retried.
    """
    record_operation(operation, "journal_unavailable")
    log_journal_failure(request_id, operation, principal, amount, str(exc))

    return HTTPException(
        status_code=500,
        detail={
            "error": "journal_unavailable",
            "message": f"{operation} was applied but its journal entry could not be written; do not retry",
            "request_id": request_id,
        },
    )
