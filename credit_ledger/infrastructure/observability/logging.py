"""Structured JSON logging for ledger operations and pool custody calls"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class LedgerJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping each record with UTC time, level and service name"""

    def __init__(self, *args: Any, service_name: str = "credit-ledger", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "credit-ledger") -> None:
    """Route the root logger to stdout as JSON, replacing any existing handlers"""
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(LedgerJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s", service_name=service_name))
    root.addHandler(handler)


def log_ledger_operation(
    request_id: str,
    operation: str,
    principal: str,
    credit_line_address: str | None,
    amount: int,
    duration_ms: float,
) -> None:
    """Log structured outcome of a committed ledger operation"""
    logging.info(
        "Ledger operation committed",
        extra={
            "request_id": request_id,
            "step": "ledger_operation_committed",
            "operation": operation,
            "principal": principal,
            "credit_line_address": credit_line_address,
            # WAD values exceed 2**53
            "amount": str(amount),
            "duration_ms": duration_ms,
        },
    )


def log_rejected_operation(request_id: str, operation: str, error_kind: str, status_code: int, message: str) -> None:
    """Log a refused operation; server-side failures (5xx) at error, caller mistakes at warning"""
    level = logging.ERROR if status_code >= 500 else logging.WARNING
    logging.log(
        level,
        f"{operation} rejected: {message}",
        extra={
            "request_id": request_id,
            "step": "ledger_operation_rejected",
            "operation": operation,
            "error": error_kind,
            "status_code": status_code,
        },
    )


def log_journal_failure(request_id: str, operation: str, principal: str, amount: int, error: str) -> None:
    """Log an operation that took effect on the desk but has no journal entry"""
    logging.error(
        f"{operation} applied but not journaled: {error}",
        extra={
            "request_id": request_id,
            "step": "ledger_journal_failed",
            "operation": operation,
            "principal": principal,
            "amount": str(amount),
        },
    )
