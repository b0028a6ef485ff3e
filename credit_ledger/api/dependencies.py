"""Dependency injection for FastAPI endpoints"""

from fastapi import Header, Request
from credit_ledger.config import Settings, settings
from credit_ledger.domain.credit_desk import CreditDesk
from credit_ledger.domain.pool import CustodyCapability, InMemoryPool
from credit_ledger.infrastructure.clients.pool import HttpPoolClient

DESK_PRINCIPAL = "credit-desk"


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_principal(x_principal_id: str = Header(..., alias="X-Principal-Id", min_length=1)) -> str:
    """Caller identity, established by the gateway in front of this service"""
    return x_principal_id


def get_credit_desk(request: Request) -> CreditDesk:
    """Provide the process-wide credit desk"""
    return request.app.state.credit_desk


def build_credit_desk(config: Settings = settings) -> CreditDesk:
    """
    Wire a credit desk from configuration.

    With a pool API configured, drawdowns go through the remote custody
    service using the configured capability token. Otherwise an in-memory
    pool is created, optionally seeded, and its ownership handed to the desk.
    """
    if config.pool_api_base:
        pool = HttpPoolClient(base_url=config.pool_api_base, timeout=config.http_timeout_seconds)
        capability = CustodyCapability(holder=DESK_PRINCIPAL, token=config.pool_capability_token)
    else:
        pool = InMemoryPool(owner=config.admin_principal)
        if config.pool_seed_funds > 0:
            pool.deposit(config.pool_seed_funds, sender=config.admin_principal)
        capability = pool.transfer_ownership(config.admin_principal, DESK_PRINCIPAL)

    return CreditDesk(
        admin=config.admin_principal,
        blocks_per_day=config.blocks_per_day,
        pool=pool,
        pool_capability=capability,
    )
