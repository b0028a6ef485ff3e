"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from credit_ledger.api.dependencies import build_credit_desk
from credit_ledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from credit_ledger.api.v1 import annuity, credit_lines, history, underwriters
from credit_ledger.domain.credit_desk import CreditDesk
from credit_ledger.infrastructure.database.session import init_db
from credit_ledger.infrastructure.observability.logging import setup_logging
from credit_ledger.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app(credit_desk: CreditDesk | None = None) -> FastAPI:
    """Create and configure FastAPI application around a credit desk"""
    app = FastAPI(
        title="Credit Ledger",
        description="Underwriting limits, credit line drawdowns, prepayments and annuity payments",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.credit_desk = credit_desk or build_credit_desk(settings)

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(underwriters.router, prefix="/v1", tags=["underwriters"])
    app.include_router(credit_lines.router, prefix="/v1", tags=["credit-lines"])
    app.include_router(annuity.router, prefix="/v1", tags=["annuity"])
    app.include_router(history.router, prefix="/v1", tags=["history"])

    return app


app = create_app()
