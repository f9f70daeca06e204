"""
FastAPI application factory
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from budgie.config import EVENT_STORE_SQL, get_settings
from budgie.domain.errors import (
    BudgetError,
    MigrationLoopError,
    StoreUnavailable,
    UnknownAccount,
    UnknownEventType,
    UnknownTarget,
)
from budgie.infrastructure.db.session import check_db_connection
from budgie.api.v1 import accounts, budgets, targets, transactions

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Application factory - builds and configures the FastAPI app

    Returns:
        Configured FastAPI app
    """
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(
        title="Budgie",
        debug=settings.DEBUG,
    )

    # Error mapping - domain errors carry their own message
    @app.exception_handler(BudgetError)
    async def budget_error_handler(request: Request, exc: BudgetError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(UnknownAccount)
    @app.exception_handler(UnknownTarget)
    async def not_found_handler(request: Request, exc: BudgetError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StoreUnavailable)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
        logger.exception("Event store unavailable on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.exception_handler(UnknownEventType)
    @app.exception_handler(MigrationLoopError)
    async def corrupt_log_handler(request: Request, exc: BudgetError):
        logger.exception("Event log cannot be replayed on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    # Routers
    app.include_router(accounts.router)
    app.include_router(transactions.router)
    app.include_router(targets.router)
    app.include_router(budgets.router)

    # Health checks
    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    @app.get("/ready", response_class=PlainTextResponse, tags=["system"])
    def ready():
        """Readiness check endpoint (checks the database for the sql backend)"""
        if get_settings().EVENT_STORE_BACKEND == EVENT_STORE_SQL:
            check_db_connection()
        return "ok"

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "budgie.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
