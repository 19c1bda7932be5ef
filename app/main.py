"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from app.api.routes import health, market
from app.core.config import settings
from app.core.exceptions import ConversionFailure, MarketError, ReadFailure, SubmissionFailure
from app.core.logging import get_logger, setup_logging
from app.services.dispatcher import MutationDispatcher
from app.services.ledger import HttpLedger
from app.services.sync import SyncOrchestrator
from app.web.routes import web_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    # Startup: connect to the ledger unless one was installed up front
    ledger = getattr(app.state, "ledger", None)
    owned_client = None
    if ledger is None:
        owned_client = HttpLedger.from_settings(settings)
        ledger = owned_client

    orchestrator = SyncOrchestrator(ledger, fetch_concurrency=settings.FETCH_CONCURRENCY)
    app.state.orchestrator = orchestrator
    app.state.dispatcher = MutationDispatcher(ledger, orchestrator)

    try:
        await orchestrator.start()
    except MarketError as exc:
        logger.error("Initial marketplace sync failed: %s", exc)

    yield

    # Shutdown: close the ledger HTTP client we opened
    if owned_client is not None:
        await owned_client.aclose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Property marketplace client for a remote ledger",
    lifespan=lifespan,
)

# Session middleware for flash messages
app.add_middleware(
    SessionMiddleware,  # type: ignore[arg-type]
    secret_key=settings.SECRET_KEY,
    session_cookie="estate_market_session",
    max_age=86400,  # 1 day
    same_site="lax",
    https_only=not settings.DEBUG,
)


@app.exception_handler(ReadFailure)
async def read_failure_handler(request: Request, exc: ReadFailure) -> JSONResponse:
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(SubmissionFailure)
async def submission_failure_handler(request: Request, exc: SubmissionFailure) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(ConversionFailure)
async def conversion_failure_handler(request: Request, exc: ConversionFailure) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# Include API routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(market.router, prefix="/api")

# Include web routes (Jinja2 frontend)
app.include_router(web_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
