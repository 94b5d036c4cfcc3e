"""
DebtFree - Debt Stress Analyzer API.
Scores debt portfolios, projects repayment strategies and generates heuristic insights.
Features strict input validation, audit logging, and distributed tracing.
"""
from contextlib import asynccontextmanager
import time
from typing import Any, Awaitable, Callable, Dict
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from debtfree.analysis.router import router as analysis_router
from debtfree.core.config import settings
from debtfree.core.logger import logger
from debtfree.insights.router import router as insights_router
from debtfree.ledger.router import router as ledger_router
from debtfree.payoff.router import router as payoff_router
from debtfree.stress.router import router as stress_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management (startup/shutdown hooks)."""
    logger.info(f"Initializing {settings.APP_NAME} v{settings.VERSION}")

    yield

    logger.info("Shutting down application")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description=(
        "Debt stress analyzer: composite stress score, avalanche / snowball / hybrid payoff "
        "projections and rule-based insights. Stateless; nothing is persisted."
    ),
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_correlation_id(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """
    Middleware for distributed tracing.
    Injects a unique Correlation ID into the request context and propagates it to the response headers.
    """
    correlation_id = request.headers.get("X-Correlation-ID", str(uuid4()))
    request.state.correlation_id = correlation_id

    start_time = time.time()

    logger.info(
        f"Request: {request.method} {request.url.path}",
        extra={"correlation_id": correlation_id}
    )

    response = await call_next(request)

    process_time = time.time() - start_time
    response.headers["X-Correlation-ID"] = correlation_id
    response.headers["X-Process-Time"] = str(process_time)

    logger.info(
        f"Response: {response.status_code} | {process_time:.3f}s",
        extra={"correlation_id": correlation_id}
    )

    return response


# Router Registration
app.include_router(ledger_router, prefix="/ledger")
app.include_router(stress_router, prefix="/stress")
app.include_router(payoff_router, prefix="/payoff")
app.include_router(insights_router, prefix="/insights")
app.include_router(analysis_router, prefix="/analysis")


@app.get("/api-info", tags=["Health"])
def api_info() -> Dict[str, Any]:
    """
    Endpoint exposing API metadata and service discovery links.
    """
    return {
        "app": settings.APP_NAME,
        "version": settings.VERSION,
        "status": "online",
        "endpoints": {
            "sample_ledger": "/ledger/sample",
            "validate_ledger": "/ledger/validate",
            "stress_score": "/stress/score",
            "simulate": "/payoff/simulate",
            "compare": "/payoff/compare",
            "action_plan": "/payoff/plan",
            "insights": "/insights",
            "insight_rules": "/insights/rules",
            "analysis": "/analysis",
            "docs": "/docs",
            "redoc": "/redoc"
        }
    }


@app.get("/health", tags=["Health"])
def health_check() -> Dict[str, str]:
    """
    Liveness probe endpoint for orchestration systems.
    """
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.VERSION
    }


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Attaches the correlation id to every HTTP error body."""
    correlation_id = getattr(request.state, "correlation_id", "N/A")

    logger.info(
        f"HTTPException: {exc.status_code} | {exc.detail}",
        extra={"correlation_id": correlation_id}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "correlation_id": correlation_id}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception barrier.
    Captures unhandled exceptions, logs stack traces with Correlation IDs,
    and returns a sanitized 500 Internal Server Error response.
    """
    correlation_id = getattr(request.state, "correlation_id", "N/A")

    logger.error(
        f"Unhandled exception: {str(exc)}",
        exc_info=True,
        extra={"correlation_id": correlation_id}
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal Server Error",
            "correlation_id": correlation_id
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "debtfree.main:app",
        host="0.0.0.0",  # nosec
        port=8000,
        reload=settings.DEBUG
    )
