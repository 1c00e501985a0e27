"""FastAPI application exposing the insight service as a REST API."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from spendr_insights.config import settings
from spendr_insights.exceptions import DimensionMismatchError, GenerationError, SpendrError
from spendr_insights.service import InsightService, build_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and build the service (and its adapters) once per process."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if getattr(app.state, "service", None) is None:
        app.state.service = build_service(settings)
    yield


app = FastAPI(
    title="Spendr Insights API",
    version="0.1.0",
    description="Retrieval-grounded spending insights over expense records.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_service(request: Request) -> InsightService:
    return request.app.state.service


# ── Request / Response schemas ────────────────────────────────────────
class InsightRequest(BaseModel):
    """Incoming question from the user."""

    query: str


class InsightResponse(BaseModel):
    """Insight text plus the outcome tag."""

    insight: str
    kind: str


class IngestResponse(BaseModel):
    embedded: int
    failed: int


class DebugResponse(BaseModel):
    entries: list[dict[str, Any]]


class HealthResponse(BaseModel):
    status: str
    vector_index: bool
    expense_store: bool


# ── Error mapping ─────────────────────────────────────────────────────
@app.exception_handler(SpendrError)
async def spendr_error_handler(request: Request, exc: SpendrError) -> JSONResponse:
    if isinstance(exc, DimensionMismatchError):
        status = 500
    elif isinstance(exc, GenerationError):
        status = 502
    else:
        status = 503
    logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(status_code=status, content={"detail": str(exc), "error": type(exc).__name__})


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health", response_model=HealthResponse)
def health(service: InsightService = Depends(get_service)) -> HealthResponse:
    """Report whether the vector index and the expense store are reachable."""
    return HealthResponse(**service.health())


@app.post("/ai/insight", response_model=InsightResponse)
def insight(request: InsightRequest, service: InsightService = Depends(get_service)) -> InsightResponse:
    """Answer a spending question with a grounded insight."""
    result = service.get_insight_detailed(request.query)
    return InsightResponse(insight=result.text, kind=result.kind.value)


@app.post("/ai/embed", response_model=IngestResponse)
def embed(service: InsightService = Depends(get_service)) -> IngestResponse:
    """(Re)build the vector index from the expense store."""
    report = service.ingest()
    return IngestResponse(embedded=report.embedded, failed=report.failed)


@app.get("/ai/debug", response_model=DebugResponse)
def debug(
    limit: int = Query(default=settings.debug_peek_limit, ge=1, le=1000),
    service: InsightService = Depends(get_service),
) -> DebugResponse:
    """Peek at entries currently stored in the vector index."""
    return DebugResponse(entries=service.debug_peek(limit))


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "5000")))
