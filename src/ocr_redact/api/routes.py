"""
FastAPI routes for the OCR-REDACT service.

The service receives OCR words and sensitive phrases from upstream
collaborators and returns the regions to redact.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException

from ocr_redact import __version__
from ocr_redact.api.middleware import RequestLoggingMiddleware
from ocr_redact.api.models import (
    HealthResponse,
    LocateRequest,
    LocateResponse,
    MatchRecordModel,
)
from ocr_redact.config.locator_config import resolve_config
from ocr_redact.core.locator import PhraseLocator
from ocr_redact.logging.setup import get_logger, setup_logging
from ocr_redact.metrics.collectors import (
    FLEXIBLE_SEARCH_TRUNCATED,
    LOCATE_DURATION,
    MATCHES_FOUND,
    PHRASES_PROCESSED,
    UNMATCHED_PHRASES,
)

setup_logging()
logger = get_logger(__name__)

_locator: Optional[PhraseLocator] = None


def get_locator() -> PhraseLocator:
    """Get or create the locator configured from file or environment."""
    global _locator
    if _locator is None:
        _locator = PhraseLocator(resolve_config())
    return _locator


def reset_locator() -> None:
    """Drop the cached locator so the next call reloads configuration."""
    global _locator
    _locator = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    locator = get_locator()
    logger.info(
        "Starting OCR-REDACT service",
        extra={"version": __version__, "fuzzy_threshold": locator.config.fuzzy_threshold},
    )
    yield
    logger.info("Shutting down OCR-REDACT service")


app = FastAPI(
    title="OCR-REDACT",
    description="Locate sensitive phrases in OCR output and compute redaction regions",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="ok", version=__version__)


@app.get("/metrics", tags=["Monitoring"])
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


@app.post("/v1/locate", response_model=LocateResponse, tags=["Redaction"])
async def locate(request: LocateRequest):
    """Locate every occurrence of each phrase among the OCR words.

    Phrases that cannot be located simply produce no matches; the call
    succeeds with whatever subset was found.
    """
    words = [w.to_word() for w in request.words]
    phrases = [p.to_phrase() for p in request.phrases]

    start = time.perf_counter()
    result = get_locator().locate(words, phrases)
    LOCATE_DURATION.observe(time.perf_counter() - start)

    for phrase in phrases:
        PHRASES_PROCESSED.labels(label=phrase.label).inc()
    for strategy, count in result.strategy_counts.items():
        MATCHES_FOUND.labels(strategy=strategy).inc(count)
    if result.unmatched:
        UNMATCHED_PHRASES.inc(len(result.unmatched))
    if result.truncated_searches:
        FLEXIBLE_SEARCH_TRUNCATED.inc(result.truncated_searches)

    logger.info(
        "Locate completed",
        extra={
            "event": "locate_completed",
            "words": len(words),
            "phrases": len(phrases),
            "matches": result.match_count,
            "unmatched": len(result.unmatched),
        },
    )

    return LocateResponse(
        matches=[MatchRecordModel.from_record(r) for r in result.records],
        phrase_count=len(phrases),
        match_count=result.match_count,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as ``{"error": {...}}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "message": exc.detail,
                "type": "invalid_request_error",
                "code": exc.status_code,
            }
        },
    )
