"""Prometheus metrics module for OCR-REDACT."""

from ocr_redact.metrics.collectors import (
    ACTIVE_REQUESTS,
    FLEXIBLE_SEARCH_TRUNCATED,
    LOCATE_DURATION,
    MATCHES_FOUND,
    PHRASES_PROCESSED,
    REQUEST_COUNT,
    REQUEST_LATENCY,
    UNMATCHED_PHRASES,
)

__all__ = [
    "REQUEST_LATENCY",
    "REQUEST_COUNT",
    "ACTIVE_REQUESTS",
    "PHRASES_PROCESSED",
    "MATCHES_FOUND",
    "UNMATCHED_PHRASES",
    "FLEXIBLE_SEARCH_TRUNCATED",
    "LOCATE_DURATION",
]
