"""Prometheus metrics collectors for OCR-REDACT."""

from prometheus_client import Counter, Gauge, Histogram

# Request metrics
REQUEST_LATENCY = Histogram(
    "ocr_redact_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint", "status"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

REQUEST_COUNT = Counter(
    "ocr_redact_requests_total",
    "Total request count",
    ["method", "endpoint", "status"],
)

ACTIVE_REQUESTS = Gauge(
    "ocr_redact_active_requests",
    "Currently processing requests",
)

# Locator metrics
PHRASES_PROCESSED = Counter(
    "ocr_redact_phrases_processed_total",
    "Phrases submitted for location",
    ["label"],
)

MATCHES_FOUND = Counter(
    "ocr_redact_matches_total",
    "Redaction regions emitted",
    ["strategy"],
)

UNMATCHED_PHRASES = Counter(
    "ocr_redact_unmatched_phrases_total",
    "Phrases that could not be located in the OCR words",
)

FLEXIBLE_SEARCH_TRUNCATED = Counter(
    "ocr_redact_flexible_search_truncated_total",
    "Flexible searches stopped at the exploration cap",
)

LOCATE_DURATION = Histogram(
    "ocr_redact_locate_duration_seconds",
    "Phrase location latency",
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)
