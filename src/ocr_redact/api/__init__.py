"""HTTP API for OCR-REDACT."""

from ocr_redact.api.routes import app, get_locator

__all__ = ["app", "get_locator"]
