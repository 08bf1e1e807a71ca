"""Logging configuration module for OCR-REDACT."""

from ocr_redact.logging.setup import get_logger, mask_text, setup_logging

__all__ = ["get_logger", "mask_text", "setup_logging"]
