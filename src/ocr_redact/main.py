"""
OCR-REDACT Server Entry Point

Run with: python -m ocr_redact.main
Or: uvicorn ocr_redact.api.routes:app --reload
"""

import os
import sys

import uvicorn

from ocr_redact import __version__
from ocr_redact.config.locator_config import load_config_from_yaml_safe, LocatorConfig
from ocr_redact.logging.setup import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


def validate_environment() -> list[str]:
    """Validate environment variables at startup.

    Returns:
        List of validation error messages (empty if all valid).
    """
    errors = []

    port_str = os.getenv("OCR_REDACT_PORT", "8000")
    try:
        port = int(port_str)
        if not (1 <= port <= 65535):
            errors.append(f"OCR_REDACT_PORT must be between 1 and 65535, got: {port}")
    except ValueError:
        errors.append(f"OCR_REDACT_PORT must be an integer, got: {port_str}")

    valid_log_levels = {"debug", "info", "warning", "error", "critical"}
    log_level = os.getenv("OCR_REDACT_LOG_LEVEL", "info").lower()
    if log_level not in valid_log_levels:
        errors.append(f"OCR_REDACT_LOG_LEVEL must be one of {valid_log_levels}, got: {log_level}")

    config_path = os.getenv("OCR_REDACT_CONFIG_PATH")
    if config_path:
        _, error = load_config_from_yaml_safe(config_path)
        if error:
            errors.append(f"OCR_REDACT_CONFIG_PATH: {error}")
    else:
        try:
            LocatorConfig.from_env()
        except ValueError as e:
            errors.append(str(e))

    return errors


def main():
    """Run the OCR-REDACT server."""
    validation_errors = validate_environment()
    if validation_errors:
        for error in validation_errors:
            logger.error(error, extra={"event": "config_error"})
        print("\nConfiguration errors detected:", file=sys.stderr)
        for error in validation_errors:
            print(f"  - {error}", file=sys.stderr)
        sys.exit(1)

    host = os.getenv("OCR_REDACT_HOST", "0.0.0.0")
    port = int(os.getenv("OCR_REDACT_PORT", "8000"))
    reload = os.getenv("OCR_REDACT_RELOAD", "false").lower() == "true"
    log_level = os.getenv("OCR_REDACT_LOG_LEVEL", "info").lower()

    logger.info(
        "Starting OCR-REDACT server",
        extra={
            "event": "server_starting",
            "host": host,
            "port": port,
            "version": __version__,
        },
    )

    uvicorn.run(
        "ocr_redact.api.routes:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )


if __name__ == "__main__":
    main()
