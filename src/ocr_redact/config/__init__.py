"""Configuration module for OCR-REDACT."""

from ocr_redact.config.locator_config import (
    LocatorConfig,
    load_config_from_yaml,
    load_config_from_yaml_safe,
    resolve_config,
)

__all__ = [
    "LocatorConfig",
    "load_config_from_yaml",
    "load_config_from_yaml_safe",
    "resolve_config",
]
