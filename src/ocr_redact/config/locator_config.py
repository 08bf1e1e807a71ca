"""Matcher configuration.

Every tunable constant of the phrase locator lives in ``LocatorConfig``.
Values can be supplied directly, loaded from YAML, or read from environment
variables prefixed with ``OCR_REDACT_``.

Example YAML configuration:

    locator:
      fuzzy_threshold: 0.9
      flexible_max_span: 15
      flexible_max_states: 5000
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

ENV_PREFIX = "OCR_REDACT_"


@dataclass
class LocatorConfig:
    """Thresholds and limits for the matching pipeline.

    Attributes:
        fuzzy_threshold: Minimum Levenshtein similarity for fuzzy matches.
        fuzzy_max_window: Longest word window compared by the fuzzy matcher.
        fuzzy_trigger_below: Fuzzy matching runs when fewer matches exist.
        flexible_min_variant_length: Shortest variant eligible for flexible matching.
        flexible_max_span: Largest word span for a flexible match.
        flexible_min_confidence: Confidence floor for flexible matches.
        flexible_top_k: Maximum flexible matches per phrase.
        flexible_max_states: Search states explored per variant before giving up.
    """

    fuzzy_threshold: float = 0.85
    fuzzy_max_window: int = 5
    fuzzy_trigger_below: int = 2
    flexible_min_variant_length: int = 4
    flexible_max_span: int = 20
    flexible_min_confidence: float = 0.7
    flexible_top_k: int = 3
    flexible_max_states: int = 10_000

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not 0.0 <= self.fuzzy_threshold <= 1.0:
            raise ValueError(
                f"fuzzy_threshold must be between 0.0 and 1.0, got {self.fuzzy_threshold}"
            )
        if not 0.0 <= self.flexible_min_confidence <= 1.0:
            raise ValueError(
                "flexible_min_confidence must be between 0.0 and 1.0, "
                f"got {self.flexible_min_confidence}"
            )
        for name in (
            "fuzzy_max_window",
            "flexible_min_variant_length",
            "flexible_max_span",
            "flexible_top_k",
            "flexible_max_states",
        ):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.fuzzy_trigger_below < 0:
            raise ValueError(
                f"fuzzy_trigger_below cannot be negative, got {self.fuzzy_trigger_below}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LocatorConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown locator settings: {', '.join(sorted(unknown))}")
        return cls(**{key: _coerce(key, value) for key, value in data.items()})

    @classmethod
    def from_env(cls) -> "LocatorConfig":
        """Load configuration from environment variables.

        Environment variables:
            OCR_REDACT_FUZZY_THRESHOLD
            OCR_REDACT_FUZZY_MAX_WINDOW
            OCR_REDACT_FUZZY_TRIGGER_BELOW
            OCR_REDACT_FLEXIBLE_MIN_VARIANT_LENGTH
            OCR_REDACT_FLEXIBLE_MAX_SPAN
            OCR_REDACT_FLEXIBLE_MIN_CONFIDENCE
            OCR_REDACT_FLEXIBLE_TOP_K
            OCR_REDACT_FLEXIBLE_MAX_STATES

        Returns:
            LocatorConfig with defaults for unset variables.

        Raises:
            ValueError: If a variable is set to an invalid value.
        """
        values: dict[str, Any] = {}
        for f in fields(cls):
            raw = os.getenv(ENV_PREFIX + f.name.upper())
            if raw is not None and raw.strip():
                values[f.name] = raw.strip()
        return cls.from_dict(values)


def _coerce(name: str, value: Any) -> Any:
    target = float if name in ("fuzzy_threshold", "flexible_min_confidence") else int
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        return target(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}") from None


def load_config_from_yaml(path: Path | str) -> LocatorConfig:
    """Load locator configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        LocatorConfig with file values over the defaults.

    Raises:
        FileNotFoundError: If the configuration file doesn't exist.
        ValueError: If the YAML structure or a value is invalid.
        yaml.YAMLError: If the YAML is malformed.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return LocatorConfig()

    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML structure: expected dict, got {type(data).__name__}")

    section = data.get("locator", {})
    if section is None:
        return LocatorConfig()
    if not isinstance(section, dict):
        raise ValueError(
            f"Invalid locator structure: expected dict, got {type(section).__name__}"
        )

    return LocatorConfig.from_dict(section)


def load_config_from_yaml_safe(path: Path | str) -> tuple[LocatorConfig, Optional[str]]:
    """Load configuration, returning defaults and an error message on failure.

    Example:
        >>> config, error = load_config_from_yaml_safe("config/locator.yaml")
        >>> if error:
        ...     print(f"Warning: {error}")
    """
    try:
        return load_config_from_yaml(path), None
    except FileNotFoundError as e:
        return LocatorConfig(), str(e)
    except ValueError as e:
        return LocatorConfig(), f"Configuration error: {e}"
    except yaml.YAMLError as e:
        return LocatorConfig(), f"YAML parsing error: {e}"


def resolve_config(config_path: Optional[Path | str] = None) -> LocatorConfig:
    """Pick the active configuration.

    A YAML file (argument, else ``OCR_REDACT_CONFIG_PATH``) wins over
    environment variables, which win over defaults.
    """
    config_path = config_path or os.getenv(ENV_PREFIX + "CONFIG_PATH")
    if config_path:
        return load_config_from_yaml(config_path)
    return LocatorConfig.from_env()
