"""Core modules for locating sensitive phrases in OCR output."""

from ocr_redact.core.bbox import Region, compute_region
from ocr_redact.core.exact import ExactMatcher
from ocr_redact.core.flexible import FlexibleMatcher
from ocr_redact.core.fuzzy import FuzzyMatcher, similarity
from ocr_redact.core.locator import LocateResult, PhraseLocator, locate_phrases
from ocr_redact.core.models import (
    MatchCandidate,
    MatchRecord,
    Phrase,
    Variant,
    Vertex,
    Word,
)
from ocr_redact.core.normalizer import fold_token, normalize_token
from ocr_redact.core.variants import generate_variants

__all__ = [
    "PhraseLocator",
    "LocateResult",
    "locate_phrases",
    # Matchers
    "ExactMatcher",
    "FlexibleMatcher",
    "FuzzyMatcher",
    "similarity",
    "generate_variants",
    "normalize_token",
    "fold_token",
    "compute_region",
    "Region",
    # Data model
    "Word",
    "Vertex",
    "Phrase",
    "Variant",
    "MatchCandidate",
    "MatchRecord",
]
