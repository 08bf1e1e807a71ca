"""
OCR-REDACT: Locate sensitive text in document images

Maps phrases flagged as sensitive back onto OCR words and computes the
polygon regions a rendering layer should paint over.
"""

__version__ = "0.1.0"

from ocr_redact.core.locator import LocateResult, PhraseLocator, locate_phrases
from ocr_redact.core.models import MatchRecord, Phrase, Vertex, Word

__all__ = [
    "PhraseLocator",
    "LocateResult",
    "locate_phrases",
    "MatchRecord",
    "Phrase",
    "Vertex",
    "Word",
]
