"""
Search variant generation.

OCR rarely tokenizes a phrase the way it was written: "AF12HPV" may come back
as three words, "Jane Doe" as one, "CLACTON-ON-SEA" as three. Each variant is
one hypothesis of how the phrase appears in the OCR token stream.

Example:
    >>> generate_variants("AF12HPV")[:2]
    [('AF12HPV',), ('AF', '12', 'HPV')]
"""

import re

from ocr_redact.core.models import Variant
from ocr_redact.core.normalizer import normalize_token

_LETTER_DIGIT = re.compile(r"([A-Za-z])(\d)")
_DIGIT_LETTER = re.compile(r"(\d)([A-Za-z])")
_SEPARATORS = re.compile(r"[-,_.]")

# Minimum token length before boundary splits are attempted
MIN_SPLIT_LENGTH = 4
# Minimum token length before 3-way splits are attempted
MIN_THREE_WAY_LENGTH = 6


def _tokenize(text: str) -> list[str]:
    return [normalize_token(token) for token in text.split()]


def _is_boundary(left: str, right: str) -> bool:
    """Check for a letter/digit transition between two characters."""
    return bool(
        (_is_letter(left) and right.isdigit() and right.isascii())
        or (left.isdigit() and left.isascii() and _is_letter(right))
    )


def _is_letter(char: str) -> bool:
    return char.isascii() and char.isalpha()


def _boundary_split(token: str) -> list[str]:
    spaced = _LETTER_DIGIT.sub(r"\1 \2", token)
    spaced = _DIGIT_LETTER.sub(r"\1 \2", spaced)
    return _tokenize(spaced)


def _separator_expansion(text: str) -> list[str]:
    expanded = _SEPARATORS.sub(" ", text)
    return [token for token in _tokenize(expanded) if token]


def _exhaustive_splits(token: str) -> list[list[str]]:
    splits: list[list[str]] = []
    length = len(token)

    for i in range(1, length):
        if _is_boundary(token[i - 1], token[i]):
            splits.append([token[:i], token[i:]])

        if length >= MIN_THREE_WAY_LENGTH and 2 <= i <= length - 2:
            for j in range(i + 2, length):
                if _is_boundary(token[j - 1], token[j]):
                    splits.append([token[:i], token[i:j], token[j:]])
                    break

    return [split for split in splits if all(split)]


def generate_variants(text: str) -> list[Variant]:
    """Expand a phrase into deduplicated token sequences.

    Rules, all applied and unioned in this order:

    1. base: whitespace split, each token normalized
    2. merged: all base tokens concatenated (multi-token phrases only)
    3. boundary split at every letter/digit transition (single token of
       length >= 4 only)
    4. separator expansion of ``-,_.`` in the original text
    5. every 2-way and 3-way split at letter/digit transitions for single
       tokens of length >= 4

    Args:
        text: Raw phrase text.

    Returns:
        Variants in first-seen order. Empty if the phrase has no alphanumeric content.
    """
    base = _tokenize(text)
    if not any(base):
        return []

    candidates: list[list[str]] = [base]

    if len(base) > 1:
        candidates.append(["".join(base)])

    if len(base) == 1 and len(base[0]) >= MIN_SPLIT_LENGTH:
        spaced = _boundary_split(base[0])
        if len(spaced) > 1:
            candidates.append(spaced)

    expanded = _separator_expansion(text)
    if expanded and expanded != base:
        candidates.append(expanded)

    if len(base) == 1 and len(base[0]) >= MIN_SPLIT_LENGTH:
        candidates.extend(_exhaustive_splits(base[0]))

    variants: list[Variant] = []
    seen: set[str] = set()
    for candidate in candidates:
        # tokens are alphanumeric, so a space join is a canonical key
        key = " ".join(candidate)
        if key in seen:
            continue
        seen.add(key)
        variants.append(tuple(candidate))

    return variants
