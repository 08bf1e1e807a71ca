"""Exhaustive exact-sequence search over the normalized OCR token stream."""

import json
from typing import Sequence

from ocr_redact.core.models import MatchCandidate, Variant
from ocr_redact.logging.setup import get_logger

logger = get_logger(__name__)


def describe_exact(variant: Variant) -> str:
    """Build the match type descriptor, e.g. ``exact variant: ["AF","12","HPV"]``."""
    return f"exact variant: {json.dumps(list(variant), separators=(',', ':'))}"


class ExactMatcher:
    """Find every disjoint occurrence of every variant.

    Windows are scanned left to right per variant, in variant order. A window
    touching a position claimed by an earlier match for the same phrase is
    skipped; a matching window claims all of its positions.
    """

    def find(
        self,
        variants: Sequence[Variant],
        tokens: Sequence[str],
        claimed: set[int],
    ) -> list[MatchCandidate]:
        """Search for exact occurrences.

        Args:
            variants: Token sequences to look for.
            tokens: Normalized text of every OCR word, in reading order.
            claimed: Positions already used for this phrase. Updated in place.

        Returns:
            Candidates with confidence 1.0, in discovery order.
        """
        matches: list[MatchCandidate] = []
        total = len(tokens)

        for variant in variants:
            size = len(variant)
            if size == 0 or size > total:
                continue

            for start in range(total - size + 1):
                window = range(start, start + size)
                if any(pos in claimed for pos in window):
                    continue
                if all(tokens[pos] == token for pos, token in zip(window, variant)):
                    claimed.update(window)
                    matches.append(MatchCandidate(
                        positions=tuple(window),
                        confidence=1.0,
                        match_type=describe_exact(variant),
                    ))
                    logger.debug(
                        "Exact occurrence found",
                        extra={"event": "exact_match", "position": start, "size": size},
                    )

        return matches
