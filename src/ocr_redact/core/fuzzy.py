"""
Fuzzy matching for OCR character errors.

Compares the case-folded phrase against the concatenation of every window of
1 to ``max_window`` consecutive OCR words, scoring by normalized Levenshtein
distance. Overlapping hits are resolved by greedy non-max suppression.
"""

from dataclasses import dataclass
from typing import Sequence

from rapidfuzz.distance import Levenshtein

from ocr_redact.core.models import MatchCandidate
from ocr_redact.core.normalizer import fold_token
from ocr_redact.logging.setup import get_logger

logger = get_logger(__name__)

# Tolerance for similarities that land a rounding error below the threshold
_EPSILON = 1e-9


@dataclass(frozen=True)
class _Window:
    start: int
    span: int
    similarity: float

    @property
    def positions(self) -> tuple[int, ...]:
        return tuple(range(self.start, self.start + self.span))


def similarity(a: str, b: str) -> float:
    """Levenshtein similarity in [0, 1].

    Examples:
        >>> similarity("john", "j0hn")
        0.75
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1 - Levenshtein.distance(a, b) / longest


class FuzzyMatcher:
    """Edit-distance search over short word windows.

    Attributes:
        threshold: Minimum similarity for a window to be accepted.
        max_window: Longest window, in words.
        trigger_below: Run only when fewer matches than this exist.
    """

    def __init__(
        self,
        threshold: float = 0.85,
        max_window: int = 5,
        trigger_below: int = 2,
    ) -> None:
        self.threshold = threshold
        self.max_window = max_window
        self.trigger_below = trigger_below

    def applies(self, match_count: int) -> bool:
        return match_count < self.trigger_below

    def accepts(self, score: float) -> bool:
        """Check a similarity score against the threshold."""
        return score + _EPSILON >= self.threshold

    def find(
        self,
        phrase: str,
        words: Sequence[str],
        claimed: set[int],
    ) -> list[MatchCandidate]:
        """Locate approximate occurrences of a phrase.

        Args:
            phrase: Raw phrase text.
            words: Raw or normalized text of every OCR word, in reading order.
            claimed: Positions already used for this phrase. Updated in place.

        Returns:
            Accepted candidates, highest similarity first.
        """
        target = fold_token(phrase)
        if not target:
            return []

        folded = [fold_token(word) for word in words]
        windows: list[_Window] = []

        for span in range(1, min(self.max_window, len(folded)) + 1):
            for start in range(len(folded) - span + 1):
                candidate = "".join(folded[start:start + span])
                if not candidate:
                    continue
                score = similarity(target, candidate)
                if self.accepts(score):
                    windows.append(_Window(start=start, span=span, similarity=score))

        windows.sort(key=lambda w: w.similarity, reverse=True)

        accepted: list[_Window] = []
        for window in windows:
            if any(
                abs(prev.start - window.start) < max(prev.span, window.span)
                for prev in accepted
            ):
                continue
            if any(pos in claimed for pos in window.positions):
                continue
            accepted.append(window)
            claimed.update(window.positions)

        logger.debug(
            "Fuzzy search complete",
            extra={"event": "fuzzy_search", "candidates": len(windows), "accepted": len(accepted)},
        )

        return [
            MatchCandidate(
                positions=window.positions,
                confidence=window.similarity,
                match_type=f"fuzzy match ({window.similarity * 100:.1f}%)",
            )
            for window in accepted
        ]
