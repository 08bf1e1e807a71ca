"""
Flexible multi-word matching.

Long phrases such as postal addresses are often wrapped across lines or
interleaved with other text in OCR reading order, so their words are present
but not contiguous. This matcher assigns one occurrence to every token of a
variant and scores each assignment by how tightly it clusters.

The search is depth-first over an explicit stack. Each depth only offers the
occurrences that keep the span within ``max_span``, options that reuse or
touch a claimed position are skipped, and exploration stops after
``max_states`` examined options.
"""

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Sequence

from ocr_redact.core.models import MatchCandidate, Variant
from ocr_redact.logging.setup import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class _Combination:
    positions: tuple[int, ...]
    confidence: float
    size: int


def span_of(positions: Sequence[int]) -> int:
    """Inclusive index distance from the first to the last position."""
    return max(positions) - min(positions) + 1


class FlexibleMatcher:
    """Backtracking search for scattered phrase words.

    Attributes:
        min_variant_length: Only variants with at least this many tokens qualify.
        max_span: Largest accepted span.
        min_confidence: Confidence floor for accepted combinations.
        top_k: Number of best-ranked combinations considered; overlapping ones
            among them are dropped.
        max_states: Exploration cap per variant.
    """

    def __init__(
        self,
        min_variant_length: int = 4,
        max_span: int = 20,
        min_confidence: float = 0.7,
        top_k: int = 3,
        max_states: int = 10_000,
    ) -> None:
        self.min_variant_length = min_variant_length
        self.max_span = max_span
        self.min_confidence = min_confidence
        self.top_k = top_k
        self.max_states = max_states

    def applies(self, variants: Sequence[Variant], exact_count: int) -> bool:
        """Run only when exact matching found nothing and a long variant exists."""
        return exact_count == 0 and any(
            len(variant) >= self.min_variant_length for variant in variants
        )

    def score(self, span: int) -> float:
        """Confidence for a combination of the given span."""
        return max(self.min_confidence, 1 - span / 100)

    def find(
        self,
        variants: Sequence[Variant],
        tokens: Sequence[str],
        claimed: set[int],
    ) -> tuple[list[MatchCandidate], bool]:
        """Locate scattered occurrences of the long variants.

        Args:
            variants: All variants of the phrase; short ones are ignored.
            tokens: Normalized text of every OCR word, in reading order.
            claimed: Positions already used for this phrase. Updated in place.

        Returns:
            (accepted candidates, whether any search hit the state cap)
        """
        combinations: list[_Combination] = []
        truncated = False

        for variant in variants:
            if len(variant) < self.min_variant_length:
                continue

            occurrences = [
                [pos for pos, text in enumerate(tokens) if text == token]
                for token in variant
            ]
            if any(not positions for positions in occurrences):
                logger.debug(
                    "Variant has tokens missing from the document",
                    extra={"event": "flexible_variant_skipped", "size": len(variant)},
                )
                continue

            found, hit_cap = self._search(occurrences, claimed)
            truncated = truncated or hit_cap
            for positions in found:
                combinations.append(_Combination(
                    positions=positions,
                    confidence=self.score(span_of(positions)),
                    size=len(variant),
                ))

        combinations.sort(key=lambda c: c.confidence, reverse=True)

        matches: list[MatchCandidate] = []
        for combination in combinations[:self.top_k]:
            if any(pos in claimed for pos in combination.positions):
                continue
            claimed.update(combination.positions)
            matches.append(MatchCandidate(
                positions=combination.positions,
                confidence=combination.confidence,
                match_type=f"flexible match ({combination.size} words)",
            ))

        return matches, truncated

    def _window(self, options: list[int], chosen: list[int]) -> list[int]:
        """Slice bounds of the options that keep the span within ``max_span``."""
        low, high = min(chosen), max(chosen)
        start = bisect_left(options, high - self.max_span + 1)
        end = bisect_right(options, low + self.max_span - 1)
        return [start, end]

    def _search(
        self,
        occurrences: list[list[int]],
        claimed: set[int],
    ) -> tuple[list[tuple[int, ...]], bool]:
        """Enumerate complete assignments in depth-first order.

        Every examined option counts toward ``max_states``.
        """
        results: list[tuple[int, ...]] = []
        size = len(occurrences)
        chosen: list[int] = []
        used: set[int] = set()
        # frames[d] is [next index, end index] into occurrences[d]
        frames: list[list[int]] = [[0, len(occurrences[0])]]
        states = 0

        while frames:
            depth = len(frames) - 1
            frame = frames[-1]

            if frame[0] >= frame[1]:
                frames.pop()
                if chosen:
                    used.discard(chosen.pop())
                continue

            pos = occurrences[depth][frame[0]]
            frame[0] += 1

            states += 1
            if states > self.max_states:
                logger.warning(
                    "Flexible search truncated",
                    extra={"event": "flexible_search_truncated", "max_states": self.max_states},
                )
                return results, True

            if pos in used or pos in claimed:
                continue

            if depth + 1 == size:
                results.append(tuple(chosen) + (pos,))
                continue

            chosen.append(pos)
            used.add(pos)
            frames.append(self._window(occurrences[depth + 1], chosen))

        return results, False
