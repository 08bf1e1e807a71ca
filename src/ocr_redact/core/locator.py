"""
Phrase Locator

Maps sensitive phrases back to the OCR words they were read from and emits a
redaction region for every located occurrence.

Example:
    >>> from ocr_redact.core.locator import PhraseLocator
    >>> from ocr_redact.core.models import Phrase, Vertex, Word
    >>> words = [Word("AF", (Vertex(0, 0), Vertex(20, 10))),
    ...          Word("12", (Vertex(25, 0), Vertex(45, 10))),
    ...          Word("HPV", (Vertex(50, 0), Vertex(80, 10)))]
    >>> result = PhraseLocator().locate(words, [Phrase("AF12HPV", "License Plate")])
    >>> result.records[0].bbox
    (0, 0, 80, 10)
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ocr_redact.config.locator_config import LocatorConfig
from ocr_redact.core.bbox import compute_region
from ocr_redact.core.exact import ExactMatcher
from ocr_redact.core.flexible import FlexibleMatcher
from ocr_redact.core.fuzzy import FuzzyMatcher
from ocr_redact.core.models import MatchCandidate, MatchRecord, Phrase, Word
from ocr_redact.core.normalizer import normalize_token
from ocr_redact.core.variants import generate_variants
from ocr_redact.logging.setup import get_logger

logger = get_logger(__name__)


@dataclass
class LocateResult:
    """Result of a locate call.

    Attributes:
        records: Match records across all phrases, in processing order.
        strategy_counts: Number of records per strategy (exact, flexible, fuzzy).
        unmatched: Phrases that produced no record.
        truncated_searches: Flexible searches that hit the exploration cap.
    """

    records: list[MatchRecord] = field(default_factory=list)
    strategy_counts: Counter = field(default_factory=Counter)
    unmatched: list[Phrase] = field(default_factory=list)
    truncated_searches: int = 0

    @property
    def match_count(self) -> int:
        return len(self.records)


class PhraseLocator:
    """Runs the exact, flexible and fuzzy matchers for every phrase.

    Claimed word positions are tracked per phrase, so the same OCR word may
    be redacted once for each phrase that covers it.
    """

    def __init__(self, config: Optional[LocatorConfig] = None) -> None:
        self.config = config or LocatorConfig()
        self.exact = ExactMatcher()
        self.flexible = FlexibleMatcher(
            min_variant_length=self.config.flexible_min_variant_length,
            max_span=self.config.flexible_max_span,
            min_confidence=self.config.flexible_min_confidence,
            top_k=self.config.flexible_top_k,
            max_states=self.config.flexible_max_states,
        )
        self.fuzzy = FuzzyMatcher(
            threshold=self.config.fuzzy_threshold,
            max_window=self.config.fuzzy_max_window,
            trigger_below=self.config.fuzzy_trigger_below,
        )

    def locate(self, words: Sequence[Word], phrases: Sequence[Phrase]) -> LocateResult:
        """Locate every occurrence of every phrase.

        Args:
            words: OCR words in reading order.
            phrases: Sensitive phrases with labels.

        Returns:
            LocateResult with records numbered from 0 in emission order.
        """
        result = LocateResult()
        tokens = [normalize_token(word.text) for word in words]
        next_id = 0

        for phrase in phrases:
            candidates, truncated = self._match_phrase(phrase, tokens, words)
            if truncated:
                result.truncated_searches += 1

            emitted = 0
            for candidate in candidates:
                record = self._to_record(candidate, phrase, words, next_id)
                if record is None:
                    logger.debug(
                        "Dropped match without valid vertices",
                        extra={"event": "match_dropped", "label": phrase.label},
                    )
                    continue
                next_id += 1
                emitted += 1
                result.records.append(record)
                result.strategy_counts[_strategy_of(candidate)] += 1

            if emitted == 0:
                result.unmatched.append(phrase)

            logger.info(
                "Phrase processed",
                extra={
                    "event": "phrase_located",
                    "label": phrase.label,
                    "phrase_length": len(phrase.text),
                    "instances": emitted,
                },
            )

        return result

    def _match_phrase(
        self,
        phrase: Phrase,
        tokens: list[str],
        words: Sequence[Word],
    ) -> tuple[list[MatchCandidate], bool]:
        variants = generate_variants(phrase.text)
        logger.debug(
            "Searching for phrase",
            extra={"event": "phrase_search", "phrase": phrase.text, "variants": len(variants)},
        )
        claimed: set[int] = set()
        truncated = False

        candidates = self.exact.find(variants, tokens, claimed)

        if self.flexible.applies(variants, len(candidates)):
            flexible, truncated = self.flexible.find(variants, tokens, claimed)
            candidates.extend(flexible)

        if self.fuzzy.applies(len(candidates)):
            candidates.extend(self.fuzzy.find(phrase.text, [w.text for w in words], claimed))

        return candidates, truncated

    @staticmethod
    def _to_record(
        candidate: MatchCandidate,
        phrase: Phrase,
        words: Sequence[Word],
        record_id: int,
    ) -> Optional[MatchRecord]:
        region = compute_region([words[pos] for pos in candidate.positions])
        if region is None:
            return None
        return MatchRecord(
            id=record_id,
            label=phrase.label,
            text=phrase.text,
            bbox=region.bbox,
            vertices=region.vertices,
            confidence=candidate.confidence,
            match_type=candidate.match_type,
            word_indices=candidate.positions,
        )


def _strategy_of(candidate: MatchCandidate) -> str:
    return candidate.match_type.split(" ", 1)[0]


def locate_phrases(
    words: Sequence[Word],
    phrases: Sequence[Phrase],
    config: Optional[LocatorConfig] = None,
) -> list[MatchRecord]:
    """Convenience wrapper returning only the match records."""
    return PhraseLocator(config).locate(words, phrases).records
