"""Tests for the flexible multi-word matcher."""

import time

import pytest

from ocr_redact.core.flexible import FlexibleMatcher, span_of

ADDRESS = ("5", "SHEPPARD", "CLOSE", "CLACTON", "ON", "SEA")


class TestApplies:
    """Tests for the flexible matcher trigger."""

    def test_requires_long_variant(self):
        """Test that only variants of four or more tokens qualify."""
        matcher = FlexibleMatcher()
        assert matcher.applies([("a", "b", "c", "d")], exact_count=0)
        assert not matcher.applies([("a", "b", "c")], exact_count=0)

    def test_requires_no_exact_match(self):
        """Test that any exact match disables flexible matching."""
        assert not FlexibleMatcher().applies([("a", "b", "c", "d")], exact_count=1)


class TestFlexibleMatcher:
    """Tests for FlexibleMatcher.find."""

    def test_wrapped_address(self):
        """Test an address interleaved with unrelated words."""
        tokens = ["5", "SHEPPARD", "PCN", "CLOSE", "Date", "CLACTON", "ON", "SEA"]
        claimed = set()
        matches, truncated = FlexibleMatcher().find([ADDRESS], tokens, claimed)

        assert not truncated
        assert len(matches) == 1
        assert matches[0].positions == (0, 1, 3, 5, 6, 7)
        assert matches[0].confidence == pytest.approx(0.92)
        assert matches[0].match_type == "flexible match (6 words)"
        assert claimed == {0, 1, 3, 5, 6, 7}

    def test_missing_token_abandons_variant(self):
        """Test that a token absent from the document yields nothing."""
        tokens = ["5", "SHEPPARD", "CLOSE", "CLACTON", "ON"]
        matches, _ = FlexibleMatcher().find([ADDRESS], tokens, set())
        assert matches == []

    def test_short_variants_ignored(self):
        """Test that variants under four tokens are not searched."""
        matches, _ = FlexibleMatcher().find([("A", "B", "C")], ["A", "x", "B", "C"], set())
        assert matches == []

    def test_span_twenty_accepted(self):
        """Test the inclusive span limit."""
        tokens = ["A", "B", "C"] + ["x"] * 16 + ["D"]
        matches, _ = FlexibleMatcher().find([("A", "B", "C", "D")], tokens, set())

        assert len(matches) == 1
        assert span_of(matches[0].positions) == 20
        assert matches[0].confidence == pytest.approx(0.8)

    def test_span_twenty_one_rejected(self):
        """Test that a span just over the limit is rejected."""
        tokens = ["A", "B", "C"] + ["x"] * 17 + ["D"]
        matches, _ = FlexibleMatcher().find([("A", "B", "C", "D")], tokens, set())
        assert matches == []

    def test_confidence_floor(self):
        """Test that confidence never drops below the floor."""
        matcher = FlexibleMatcher(max_span=50)
        assert matcher.score(4) == pytest.approx(0.96)
        assert matcher.score(20) == pytest.approx(0.8)
        assert matcher.score(45) == pytest.approx(0.7)

    def test_top_three_without_overlap(self):
        """Test that disjoint combinations in the top three are all accepted."""
        tokens = ["A", "B", "C", "D"] + ["x"] * 20 + ["A", "B", "C", "D"]
        matches, _ = FlexibleMatcher().find([("A", "B", "C", "D")], tokens, set())

        assert [m.positions for m in matches] == [(0, 1, 2, 3), (24, 25, 26, 27)]
        assert all(m.confidence == pytest.approx(0.96) for m in matches)

    def test_overlapping_top_ranked_dropped(self):
        """Test that overlapping leaders are not replaced by weaker combinations."""
        tokens = ["A", "B", "C", "D", "D", "D"] + ["x"] * 24
        tokens += ["A", "x", "x", "B", "x", "x", "C", "x", "x", "D"]
        matches, _ = FlexibleMatcher().find([("A", "B", "C", "D")], tokens, set())

        assert [m.positions for m in matches] == [(0, 1, 2, 3)]
        assert matches[0].confidence == pytest.approx(0.96)

    def test_repeated_pattern_keeps_best(self):
        """Test that ranking happens before overlap removal."""
        tokens = ["A", "B", "C", "D"] * 4
        matches, _ = FlexibleMatcher().find([("A", "B", "C", "D")], tokens, set())
        assert [m.positions for m in matches] == [(0, 1, 2, 3)]

    def test_claimed_positions_excluded(self):
        """Test that globally claimed positions are never assigned."""
        tokens = ["5", "SHEPPARD", "PCN", "CLOSE", "Date", "CLACTON", "ON", "SEA"]
        matches, _ = FlexibleMatcher().find([ADDRESS], tokens, {0})
        assert matches == []

    def test_positions_follow_token_order(self):
        """Test that positions are reported in variant token order."""
        tokens = ["D", "C", "B", "A"]
        matches, _ = FlexibleMatcher().find([("A", "B", "C", "D")], tokens, set())
        assert matches[0].positions == (3, 2, 1, 0)

    def test_state_cap_truncates_search(self):
        """Test that exploration stops at the state cap."""
        tokens = ["A", "B", "C", "D"] * 5
        matches, truncated = FlexibleMatcher(max_states=5).find(
            [("A", "B", "C", "D")], tokens, set()
        )

        assert truncated
        assert len(matches) <= 3

    def test_state_cap_bounds_common_tokens(self):
        """Test that a phrase of very common words stays cheap on a large page."""
        tokens = ["THE", "x"] * 10000

        start = time.perf_counter()
        matches, truncated = FlexibleMatcher().find([("THE",) * 5], tokens, set())
        elapsed = time.perf_counter() - start

        assert truncated
        assert 1 <= len(matches) <= 3
        assert all(span_of(m.positions) <= 20 for m in matches)
        assert elapsed < 2.0
