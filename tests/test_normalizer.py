"""Tests for token normalization."""

from ocr_redact.core.normalizer import fold_token, normalize_token


class TestNormalizeToken:
    """Tests for normalize_token."""

    def test_strips_punctuation(self):
        """Test that punctuation and whitespace are removed."""
        assert normalize_token("CO16-8YA,") == "CO168YA"
        assert normalize_token(" J. Smith ") == "JSmith"

    def test_preserves_case(self):
        """Test that case is preserved for exact matching."""
        assert normalize_token("Hello") == "Hello"

    def test_non_ascii_removed(self):
        """Test that non-ASCII letters are stripped."""
        assert normalize_token("£110") == "110"
        assert normalize_token("café") == "caf"

    def test_empty_results(self):
        """Test inputs without alphanumerics normalize to empty."""
        assert normalize_token("") == ""
        assert normalize_token("--") == ""


class TestFoldToken:
    """Tests for fold_token."""

    def test_lower_cases(self):
        """Test that folding normalizes and lower-cases."""
        assert fold_token("AF-12 HPV") == "af12hpv"
