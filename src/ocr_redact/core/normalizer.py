"""Token normalization shared by every matcher."""

import re

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def normalize_token(text: str) -> str:
    """Strip every character that is not an ASCII letter or digit.

    Case is preserved; exact and flexible matching compare case-sensitively.

    Examples:
        >>> normalize_token("CO16-8YA,")
        'CO168YA'
        >>> normalize_token("--")
        ''
    """
    if not text:
        return ""
    return _NON_ALNUM.sub("", text)


def fold_token(text: str) -> str:
    """Normalize and lower-case a token for fuzzy comparison."""
    return normalize_token(text).lower()
