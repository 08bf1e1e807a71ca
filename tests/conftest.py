"""Pytest fixtures and configuration."""

import pytest

from ocr_redact.core.models import Vertex, Word

WORD_WIDTH = 80
WORD_HEIGHT = 20
WORD_PITCH = 100


def make_words(texts, line=0):
    """Lay out words left to right on one line, one quad polygon each."""
    words = []
    for i, text in enumerate(texts):
        x0 = i * WORD_PITCH
        y0 = line * 40
        words.append(Word(
            text=text,
            polygon=(
                Vertex(x0, y0),
                Vertex(x0 + WORD_WIDTH, y0),
                Vertex(x0 + WORD_WIDTH, y0 + WORD_HEIGHT),
                Vertex(x0, y0 + WORD_HEIGHT),
            ),
        ))
    return words


@pytest.fixture
def words_factory():
    """Factory building OCR words laid out on a single line."""
    return make_words


@pytest.fixture
def parking_notice_words():
    """OCR words of a penalty charge notice, address wrapped around other text."""
    return make_words([
        "Vehicle", "registration", "AF", "12", "HPV",
        "5", "SHEPPARD", "PCN", "CLOSE", "Date", "CLACTON", "ON", "SEA",
        "Contact", "J0HN", "SMITH", "AF12HPV",
    ])
