"""Redaction region computation from OCR word polygons."""

from dataclasses import dataclass
from typing import Optional, Sequence

from ocr_redact.core.models import Vertex, Word


@dataclass(frozen=True)
class Region:
    """Envelope of a set of polygons.

    Attributes:
        bbox: ``[x, y, width, height]`` in source pixel space.
        vertices: Every valid input vertex, in input order.
    """

    bbox: tuple[float, float, float, float]
    vertices: tuple[Vertex, ...]


def compute_region(words: Sequence[Word]) -> Optional[Region]:
    """Union the polygons of the given words.

    The envelope is taken over raw polygon vertices rather than per-word
    axis-aligned boxes, so rotated and multi-line spans are covered.

    Args:
        words: Contributing words, in match order.

    Returns:
        The region, or None when no word has a vertex with numeric x and y.
    """
    vertices = tuple(
        vertex
        for word in words
        for vertex in word.polygon
        if vertex.is_valid
    )
    if not vertices:
        return None

    xs = [v.x for v in vertices]
    ys = [v.y for v in vertices]
    x0, y0 = min(xs), min(ys)
    x1, y1 = max(xs), max(ys)

    return Region(bbox=(x0, y0, x1 - x0, y1 - y0), vertices=vertices)
