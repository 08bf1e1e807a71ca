"""
Data model for the phrase locator.

OCR words and sensitive phrases are produced by upstream collaborators and
are treated as read-only inputs. Match candidates live only while a single
phrase is being processed; match records are the output handed to the
rendering layer.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

# One tokenization hypothesis for a phrase.
Variant = tuple[str, ...]


@dataclass(frozen=True)
class Vertex:
    """A polygon point in source-image pixel space.

    Either coordinate may be missing when the OCR provider omits it.
    """

    x: Optional[float] = None
    y: Optional[float] = None

    @property
    def is_valid(self) -> bool:
        """Check whether both coordinates are numeric."""
        return _is_number(self.x) and _is_number(self.y)

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Word:
    """An OCR word with its bounding polygon.

    Attributes:
        text: Raw text as recognized by OCR.
        polygon: Up to four vertices, in the order the OCR provider gave them.
    """

    text: str
    polygon: tuple[Vertex, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Word":
        """Build a word from ``{"text", "polygon"}`` or the provider's
        ``{"text", "boundingBox": {"vertices": [...]}}`` shape."""
        raw_vertices = data.get("polygon")
        if raw_vertices is None:
            bounding_box = data.get("boundingBox") or {}
            raw_vertices = bounding_box.get("vertices") or []
        polygon = tuple(
            Vertex(x=v.get("x"), y=v.get("y")) for v in raw_vertices if v is not None
        )
        return cls(text=data.get("text") or "", polygon=polygon)


@dataclass(frozen=True)
class Phrase:
    """A sensitive phrase with its category label, e.g. ("AF12HPV", "License Plate")."""

    text: str
    label: str


@dataclass(frozen=True)
class MatchCandidate:
    """A located occurrence of a phrase, before geometry is computed.

    Attributes:
        positions: Word indices. Exact and fuzzy matches are contiguous and
            ascending; flexible matches follow the variant token order.
        confidence: Match reliability in [0, 1].
        match_type: Human-readable strategy descriptor.
    """

    positions: tuple[int, ...]
    confidence: float
    match_type: str


@dataclass(frozen=True)
class MatchRecord:
    """A redaction region emitted for one located phrase occurrence.

    Attributes:
        id: Call-scoped, monotonically increasing identifier.
        label: Category label of the phrase.
        text: The phrase text as supplied.
        bbox: Axis-aligned envelope ``[x, y, width, height]``.
        vertices: Valid polygon points of all contributing words, in order.
        confidence: Match reliability in [0, 1].
        match_type: Strategy descriptor, e.g. ``fuzzy match (92.3%)``.
        word_indices: Positions of the contributing words.
        redacted: Always True on emission.
    """

    id: int
    label: str
    text: str
    bbox: tuple[float, float, float, float]
    vertices: tuple[Vertex, ...]
    confidence: float
    match_type: str
    word_indices: tuple[int, ...] = field(default_factory=tuple)
    redacted: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the keys the rendering layer expects."""
        return {
            "id": self.id,
            "label": self.label,
            "text": self.text,
            "bbox": list(self.bbox),
            "vertices": [v.to_dict() for v in self.vertices],
            "redacted": self.redacted,
            "confidence": self.confidence,
            "matchType": self.match_type,
            "wordIndices": list(self.word_indices),
        }


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
