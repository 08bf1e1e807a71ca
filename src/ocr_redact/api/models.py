"""
Pydantic models for the locate API.

Word polygons may be sent either as ``polygon`` or in the OCR provider's
``boundingBox.vertices`` shape.
"""

from typing import Optional

from pydantic import BaseModel, Field

from ocr_redact.core.models import MatchRecord, Phrase, Word


class VertexModel(BaseModel):
    """A polygon point; either coordinate may be missing."""

    x: Optional[float] = Field(None, description="Horizontal pixel coordinate")
    y: Optional[float] = Field(None, description="Vertical pixel coordinate")


class BoundingBoxModel(BaseModel):
    vertices: list[Optional[VertexModel]] = Field(default_factory=list)


class WordModel(BaseModel):
    """An OCR word in reading order."""

    text: str = Field(..., description="Recognized text")
    polygon: Optional[list[Optional[VertexModel]]] = Field(
        None, max_length=4, description="Up to four polygon vertices"
    )
    boundingBox: Optional[BoundingBoxModel] = Field(
        None, description="Provider-style polygon, used when polygon is absent"
    )

    def to_word(self) -> Word:
        return Word.from_dict(self.model_dump())


class PhraseModel(BaseModel):
    """A sensitive phrase flagged by the classification step."""

    text: str = Field(..., description="Exact phrase text")
    label: str = Field(..., description="Category, e.g. 'Name' or 'License Plate'")

    def to_phrase(self) -> Phrase:
        return Phrase(text=self.text, label=self.label)


class LocateRequest(BaseModel):
    """Request body for the locate endpoint."""

    words: list[WordModel] = Field(default_factory=list, description="OCR words in reading order")
    phrases: list[PhraseModel] = Field(default_factory=list, description="Phrases to locate")


class MatchRecordModel(BaseModel):
    """A redaction region for one located phrase occurrence."""

    id: int
    label: str
    text: str
    bbox: list[float] = Field(..., description="[x, y, width, height]")
    vertices: list[VertexModel]
    redacted: bool = True
    confidence: float = Field(..., ge=0, le=1)
    matchType: str
    wordIndices: list[int] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: MatchRecord) -> "MatchRecordModel":
        return cls(**record.to_dict())


class LocateResponse(BaseModel):
    """Response body for the locate endpoint."""

    matches: list[MatchRecordModel]
    phrase_count: int
    match_count: int


class ErrorResponse(BaseModel):
    """Error response body."""

    error: dict = Field(..., description="Error details")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
