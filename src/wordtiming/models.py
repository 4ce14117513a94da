"""Shared data models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, model_validator

MatchSource = Literal["kept", "replaced", "interpolated"]


class HealthResponse(BaseModel):
    """Response payload for the API health endpoint."""

    status: Literal["ok"]
    version: str
    env: str


class TimedWord(BaseModel):
    """A word with start/end timestamps in seconds.

    Upstream words are accepted as-is, including empty text and inverted or
    out-of-window timestamps; the retiming pass repairs them instead of
    rejecting them.
    """

    word: str
    start: float
    end: float
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)


class WordMatch(TimedWord):
    """Timed word annotated with how its timing was obtained."""

    source: MatchSource
    is_matched: bool
    is_interpolated: bool
    original_index: int = Field(default=-1, ge=-1)


class SegmentBounds(BaseModel):
    """Closed time window of a caption segment."""

    start: float
    end: float

    @model_validator(mode="after")
    def _check_order(self) -> SegmentBounds:
        if self.end <= self.start:
            raise ValueError("segment end must be greater than segment start")
        return self


class CaptionSegment(BaseModel):
    """Caption segment as edited by the caption editor."""

    id: str = Field(min_length=1)
    text: str
    start: float
    end: float
    words: list[TimedWord] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_order(self) -> CaptionSegment:
        if self.end <= self.start:
            raise ValueError("segment end must be greater than segment start")
        return self


class RetimeRequest(BaseModel):
    """Retiming request payload used by both CLI and API."""

    words: list[TimedWord] = Field(default_factory=list)
    text: str
    segment_start: float
    segment_end: float
    similarity_threshold: float | None = Field(default=None, gt=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_bounds(self) -> RetimeRequest:
        if self.segment_end <= self.segment_start:
            raise ValueError("segment_end must be greater than segment_start")
        return self


class RetimeMetadata(BaseModel):
    """Metadata describing how a retiming was produced."""

    algorithm: str
    similarity_threshold: float = Field(gt=0.0, le=1.0)
    word_count: int = Field(ge=0)
    kept_count: int = Field(ge=0)
    replaced_count: int = Field(ge=0)
    interpolated_count: int = Field(ge=0)
    words_changed: bool
    generated_at: datetime


class RetimeResponse(BaseModel):
    """Canonical retiming output schema."""

    metadata: RetimeMetadata
    words: list[WordMatch]


class RecalculationCheckRequest(BaseModel):
    """Payload for the cheap no-op edit check."""

    old_text: str
    new_text: str


class RecalculationCheckResponse(BaseModel):
    """Result of the cheap no-op edit check."""

    needs_recalculation: bool


class SegmentEditRequest(BaseModel):
    """Payload for applying a text edit to a caption segment."""

    segment: CaptionSegment
    text: str
