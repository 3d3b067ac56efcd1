"""Pydantic models for analysis functionality."""

from enum import Enum
from typing import Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


SCORE_MIN = -10.0
SCORE_MAX = 10.0


class KTSStyle(str, Enum):
    """Quadrant styles of the Kinetic Thinking Styles framework."""

    FOCUSED = "Focused"
    INCREMENTAL = "Incremental"
    PLAYFUL = "Playful"
    BREAKAWAY = "Breakaway"


def style_for_scores(uncertainty_score: float, possibility_score: float) -> KTSStyle:
    """
    Derive the quadrant style from the sign of the two scores.

    Zero counts towards the reason/structure poles.
    """
    play = uncertainty_score > 0
    openness = possibility_score > 0
    if play and openness:
        return KTSStyle.BREAKAWAY
    if play:
        return KTSStyle.PLAYFUL
    if openness:
        return KTSStyle.INCREMENTAL
    return KTSStyle.FOCUSED


# =============================================================================
# Prompt catalog
# =============================================================================


class PromptMetadata(BaseModel):
    """Metadata for a prompt template."""

    name: str = Field(..., description="Display name")
    description: str = Field(..., description="Short description")
    file: str = Field(..., description="Jinja2 template file")


class SampleText(BaseModel):
    """A built-in text the user can analyse with one click."""

    name: str
    text: str


# =============================================================================
# Input sources
# =============================================================================


class PlainText(BaseModel):
    """Typed, pasted, sample or locally extracted text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str

    def is_empty(self) -> bool:
        return not self.text.strip()


class BinaryDocument(BaseModel):
    """A document whose text is extracted by the classification boundary."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["document"] = "document"
    mime_type: str = Field(..., description="Media type, e.g. application/pdf")
    encoded_bytes: str = Field(..., description="Base64 encoded file content")
    file_name: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.encoded_bytes


InputSource = Union[PlainText, BinaryDocument]


def is_empty_source(source: Optional[InputSource]) -> bool:
    """True when there is nothing to analyse."""
    return source is None or source.is_empty()


# =============================================================================
# Extraction results
# =============================================================================


class TextExtraction(BaseModel):
    """Text read or extracted locally from an upload."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    content: str
    file_name: str

    def to_source(self) -> InputSource:
        return PlainText(text=self.content)


class PassthroughBinary(BaseModel):
    """An upload forwarded as-is for remote extraction."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["passthrough"] = "passthrough"
    file_name: str
    mime_type: str
    encoded_bytes: str

    def to_source(self) -> InputSource:
        return BinaryDocument(
            mime_type=self.mime_type,
            encoded_bytes=self.encoded_bytes,
            file_name=self.file_name,
        )


class ExtractionFailure(BaseModel):
    """An upload that could not be turned into an input source."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    reason: str

    def to_source(self) -> None:
        return None


ExtractionResult = Union[TextExtraction, PassthroughBinary, ExtractionFailure]


# =============================================================================
# Request / result
# =============================================================================


class AnalysisRequest(BaseModel):
    """Outbound payload for the classification boundary."""

    model: str
    max_tokens: int = 1000
    system: str
    messages: list[dict]

    def to_payload(self) -> dict:
        return self.model_dump()


class AnalysisResult(BaseModel):
    """Parsed classification returned by the model."""

    uncertainty_score: float = Field(..., ge=SCORE_MIN, le=SCORE_MAX, description="-10 reason, +10 play")
    possibility_score: float = Field(..., ge=SCORE_MIN, le=SCORE_MAX, description="-10 structure, +10 openness")
    style: KTSStyle
    uncertainty_reasoning: str
    possibility_reasoning: str
    key_indicators: list[str] = Field(..., description="Short evidence phrases, five expected")
    summary: str

    @property
    def quadrant_style(self) -> KTSStyle:
        """Style implied by the scores, independent of the reported style."""
        return style_for_scores(self.uncertainty_score, self.possibility_score)

    @property
    def style_matches_quadrant(self) -> bool:
        return self.style == self.quadrant_style

