"""Pydantic data models and UI state for the KTS Text Analyzer."""

from .analysis_models import (
    KTSStyle,
    PromptMetadata,
    SampleText,
    PlainText,
    BinaryDocument,
    InputSource,
    TextExtraction,
    PassthroughBinary,
    ExtractionFailure,
    ExtractionResult,
    AnalysisRequest,
    AnalysisResult,
    is_empty_source,
    style_for_scores,
)
from .ui_state import (
    InputMode,
    UIState,
    ModeSwitched,
    SampleSelected,
    TextEdited,
    ExtractionCompleted,
    AnalysisStarted,
    AnalysisSucceeded,
    AnalysisFailed,
    reduce,
)

__all__ = [
    "KTSStyle",
    "PromptMetadata",
    "SampleText",
    "PlainText",
    "BinaryDocument",
    "InputSource",
    "TextExtraction",
    "PassthroughBinary",
    "ExtractionFailure",
    "ExtractionResult",
    "AnalysisRequest",
    "AnalysisResult",
    "is_empty_source",
    "style_for_scores",
    "InputMode",
    "UIState",
    "ModeSwitched",
    "SampleSelected",
    "TextEdited",
    "ExtractionCompleted",
    "AnalysisStarted",
    "AnalysisSucceeded",
    "AnalysisFailed",
    "reduce",
]
