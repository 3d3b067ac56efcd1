"""UI state for the analyzer page and the transitions between states.

The page never mutates state fields directly: every change goes through
``reduce(state, event)``, which returns a new frozen ``UIState``.

``request_id`` fences analysis results. It is bumped whenever an analysis
starts or the input source changes, and success/failure events carrying
any other id are dropped, so a late response can never overwrite the
result area for newer input.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from .analysis_models import (
    AnalysisResult,
    ExtractionFailure,
    ExtractionResult,
    InputSource,
    PlainText,
)


class InputMode(str, Enum):
    """Input tabs on the analyzer page."""

    TEXT = "text"
    FILE = "file"


@dataclass(frozen=True)
class UIState:
    """Per-session state of the analyzer page."""

    input_mode: InputMode = InputMode.TEXT
    source: Optional[InputSource] = None
    source_label: Optional[str] = None
    selected_sample: Optional[str] = None
    loading: bool = False
    error: Optional[str] = None
    result: Optional[AnalysisResult] = None
    request_id: int = 0


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class ModeSwitched:
    mode: InputMode


@dataclass(frozen=True)
class SampleSelected:
    name: str
    text: str


@dataclass(frozen=True)
class TextEdited:
    text: str


@dataclass(frozen=True)
class ExtractionCompleted:
    extraction: ExtractionResult


@dataclass(frozen=True)
class AnalysisStarted:
    pass


@dataclass(frozen=True)
class AnalysisSucceeded:
    request_id: int
    result: AnalysisResult


@dataclass(frozen=True)
class AnalysisFailed:
    request_id: int
    message: str


Event = Union[
    ModeSwitched,
    SampleSelected,
    TextEdited,
    ExtractionCompleted,
    AnalysisStarted,
    AnalysisSucceeded,
    AnalysisFailed,
]


def _select_source(
    state: UIState,
    source: InputSource,
    source_label: Optional[str] = None,
    selected_sample: Optional[str] = None,
) -> UIState:
    # A new source releases the gate; any in-flight response is now stale
    return replace(
        state,
        source=source,
        source_label=source_label,
        selected_sample=selected_sample,
        result=None,
        error=None,
        loading=False,
        request_id=state.request_id + 1,
    )


def reduce(state: UIState, event: Event) -> UIState:
    """Apply one event to the state and return the new state."""
    if isinstance(event, ModeSwitched):
        return replace(state, input_mode=event.mode, result=None, error=None)

    if isinstance(event, SampleSelected):
        next_state = _select_source(state, PlainText(text=event.text), selected_sample=event.name)
        return replace(next_state, input_mode=InputMode.TEXT)

    if isinstance(event, TextEdited):
        return _select_source(state, PlainText(text=event.text))

    if isinstance(event, ExtractionCompleted):
        extraction = event.extraction
        if isinstance(extraction, ExtractionFailure):
            return replace(state, result=None, error=extraction.reason)
        return _select_source(state, extraction.to_source(), source_label=extraction.file_name)

    if isinstance(event, AnalysisStarted):
        if state.loading:
            return state
        return replace(
            state,
            loading=True,
            result=None,
            error=None,
            request_id=state.request_id + 1,
        )

    if isinstance(event, AnalysisSucceeded):
        if event.request_id != state.request_id:
            return state
        return replace(state, loading=False, result=event.result, error=None)

    if isinstance(event, AnalysisFailed):
        if event.request_id != state.request_id:
            return state
        return replace(state, loading=False, result=None, error=event.message)

    raise TypeError(f"Unknown UI event: {event!r}")
