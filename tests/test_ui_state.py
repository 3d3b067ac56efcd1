"""Tests for the analyzer page state transitions."""

from dataclasses import replace

import pytest

from kts_analyzer.streamlit_app.models import (
    AnalysisFailed,
    AnalysisStarted,
    AnalysisSucceeded,
    BinaryDocument,
    ExtractionCompleted,
    ExtractionFailure,
    InputMode,
    ModeSwitched,
    PassthroughBinary,
    PlainText,
    SampleSelected,
    TextEdited,
    TextExtraction,
    UIState,
    reduce,
)


@pytest.fixture
def analysed_state(analysis_result) -> UIState:
    return UIState(source=PlainText(text="old text"), result=analysis_result, request_id=3)


def test_initial_state():
    state = UIState()
    assert state.input_mode == InputMode.TEXT
    assert state.source is None
    assert state.loading is False
    assert state.error is None
    assert state.result is None


def test_selecting_a_sample_clears_result_and_error(analysed_state):
    state = replace(analysed_state, error="stale", input_mode=InputMode.FILE)

    state = reduce(state, SampleSelected(name="Operations report", text="Q3 results"))

    assert state.result is None
    assert state.error is None
    assert state.source == PlainText(text="Q3 results")
    assert state.selected_sample == "Operations report"
    assert state.input_mode == InputMode.TEXT


def test_switching_mode_clears_result_and_error_but_keeps_source(analysed_state):
    state = reduce(analysed_state, ModeSwitched(mode=InputMode.FILE))

    assert state.input_mode == InputMode.FILE
    assert state.result is None
    assert state.error is None
    assert state.source == PlainText(text="old text")


def test_editing_text_replaces_source(analysed_state):
    state = reduce(analysed_state, TextEdited(text="new text"))

    assert state.source == PlainText(text="new text")
    assert state.result is None
    assert state.selected_sample is None


def test_text_extraction_becomes_plain_text_source(analysed_state):
    event = ExtractionCompleted(extraction=TextExtraction(content="from docx", file_name="memo.docx"))

    state = reduce(analysed_state, event)

    assert state.source == PlainText(text="from docx")
    assert state.source_label == "memo.docx"
    assert state.result is None


def test_passthrough_becomes_binary_document_source():
    extraction = PassthroughBinary(file_name="a.pdf", mime_type="application/pdf", encoded_bytes="JVBE")

    state = reduce(UIState(), ExtractionCompleted(extraction=extraction))

    assert isinstance(state.source, BinaryDocument)
    assert state.source.encoded_bytes == "JVBE"
    assert state.source_label == "a.pdf"


def test_extraction_failure_sets_error_and_keeps_source(analysed_state):
    failure = ExtractionFailure(reason="Unsupported file type: .xyz. Use PDF, DOCX, or TXT.")

    state = reduce(analysed_state, ExtractionCompleted(extraction=failure))

    assert state.error == failure.reason
    assert state.result is None
    assert state.source == PlainText(text="old text")


def test_analysis_lifecycle(analysis_result):
    state = UIState(source=PlainText(text="hello"), error="previous")

    state = reduce(state, AnalysisStarted())
    assert state.loading is True
    assert state.error is None
    request_id = state.request_id

    state = reduce(state, AnalysisSucceeded(request_id=request_id, result=analysis_result))
    assert state.loading is False
    assert state.result == analysis_result


def test_second_start_while_loading_is_ignored():
    state = reduce(UIState(source=PlainText(text="hello")), AnalysisStarted())

    assert reduce(state, AnalysisStarted()) is state


def test_failure_clears_loading_and_result(analysis_result):
    state = reduce(UIState(source=PlainText(text="hello"), result=analysis_result), AnalysisStarted())

    state = reduce(state, AnalysisFailed(request_id=state.request_id, message="rate limited"))

    assert state.loading is False
    assert state.result is None
    assert state.error == "rate limited"


def test_stale_result_after_new_input_is_dropped(analysis_result):
    state = reduce(UIState(source=PlainText(text="first")), AnalysisStarted())
    stale_id = state.request_id

    state = reduce(state, TextEdited(text="second"))
    assert state.loading is False

    after = reduce(state, AnalysisSucceeded(request_id=stale_id, result=analysis_result))
    assert after is state
    assert after.result is None

    after = reduce(state, AnalysisFailed(request_id=stale_id, message="late failure"))
    assert after.error is None


def test_unknown_event_is_rejected():
    with pytest.raises(TypeError):
        reduce(UIState(), object())
