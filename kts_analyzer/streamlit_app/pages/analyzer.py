"""Text analyzer page."""

import html

import streamlit as st

from kts_analyzer import config
from kts_analyzer.streamlit_app.components import render_dimension_bar, render_score_plot, style_color
from kts_analyzer.streamlit_app.models import (
    ExtractionCompleted,
    InputMode,
    ModeSwitched,
    PlainText,
    SampleSelected,
    TextEdited,
    UIState,
    is_empty_source,
    reduce,
)
from kts_analyzer.streamlit_app.services import (
    AnalysisService,
    DocumentExtractor,
    format_result_markdown,
    report_filename,
    run_analysis,
)

MODE_LABELS = {
    InputMode.TEXT: "Paste text",
    InputMode.FILE: "Upload file",
}

UNCERTAINTY_COLOR = "#c4798a"
POSSIBILITY_COLOR = "#7ab5a0"


def dispatch(event) -> None:
    """Apply a UI event to the session's state."""
    st.session_state.ui_state = reduce(st.session_state.ui_state, event)


def on_mode_change() -> None:
    dispatch(ModeSwitched(mode=st.session_state.input_mode))


def on_sample_click(name: str, text: str) -> None:
    dispatch(SampleSelected(name=name, text=text))
    st.session_state.input_text = text


def on_text_change() -> None:
    dispatch(TextEdited(text=st.session_state.input_text))


def on_upload() -> None:
    uploaded_file = st.session_state.upload
    if uploaded_file is None:
        return
    extraction = st.session_state.extractor.extract_upload(uploaded_file)
    dispatch(ExtractionCompleted(extraction=extraction))


def seed_text_area(state: UIState) -> None:
    """
    Restore the text area from the active source.

    Streamlit drops a widget's state on runs where it is not rendered, which
    is every run spent on the file tab.
    """
    if "input_text" not in st.session_state:
        st.session_state.input_text = state.source.text if isinstance(state.source, PlainText) else ""


# Initialize services
if "analysis_service" not in st.session_state:
    try:
        st.session_state.analysis_service = AnalysisService()
    except ValueError as e:
        st.error(f"⚠️ {e}")
        st.markdown("""
        To run an analysis, configure one classification boundary:

        **Option 1: Local proxy** - forwards requests to the model service
        ```bash
        export KTS_PROXY_URL="http://localhost:3000/api/analyze"
        ```

        **Option 2: Anthropic (Direct)**
        ```bash
        export ANTHROPIC_API_KEY="your-api-key-here"
        ```

        **Option 3: Google Gemini (Direct)**
        ```bash
        export GOOGLE_API_KEY="your-api-key-here"
        ```

        Then restart the app with `kts-analyzer`.
        """)
        st.stop()

if "extractor" not in st.session_state:
    st.session_state.extractor = DocumentExtractor()

if "ui_state" not in st.session_state:
    st.session_state.ui_state = UIState()

analysis_service = st.session_state.analysis_service

st.caption("PROTOTYPE · DIMOV & PISTRUI")
st.title("Kinetic Thinking Styles")
st.markdown("#### _Text Analyzer_")
st.markdown(
    "Maps written text onto the KTS framework by analysing linguistic markers "
    "of attitudes towards uncertainty (reason ↔ play) and possibility (structure ↔ openness)."
)

st.divider()

# Input mode tabs
st.radio(
    "Input",
    options=list(MODE_LABELS.keys()),
    format_func=MODE_LABELS.get,
    horizontal=True,
    key="input_mode",
    on_change=on_mode_change,
    label_visibility="collapsed",
)

state: UIState = st.session_state.ui_state

if state.input_mode == InputMode.TEXT:
    samples = analysis_service.get_sample_texts()
    if samples:
        st.caption("SAMPLE TEXTS")
        cols = st.columns(len(samples))
        for col, (name, text) in zip(cols, samples.items()):
            col.button(
                name,
                key=f"sample_{name}",
                type="primary" if state.selected_sample == name else "secondary",
                on_click=on_sample_click,
                args=(name, text),
                use_container_width=True,
            )

    seed_text_area(state)
    st.text_area(
        "Text",
        key="input_text",
        height=180,
        placeholder="Paste or type text to analyse...",
        on_change=on_text_change,
        label_visibility="collapsed",
    )
else:
    # No type filter: unsupported files get a readable message from the extractor
    st.file_uploader(
        "Drop a file here or browse",
        key="upload",
        on_change=on_upload,
        help="PDF · DOCX · TXT · MD",
    )
    st.caption("PDF · DOCX · TXT · MD")
    if state.source_label:
        st.caption(f"_Source: {state.source_label}_")

state = st.session_state.ui_state

analyse_clicked = st.button(
    "Analysing…" if state.loading else "Analyse",
    type="primary",
    disabled=state.loading or is_empty_source(state.source),
)

if analyse_clicked:
    with st.spinner("Analysing text... This may take a moment."):
        st.session_state.ui_state = run_analysis(st.session_state.ui_state, analysis_service)

state = st.session_state.ui_state

if state.error:
    st.error(state.error)

# Results
if state.result:
    result = state.result
    accent = style_color(result.style)

    st.markdown(
        f"<span style='font-size: 11px; letter-spacing: 2px; color: #6a7f99;'>DETECTED STYLE:</span> "
        f"<span style='font-size: 18px; font-weight: 600; color: {accent};'>{result.style.value}</span>",
        unsafe_allow_html=True,
    )

    col1, col2 = st.columns(2)

    with col1:
        plot = render_score_plot(
            result.uncertainty_score,
            result.possibility_score,
            result.style,
            pixel_ratio=config.PLOT_PIXEL_RATIO,
            background_path=config.PLOT_BACKGROUND_PATH,
        )
        st.image(plot, width=400)

    with col2:
        st.markdown(
            render_dimension_bar(
                "Attitude towards uncertainty", "Reason", "Play",
                result.uncertainty_score, UNCERTAINTY_COLOR,
            ),
            unsafe_allow_html=True,
        )
        st.markdown(result.uncertainty_reasoning)
        st.markdown(
            render_dimension_bar(
                "Attitude towards possibility", "Structure", "Openness",
                result.possibility_score, POSSIBILITY_COLOR,
            ),
            unsafe_allow_html=True,
        )
        st.markdown(result.possibility_reasoning)

    st.divider()
    st.caption("KEY LINGUISTIC INDICATORS")
    st.markdown(
        "".join(
            f"<span class='kts-indicator'>&ldquo;{html.escape(indicator)}&rdquo;</span>"
            for indicator in result.key_indicators
        ),
        unsafe_allow_html=True,
    )

    st.info(result.summary)

    # Export
    report = format_result_markdown(
        result,
        source_label=state.source_label or state.selected_sample,
        model_name=analysis_service.model_name,
        provider_name=analysis_service.provider.display_name,
    )
    st.download_button(
        label="📥 Download as Markdown",
        data=report,
        file_name=report_filename(state.source_label or state.selected_sample),
        mime="text/markdown",
    )
