"""Markdown export of an analysis result."""

from datetime import datetime
from typing import Optional

from kts_analyzer import __version__
from kts_analyzer.streamlit_app.components.dimension_bar import format_score
from kts_analyzer.streamlit_app.models import AnalysisResult


def format_result_markdown(
    result: AnalysisResult,
    source_label: Optional[str] = None,
    model_name: Optional[str] = None,
    provider_name: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> str:
    """Format an analysis result with traceability metadata."""
    timestamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")

    report = f"""# Kinetic Thinking Styles Analysis

## Traceability Information

- **Source:** {source_label or "Pasted text"}
- **Generated:** {timestamp}
- **Provider:** {provider_name or "unknown"}
- **Model:** `{model_name or "unknown"}`
- **Tool Version:** `{__version__}`

---

## Detected Style: {result.style.value}

| Dimension | Score | Poles |
|-----------|-------|-------|
| Attitude towards uncertainty | {format_score(result.uncertainty_score)} | Reason ↔ Play |
| Attitude towards possibility | {format_score(result.possibility_score)} | Structure ↔ Openness |
"""

    if not result.style_matches_quadrant:
        report += f"\n_Note: the scores fall in the {result.quadrant_style.value} quadrant._\n"

    report += f"""
### Uncertainty

{result.uncertainty_reasoning}

### Possibility

{result.possibility_reasoning}

### Key Linguistic Indicators

"""
    report += "\n".join(f"- “{indicator}”" for indicator in result.key_indicators)
    report += f"""

### Summary

{result.summary}
"""
    return report


def report_filename(source_label: Optional[str] = None, generated_at: Optional[datetime] = None) -> str:
    """Default download name, e.g. ``notes_kts_20250101_120000.md``."""
    timestamp_str = (generated_at or datetime.now()).strftime("%Y%m%d_%H%M%S")
    stem = (source_label or "text").rsplit(".", 1)[0]
    safe_stem = "".join(c if c.isalnum() or c in ('-', '_') else '_' for c in stem)
    return f"{safe_stem}_kts_{timestamp_str}.md"
