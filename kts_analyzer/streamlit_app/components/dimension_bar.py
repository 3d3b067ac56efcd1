"""One-dimensional score indicator for a single KTS dimension."""

import html

from kts_analyzer.streamlit_app.models.analysis_models import SCORE_MAX, SCORE_MIN


def position_fraction(score: float) -> float:
    """Map a score in [-10, 10] onto [0, 1] along the bar."""
    fraction = (score - SCORE_MIN) / (SCORE_MAX - SCORE_MIN)
    return min(1.0, max(0.0, fraction))


def format_score(score: float) -> str:
    """One decimal place, with an explicit plus sign for positive scores."""
    return f"{'+' if score > 0 else ''}{score:.1f}"


def render_dimension_bar(label: str, left_label: str, right_label: str, score: float, color: str) -> str:
    """Return the HTML fragment for one dimension bar."""
    pct = position_fraction(score) * 100
    return f"""
<div class="kts-bar">
  <div class="kts-bar-labels">
    <span class="kts-bar-pole">{html.escape(left_label)}</span>
    <span class="kts-bar-title">{html.escape(label)}</span>
    <span class="kts-bar-pole">{html.escape(right_label)}</span>
  </div>
  <div class="kts-bar-track">
    <div class="kts-bar-centre"></div>
    <div class="kts-bar-marker" style="left: {pct:.2f}%; background: {color}; box-shadow: 0 0 12px {color}40;"></div>
  </div>
  <div class="kts-bar-score" style="color: {color};">{format_score(score)}</div>
</div>
"""
