"""Renderers for analysis results."""

from .dimension_bar import format_score, position_fraction, render_dimension_bar
from .score_plot import plot_position, render_score_plot, style_color

__all__ = [
    "format_score",
    "position_fraction",
    "render_dimension_bar",
    "plot_position",
    "render_score_plot",
    "style_color",
]
