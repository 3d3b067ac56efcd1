"""Quadrant plot of the two KTS scores, drawn with Pillow.

The plot is redrawn from scratch on every call: the cached background is
copied, scaled to the device pixel ratio, and the marker (glow, point and
ring) is composited on top. Without both scores only the background is
returned.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional, Union
import logging

from PIL import Image, ImageColor, ImageDraw, ImageFont

from kts_analyzer.streamlit_app.models import KTSStyle
from kts_analyzer.streamlit_app.models.analysis_models import SCORE_MAX, SCORE_MIN

logger = logging.getLogger(__name__)

PLOT_SIZE = 400

# Share of the half-width usable for points; the rest holds the axis labels
PLOT_INSET = 10 / 12

GLOW_RADIUS = 30
POINT_RADIUS = 7
RING_RADIUS = 12
RING_WIDTH = 2
HALF_ALPHA = 0x80

STYLE_COLORS = {
    KTSStyle.FOCUSED: "#ff6f20",
    KTSStyle.INCREMENTAL: "#9f60b5",
    KTSStyle.PLAYFUL: "#bed600",
    KTSStyle.BREAKAWAY: "#009ddb",
}

BACKGROUND_COLOR = "#0a0f1e"
AXIS_COLOR = (160, 180, 220, 90)
LABEL_COLOR = (136, 153, 187, 255)


def style_color(style: Union[KTSStyle, str, None]) -> str:
    """Marker colour for a style; unknown or missing styles use the Focused colour."""
    try:
        return STYLE_COLORS[KTSStyle(style)]
    except ValueError:
        return STYLE_COLORS[KTSStyle.FOCUSED]


def _clamp(score: float) -> float:
    return min(SCORE_MAX, max(SCORE_MIN, score))


def plot_position(uncertainty_score: float, possibility_score: float, size: int = PLOT_SIZE) -> tuple[float, float]:
    """
    Map the scores to plot coordinates in display pixels.

    Positive uncertainty (play) moves right, positive possibility (openness)
    moves up, i.e. towards smaller row numbers.
    """
    cx = cy = size / 2
    plot_range = (size / 2) * PLOT_INSET
    x = cx + (_clamp(uncertainty_score) / SCORE_MAX) * plot_range
    y = cy - (_clamp(possibility_score) / SCORE_MAX) * plot_range
    return x, y


def _centered_text(draw: ImageDraw.ImageDraw, xy: tuple[float, float], text: str, font, fill) -> None:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x, y = xy
    draw.text((x - (right - left) / 2, y - (bottom - top) / 2), text, font=font, fill=fill)


def draw_default_background(size: int = PLOT_SIZE) -> Image.Image:
    """Draw a quadrant backdrop with pole and quadrant labels."""
    image = Image.new("RGBA", (size, size), BACKGROUND_COLOR)
    layer = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    font = ImageFont.load_default()

    c = size / 2
    r = c * PLOT_INSET
    quadrants = {
        KTSStyle.INCREMENTAL: (c - r, c - r, c, c),
        KTSStyle.BREAKAWAY: (c, c - r, c + r, c),
        KTSStyle.FOCUSED: (c - r, c, c, c + r),
        KTSStyle.PLAYFUL: (c, c, c + r, c + r),
    }
    for style, box in quadrants.items():
        rgb = ImageColor.getrgb(STYLE_COLORS[style])
        draw.rectangle(box, fill=rgb + (28,), outline=rgb + (120,))
        _centered_text(
            draw,
            ((box[0] + box[2]) / 2, (box[1] + box[3]) / 2),
            style.value.upper(),
            font,
            rgb + (200,),
        )

    draw.line((c - r, c, c + r, c), fill=AXIS_COLOR, width=1)
    draw.line((c, c - r, c, c + r), fill=AXIS_COLOR, width=1)

    margin = (c - r) / 2
    _centered_text(draw, (margin, c), "Reason", font, LABEL_COLOR)
    _centered_text(draw, (size - margin, c), "Play", font, LABEL_COLOR)
    _centered_text(draw, (c, margin), "Openness", font, LABEL_COLOR)
    _centered_text(draw, (c, size - margin), "Structure", font, LABEL_COLOR)

    return Image.alpha_composite(image, layer)


@lru_cache(maxsize=8)
def load_background(path: Optional[str], size: int) -> Image.Image:
    """
    Load the backdrop once per (path, size); later calls reuse the cached image.

    Callers must copy the returned image before drawing on it.
    """
    if path:
        try:
            with Image.open(path) as img:
                return img.convert("RGBA").resize((size, size), Image.Resampling.LANCZOS)
        except OSError as e:
            logger.warning("Could not load plot background %s: %s", path, e)
    return draw_default_background(size)


def render_score_plot(
    uncertainty_score: Optional[float],
    possibility_score: Optional[float],
    style: Union[KTSStyle, str, None] = None,
    pixel_ratio: int = 2,
    size: int = PLOT_SIZE,
    background_path: Optional[Path] = None,
) -> Image.Image:
    """
    Render the quadrant plot.

    Args:
        uncertainty_score: Score in [-10, 10], or None for the idle plot
        possibility_score: Score in [-10, 10], or None for the idle plot
        style: Detected style, only used to pick the marker colour
        pixel_ratio: Device pixel ratio; the image is size * pixel_ratio wide
        size: Display size in CSS pixels
        background_path: Optional backdrop image

    Returns:
        RGBA image of size (size * pixel_ratio) squared
    """
    scaled = size * pixel_ratio
    canvas = load_background(str(background_path) if background_path else None, scaled).copy()

    if uncertainty_score is None or possibility_score is None:
        return canvas

    x, y = plot_position(uncertainty_score, possibility_score, size)
    x, y = x * pixel_ratio, y * pixel_ratio
    rgb = ImageColor.getrgb(style_color(style))

    # Glow: radial falloff from half to zero opacity
    glow_radius = round(GLOW_RADIUS * pixel_ratio)
    diameter = glow_radius * 2
    falloff = Image.radial_gradient("L").resize((diameter, diameter))
    alpha = Image.eval(falloff, lambda v: (255 - v) * HALF_ALPHA // 255)
    glow = Image.new("RGBA", (diameter, diameter), rgb + (0,))
    glow.putalpha(alpha)
    glow_layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    glow_layer.paste(glow, (round(x) - glow_radius, round(y) - glow_radius))
    canvas = Image.alpha_composite(canvas, glow_layer)

    marker_layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(marker_layer)
    point = POINT_RADIUS * pixel_ratio
    draw.ellipse((x - point, y - point, x + point, y + point), fill=rgb + (255,))
    ring = RING_RADIUS * pixel_ratio
    draw.ellipse(
        (x - ring, y - ring, x + ring, y + ring),
        outline=rgb + (HALF_ALPHA,),
        width=RING_WIDTH * pixel_ratio,
    )

    return Image.alpha_composite(canvas, marker_layer)
