"""Percentage label rendering.

This module draws formatted percentages onto a background image using
Pillow. Each label is centred on a fixed point of a layout, carries a
blurred drop shadow, and the label holding the highest value of its set is
emphasized with a larger font size and an accent colour.
"""

from __future__ import annotations

import base64
import logging
from io import BytesIO
from typing import Mapping, Tuple, Union

from PIL import Image, ImageDraw, ImageFilter, ImageFont  # type: ignore[import]

from annotator.errors import RenderError
from annotator.layouts import SHADOW_BLUR, SHADOW_COLOR, Layout, resolve_style

logger = logging.getLogger(__name__)

Number = Union[int, float]


def _open_image(data: bytes) -> Image.Image:
    """Open raw image bytes with Pillow and convert to RGBA."""
    img = Image.open(BytesIO(data))
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return img


def highest_key(values: Mapping[str, Number]) -> str:
    """Return the key holding the highest value.

    The scan keeps the first key whose value is strictly greater than every
    value before it, so ties resolve to the earliest key.

    Raises:
        ValueError: If ``values`` is empty.
    """
    best_key = None
    best_value = None
    for key, value in values.items():
        if best_value is None or value > best_value:
            best_key, best_value = key, value
    if best_key is None:
        raise ValueError("Cannot pick the highest value of an empty set.")
    return best_key


def format_percentage(value: Number) -> str:
    """Format a value as ``"<value>%"``, printing integral floats without ``.0``."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}%"


def draw_text_with_shadow(
    surface: Image.Image,
    text: str,
    center: Tuple[int, int],
    font: ImageFont.FreeTypeFont,
    fill: str,
) -> None:
    """Draw ``text`` centred on ``center`` with a blurred shadow beneath it.

    The shadow is rendered on its own transparent layer and composited onto
    ``surface`` before the glyphs are filled, so it never affects text drawn
    afterwards. Only a padded box around the glyphs is blurred.
    """
    x, y = center
    left, top, right, bottom = (int(v) for v in font.getbbox(text, anchor="mm"))
    pad = SHADOW_BLUR * 3
    origin_x, origin_y = x + left - pad, y + top - pad
    shadow = Image.new("RGBA", (right - left + 2 * pad, bottom - top + 2 * pad), (0, 0, 0, 0))
    ImageDraw.Draw(shadow).text(
        (x - origin_x, y - origin_y), text, font=font, fill=SHADOW_COLOR, anchor="mm"
    )
    # A canvas shadow blur of N corresponds to a Gaussian sigma of N / 2.
    shadow = shadow.filter(ImageFilter.GaussianBlur(radius=SHADOW_BLUR / 2))

    # Clip the layer to the surface; alpha_composite needs non-negative boxes.
    dest_left, dest_top = max(origin_x, 0), max(origin_y, 0)
    dest_right = min(origin_x + shadow.width, surface.width)
    dest_bottom = min(origin_y + shadow.height, surface.height)
    if dest_right > dest_left and dest_bottom > dest_top:
        surface.alpha_composite(
            shadow,
            dest=(dest_left, dest_top),
            source=(
                dest_left - origin_x,
                dest_top - origin_y,
                dest_right - origin_x,
                dest_bottom - origin_y,
            ),
        )
    ImageDraw.Draw(surface).text(center, text, font=font, fill=fill, anchor="mm")


def annotate(
    background: bytes,
    values: Mapping[str, Number],
    layout: Layout,
    font_path: str,
) -> bytes:
    """Render every value of ``values`` at its position in ``layout``.

    Args:
        background: Raw bytes of the background image.
        values: Percentages keyed by category.
        layout: Centre point for each category; must have the same keys as
            ``values``.
        font_path: Path of the TrueType font used for every label.

    Returns:
        The annotated image as PNG bytes, with the background's dimensions.

    Raises:
        ValueError: If the keys of ``values`` and ``layout`` differ.
    """
    if set(values) != set(layout):
        raise ValueError(
            f"Values {sorted(values)} do not match layout keys {sorted(layout)}."
        )
    base = _open_image(background)
    surface = Image.new("RGBA", base.size, (0, 0, 0, 0))
    surface.alpha_composite(base, (0, 0))

    leader = highest_key(values)
    fonts = {}
    for key, value in values.items():
        style = resolve_style(key == leader)
        if style.font_size not in fonts:
            fonts[style.font_size] = ImageFont.truetype(font_path, style.font_size)
        draw_text_with_shadow(
            surface, format_percentage(value), layout[key], fonts[style.font_size], style.fill
        )

    buffer = BytesIO()
    surface.save(buffer, format="PNG")
    return buffer.getvalue()


def to_data_url(png: bytes) -> str:
    """Wrap PNG bytes in a ``data:`` URI."""
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


def render_pass(
    name: str,
    background: bytes,
    values: Mapping[str, Number],
    layout: Layout,
    font_path: str,
) -> str:
    """Run one annotation pass and return the result as a PNG data URI.

    Raises:
        RenderError: If the background cannot be decoded or drawing fails.
            The error names the pass.
    """
    try:
        png = annotate(background, values, layout, font_path)
    except Exception as exc:
        raise RenderError(name, exc) from exc
    logger.debug("Rendered %s image (%d bytes)", name, len(png))
    return to_data_url(png)
