"""Fixed label positions and text styles for the two profile images."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple, Tuple

Point = Tuple[int, int]
Layout = Mapping[str, Point]

# Centre points (x, y) in pixels of the background images.
ANIMAL_LAYOUT: Layout = MappingProxyType({
    "lobo": (85, 280),
    "aguia": (380, 280),
    "tubarao": (85, 635),
    "gato": (380, 635),
})

BRAIN_LAYOUT: Layout = MappingProxyType({
    "razao": (93, 450),
    "emocao": (540, 450),
    "pensante": (315, 215),
    "atuante": (315, 780),
})


class TextStyle(NamedTuple):
    font_size: int
    fill: str


NORMAL_STYLE = TextStyle(font_size=36, fill="#FFFFFF")
EMPHASIZED_STYLE = TextStyle(font_size=40, fill="#FFFF00")

SHADOW_COLOR = (0, 0, 0, 204)  # rgba(0, 0, 0, 0.8)
SHADOW_BLUR = 10


def resolve_style(is_highest: bool) -> TextStyle:
    """Return the emphasized style for the highest value, the normal one otherwise."""
    return EMPHASIZED_STYLE if is_highest else NORMAL_STYLE
