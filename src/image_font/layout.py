"""Human-written glyph layouts and their conversion to glyph rectangles."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Tuple, Union

from .errors import EmptyDescription

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GlyphRect:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_corners(cls, top_left: Tuple[float, float], bottom_right: Tuple[float, float]) -> GlyphRect:
        return cls(
            min_x=float(min(top_left[0], bottom_right[0])),
            min_y=float(min(top_left[1], bottom_right[1])),
            max_x=float(max(top_left[0], bottom_right[0])),
            max_y=float(max(top_left[1], bottom_right[1])),
        )

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class Automatic:
    """Treats the string as a grid laid over the image.

    One leading and one trailing newline are stripped. Spaces are kept since a
    font can use them as padding or as the space glyph itself.
    """

    grid: str


@dataclass(frozen=True)
class ManualMonospace:
    """Every glyph has the same size; only top-left corners are given."""

    size: Tuple[int, int]
    coords: Mapping[str, Tuple[int, int]] = field(default_factory=dict)


@dataclass(frozen=True)
class Manual:
    """Fully specified bounds for every glyph."""

    rects: Mapping[str, GlyphRect] = field(default_factory=dict)


ImageFontLayout = Union[Automatic, ManualMonospace, Manual]


def _strip_one_newline(text: str) -> str:
    # str.strip() would also eat spaces, which are glyphs here
    if text.startswith("\n"):
        text = text[1:]
    if text.endswith("\n"):
        text = text[:-1]
    return text


def _grid_char_map(layout: Automatic, width: int, height: int) -> Dict[str, GlyphRect]:
    grid = _strip_one_newline(layout.grid)
    if not grid:
        raise EmptyDescription()
    lines = [line.removesuffix("\r") for line in grid.split("\n")]
    columns = max(len(line) for line in lines)
    rows = len(lines)
    if columns == 0:
        raise EmptyDescription()

    if width % columns != 0:
        logger.warning("image width %d is not an exact multiple of character count %d", width, columns)
    if height % rows != 0:
        logger.warning("image height %d is not an exact multiple of line count %d", height, rows)

    cell_width = float(width // columns)
    cell_height = float(height // rows)

    char_map: Dict[str, GlyphRect] = {}
    for row, line in enumerate(lines):
        for col, char in enumerate(line):
            char_map[char] = GlyphRect(
                cell_width * col,
                cell_height * row,
                cell_width * (col + 1),
                cell_height * (row + 1),
            )
    return char_map


def _monospace_char_map(layout: ManualMonospace) -> Dict[str, GlyphRect]:
    glyph_w, glyph_h = layout.size
    return {
        char: GlyphRect.from_corners((x, y), (x + glyph_w, y + glyph_h))
        for char, (x, y) in layout.coords.items()
    }


def into_char_map(layout: ImageFontLayout, width: int, height: int) -> Dict[str, GlyphRect]:
    """Given the source image size, map each character to its rectangle."""
    if isinstance(layout, Automatic):
        return _grid_char_map(layout, width, height)
    if isinstance(layout, ManualMonospace):
        return _monospace_char_map(layout)
    if isinstance(layout, Manual):
        return dict(layout.rects)
    raise TypeError(f"unknown layout kind: {type(layout).__name__}")


resolve = into_char_map
