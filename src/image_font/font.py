"""Resolved image fonts: a texture handle plus where each glyph lives in it."""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .assets import Handle, Image
from .layout import GlyphRect, ImageFontLayout, into_char_map


@dataclass(frozen=True)
class ImageFont:
    """An image font as well as the mapping of characters to regions inside it.

    Never mutated after construction. Reloading a font replaces the whole
    object in its store.
    """

    texture: Handle[Image]
    size: Tuple[int, int]
    char_map: Mapping[str, GlyphRect]

    @classmethod
    def from_char_map(
        cls,
        texture: Handle[Image],
        size: Tuple[int, int],
        char_map: Mapping[str, GlyphRect],
    ) -> ImageFont:
        return cls(texture=texture, size=size, char_map=MappingProxyType(dict(char_map)))

    @classmethod
    def from_layout(cls, texture: Handle[Image], layout: ImageFontLayout, size: Tuple[int, int]) -> ImageFont:
        width, height = size
        return cls.from_char_map(texture, size, into_char_map(layout, width, height))

    def supports(self, char: str) -> bool:
        return char in self.char_map

    def filter_string(self, text: str) -> str:
        """Drop every character this font has no glyph for."""
        return "".join(char for char in text if char in self.char_map)

    def max_glyph_height(self, text: Optional[str] = None) -> int:
        chars = self.char_map if text is None else self.filter_string(text)
        heights = [self.char_map[char].height for char in chars]
        if not heights:
            return 0
        return math.ceil(max(heights))
