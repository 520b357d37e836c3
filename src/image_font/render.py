"""Compositing a string into a single image using an `ImageFont`."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from PIL import Image as PILImage

from .assets import BYTES_PER_PIXEL, Assets, Handle, Image
from .errors import CopyFailure, MissingImageFontAsset, MissingTextureAsset, UnknownError
from .font import ImageFont
from .layout import GlyphRect

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


@dataclass
class ImageFontText:
    """Text rendered using an `ImageFont`.

    `font_height` overrides the height the text is rendered at. Use an integer
    multiple of the font's native height to keep pixels square; fractional
    values are allowed for things like animations.

    `version` is bumped on every change so a renderer can tell which texts
    need to be composited again.
    """

    text: str
    font: Handle[ImageFont]
    font_height: Optional[float] = None
    version: int = field(default=0, compare=False)

    def mark_changed(self) -> None:
        self.version += 1

    def set_text(self, text: str) -> None:
        self.text = text
        self.mark_changed()

    def set_font(self, font: Handle[ImageFont]) -> None:
        self.font = font
        self.mark_changed()

    def set_font_height(self, font_height: Optional[float]) -> None:
        self.font_height = font_height
        self.mark_changed()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _pixel_box(rect: GlyphRect) -> Tuple[int, int, int, int]:
    """Origin truncated to whole pixels, size rounded up."""
    return int(rect.min_x), int(rect.min_y), math.ceil(rect.width), math.ceil(rect.height)


def _source_image(texture: Image) -> PILImage.Image:
    expected = texture.width * texture.height * BYTES_PER_PIXEL
    if len(texture.data) != expected:
        raise UnknownError(
            f"font texture holds {len(texture.data)} bytes, expected {expected} "
            f"for {texture.width}x{texture.height}"
        )
    return texture.to_pil()


def _check_in_bounds(char: str, box: Tuple[int, int, int, int], texture: Image) -> None:
    x, y, width, height = box
    if x < 0 or y < 0 or x + width > texture.width or y + height > texture.height:
        raise CopyFailure(
            f"glyph {char!r} at ({x}, {y}) size {width}x{height} is outside "
            f"the {texture.width}x{texture.height} font texture"
        )


def composite(text: str, font: ImageFont, texture: Image, font_height: Optional[float] = None) -> Image:
    """Lay out the glyphs for `text` left to right in a new image.

    Characters the font doesn't have are dropped. Glyphs are top-aligned, and
    the result is as tall as the tallest glyph used.
    """
    text = font.filter_string(text)
    if not text:
        return Image.empty()

    boxes: List[Tuple[str, Tuple[int, int, int, int]]] = [
        (char, _pixel_box(font.char_map[char])) for char in text
    ]
    width = sum(box[2] for _, box in boxes)
    height = math.ceil(max(font.char_map[char].height for char in text))
    if width == 0 or height == 0:
        logger.debug("glyphs for [%s] cover no pixels", text)
        return Image.empty()

    source = _source_image(texture)
    output = PILImage.new("RGBA", (width, height), TRANSPARENT)

    cursor = 0
    for char, box in boxes:
        _check_in_bounds(char, box, texture)
        x, y, glyph_width, glyph_height = box
        if glyph_width and glyph_height:
            try:
                glyph = source.crop((x, y, x + glyph_width, y + glyph_height))
                output.paste(glyph, (cursor, 0))
            except (ValueError, OSError) as e:
                raise CopyFailure(str(e)) from e
        cursor += glyph_width

    if font_height is not None:
        new_width = _round_half_up(width * font_height / height)
        new_height = int(font_height)
        if new_width <= 0 or new_height <= 0:
            logger.debug("font height %s scales %dx%d text to nothing", font_height, width, height)
            return Image.empty()
        output = output.resize((new_width, new_height), resample=PILImage.Resampling.NEAREST)

    return Image.from_pil(output, sampler="nearest")


def render_text(
    image_font_text: ImageFontText,
    image_fonts: Assets[ImageFont],
    images: Assets[Image],
) -> Image:
    """Render the text inside `image_font_text` to a single output image.

    Raises `MissingImageFontAsset` or `MissingTextureAsset` while the font or
    its texture isn't loaded yet; the caller is expected to try again later.
    """
    image_font = image_fonts.get(image_font_text.font)
    if image_font is None:
        raise MissingImageFontAsset()
    font_texture = images.get(image_font.texture)
    if font_texture is None:
        raise MissingTextureAsset()

    logger.debug("Rendering [%s]", image_font_text.text)
    return composite(image_font_text.text, image_font, font_texture, image_font_text.font_height)
