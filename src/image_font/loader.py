"""Reading an `ImageFont` from its on-disk representation.

A font description is a JSON file with the compound suffix
`.image_font.json`, next to (or pointing at) the image holding the glyphs::

    {
      "image": "example_font.png",
      "layout": {"Automatic": " !\\"#$%&'()*+,-./0123\\n456789:;<=>?@ABCDEFG\\n..."}
    }

The layout holds exactly one of three tags:

* ``"Automatic"``: a grid string, see `layout.Automatic`.
* ``"ManualMonospace"``: ``{"size": [w, h], "coords": {"a": [x, y], ...}}``.
* ``"Manual"``: ``{"a": {"min": [x0, y0], "max": [x1, y1]}, ...}``.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from .assets import Assets, Handle, Image
from .errors import Io, NotAnImage, ParseFailure
from .font import ImageFont
from .layout import Automatic, GlyphRect, ImageFontLayout, Manual, ManualMonospace

logger = logging.getLogger(__name__)

EXTENSION = ".image_font.json"

Number = Union[int, float]


def is_image_font_path(path: Union[str, Path]) -> bool:
    return str(path).endswith(EXTENSION)


def _char_key(key: str) -> str:
    if len(key) != 1:
        raise ParseFailure(f"expected a single character as key, got {key!r}")
    return key


def _number(value: Any, what: str, integral: bool = False) -> Number:
    # bool is an int subclass, and never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseFailure(f"{what} must be a number, got {value!r}")
    if integral and not isinstance(value, int):
        raise ParseFailure(f"{what} must be an integer, got {value!r}")
    if not math.isfinite(value):
        raise ParseFailure(f"{what} must be finite, got {value!r}")
    if value < 0:
        raise ParseFailure(f"{what} must not be negative, got {value!r}")
    return value


def _pair(value: Any, what: str, integral: bool = False) -> Tuple[Number, Number]:
    if not isinstance(value, list) or len(value) != 2:
        raise ParseFailure(f"{what} must be a list of two numbers, got {value!r}")
    return _number(value[0], what, integral), _number(value[1], what, integral)


def _object(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ParseFailure(f"{what} must be an object, got {type(value).__name__}")
    return value


def _compact(value: float) -> Number:
    return int(value) if float(value).is_integer() else value


def layout_from_data(data: Any) -> ImageFontLayout:
    data = _object(data, "layout")
    if len(data) != 1:
        raise ParseFailure(f"layout must have exactly one tag, got {sorted(data)}")
    ((tag, body),) = data.items()

    if tag == "Automatic":
        if not isinstance(body, str):
            raise ParseFailure("Automatic layout must be a string")
        return Automatic(body)

    if tag == "ManualMonospace":
        body = _object(body, "ManualMonospace layout")
        unknown = set(body) - {"size", "coords"}
        if unknown or "size" not in body or "coords" not in body:
            raise ParseFailure("ManualMonospace layout needs exactly the fields 'size' and 'coords'")
        size = _pair(body["size"], "size", integral=True)
        coords = {
            _char_key(char): _pair(top_left, f"coords[{char!r}]", integral=True)
            for char, top_left in _object(body["coords"], "coords").items()
        }
        return ManualMonospace(size=size, coords=coords)

    if tag == "Manual":
        rects = {}
        for char, rect in _object(body, "Manual layout").items():
            rect = _object(rect, f"rect for {char!r}")
            if set(rect) != {"min", "max"}:
                raise ParseFailure(f"rect for {char!r} needs exactly the fields 'min' and 'max'")
            rects[_char_key(char)] = GlyphRect.from_corners(
                _pair(rect["min"], f"{char!r}.min"), _pair(rect["max"], f"{char!r}.max")
            )
        return Manual(rects=rects)

    raise ParseFailure(f"unknown layout kind {tag!r}")


def layout_to_data(layout: ImageFontLayout) -> Dict[str, Any]:
    if isinstance(layout, Automatic):
        return {"Automatic": layout.grid}
    if isinstance(layout, ManualMonospace):
        return {
            "ManualMonospace": {
                "size": list(layout.size),
                "coords": {char: list(top_left) for char, top_left in layout.coords.items()},
            }
        }
    if isinstance(layout, Manual):
        return {
            "Manual": {
                char: {
                    "min": [_compact(rect.min_x), _compact(rect.min_y)],
                    "max": [_compact(rect.max_x), _compact(rect.max_y)],
                }
                for char, rect in layout.rects.items()
            }
        }
    raise TypeError(f"unknown layout kind: {type(layout).__name__}")


@dataclass(frozen=True)
class ImageFontSettings:
    """On-disk representation of an `ImageFont`, written by humans."""

    image: Path
    layout: ImageFontLayout

    @classmethod
    def from_json(cls, text: str) -> ImageFontSettings:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseFailure(str(e)) from e
        data = _object(data, "font description")
        unknown = set(data) - {"image", "layout"}
        if unknown:
            raise ParseFailure(f"unexpected fields {sorted(unknown)}")
        image = data.get("image")
        if not isinstance(image, str) or not image:
            raise ParseFailure("'image' must be a non-empty path string")
        if "layout" not in data:
            raise ParseFailure("missing 'layout'")
        return cls(image=Path(image), layout=layout_from_data(data["layout"]))

    def to_json(self, indent: Optional[int] = 2) -> str:
        data = {"image": self.image.as_posix(), "layout": layout_to_data(self.layout)}
        return json.dumps(data, indent=indent, ensure_ascii=False)


def read_settings(path: Path) -> ImageFontSettings:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise Io(e) from e
    except UnicodeDecodeError as e:
        raise ParseFailure(f"{path} is not valid UTF-8: {e}") from e
    return ImageFontSettings.from_json(text)


def load_image(path: Path) -> Image:
    """Decode the image at `path` into an RGBA8 buffer."""
    try:
        with PILImage.open(path) as image:
            image.load()
            return Image.from_pil(image)
    except UnidentifiedImageError as e:
        raise NotAnImage(path) from e
    except OSError as e:
        raise Io(e) from e


def _build_font(path: Path, images: Assets[Image]) -> ImageFont:
    path = Path(path)
    settings = read_settings(path)
    # need the image decoded now because the layout depends on its size
    image = load_image(path.parent / settings.image)
    texture = images.reserve_handle()
    font = ImageFont.from_layout(texture, settings.layout, image.size)
    images.insert(texture, image)
    logger.info("Loaded image font %s with %d glyphs", path, len(font.char_map))
    return font


def load_image_font(path: Path, image_fonts: Assets[ImageFont], images: Assets[Image]) -> Handle[ImageFont]:
    """Load the description at `path`, register its texture and the font.

    Relative image paths are resolved against the description's directory.
    """
    return image_fonts.add(_build_font(path, images))


def reload_image_font(
    path: Path,
    handle: Handle[ImageFont],
    image_fonts: Assets[ImageFont],
    images: Assets[Image],
) -> None:
    """Replace the font behind `handle` with a fresh load of `path`.

    The previous texture is dropped from `images`. On failure the old font is
    left untouched.
    """
    font = _build_font(path, images)
    previous = image_fonts.get(handle)
    image_fonts.insert(handle, font)
    if previous is not None and previous.texture != font.texture:
        images.remove(previous.texture)
