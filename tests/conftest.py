from __future__ import annotations

import json
from pathlib import Path
from typing import Set, Tuple

import pytest
from PIL import Image as PILImage

from image_font import Assets, Image, ImageFont


def gradient_image(width: int, height: int) -> Image:
    """Every pixel has a colour unique to its position."""
    data = bytearray()
    for y in range(height):
        for x in range(width):
            data += bytes((x * 16 % 256, y * 16 % 256, (x + y) % 256, 255))
    return Image(width=width, height=height, data=bytes(data))


def pixel_set(image: Image) -> Set[Tuple[int, int, int, int]]:
    return {image.pixel(x, y) for y in range(image.height) for x in range(image.width)}


@pytest.fixture
def images() -> Assets[Image]:
    return Assets()


@pytest.fixture
def fonts() -> Assets[ImageFont]:
    return Assets()


@pytest.fixture
def write_font(tmp_path: Path):
    """Write a PNG plus a description for it, return the description path."""

    def _write(layout: dict, size: Tuple[int, int] = (4, 4), name: str = "test") -> Path:
        texture = gradient_image(*size)
        texture.to_pil().save(tmp_path / f"{name}.png")
        description = tmp_path / f"{name}.image_font.json"
        description.write_text(json.dumps({"image": f"{name}.png", "layout": layout}), encoding="utf-8")
        return description

    return _write


def save_png(path: Path, width: int, height: int) -> None:
    PILImage.new("RGBA", (width, height), (255, 0, 0, 255)).save(path)
