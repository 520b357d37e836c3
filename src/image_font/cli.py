"""Command line entry point: render a string with an image font to a PNG."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .assets import Assets, Image
from .errors import ImageFontError
from .font import ImageFont
from .loader import is_image_font_path, load_image_font
from .log import LOG_LEVELS, configure_logging
from .render import ImageFontText, render_text


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Render text with a bitmap image font.")
    parser.add_argument("font", type=Path, help="Path to a *.image_font.json description.")
    parser.add_argument("text", help="Text to render. Characters the font lacks are dropped.")
    parser.add_argument(
        "--out",
        type=Path,
        default=Path("output.png"),
        help="Output PNG path (default: output.png).",
    )
    parser.add_argument(
        "--height",
        type=float,
        default=None,
        help="Render at this height instead of the font's native height.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default=None,
        help="Log level (default: $IMAGE_FONT_LOG_LEVEL or WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Render the requested text and print a JSON summary."""
    load_dotenv()
    args = parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if not is_image_font_path(args.font):
        print(f"ERROR: {args.font} is not a *.image_font.json file", file=sys.stderr)
        return 1

    image_fonts: Assets[ImageFont] = Assets()
    images: Assets[Image] = Assets()
    try:
        font = load_image_font(args.font, image_fonts, images)
        request = ImageFontText(text=args.text, font=font, font_height=args.height)
        image = render_text(request, image_fonts, images)
    except ImageFontError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    glyphs = len(image_fonts.get(font).filter_string(args.text))
    if image.width == 0 or image.height == 0:
        print("ERROR: nothing to render, the font has none of these characters", file=sys.stderr)
        return 1

    args.out.parent.mkdir(parents=True, exist_ok=True)
    image.to_pil().save(args.out)

    summary = {
        "output": str(args.out),
        "width": image.width,
        "height": image.height,
        "glyphs": glyphs,
    }
    print(json.dumps(summary))
    return 0


if __name__ == "__main__":
    sys.exit(main())
