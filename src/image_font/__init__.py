"""Render pixel fonts from spritesheet images."""

from .assets import AssetEvent, Assets, Handle, Image
from .errors import (
    CopyFailure,
    EmptyDescription,
    ImageFontError,
    ImageFontLoadError,
    ImageFontRenderError,
    Io,
    MissingImageFontAsset,
    MissingTextureAsset,
    NotAnImage,
    ParseFailure,
    UnknownError,
)
from .font import ImageFont
from .layout import Automatic, GlyphRect, ImageFontLayout, Manual, ManualMonospace, into_char_map, resolve
from .loader import ImageFontSettings, is_image_font_path, load_image_font, reload_image_font
from .render import ImageFontText, composite, render_text
from .systems import ImageFontRenderer, TextSprite, mark_changed_fonts_as_dirty, render_sprites

__version__ = "0.4.0"

__all__ = [
    "AssetEvent",
    "Assets",
    "Automatic",
    "CopyFailure",
    "EmptyDescription",
    "GlyphRect",
    "Handle",
    "Image",
    "ImageFont",
    "ImageFontError",
    "ImageFontLayout",
    "ImageFontLoadError",
    "ImageFontRenderError",
    "ImageFontRenderer",
    "ImageFontSettings",
    "ImageFontText",
    "Io",
    "Manual",
    "ManualMonospace",
    "MissingImageFontAsset",
    "MissingTextureAsset",
    "NotAnImage",
    "ParseFailure",
    "TextSprite",
    "UnknownError",
    "composite",
    "into_char_map",
    "is_image_font_path",
    "load_image_font",
    "mark_changed_fonts_as_dirty",
    "reload_image_font",
    "render_sprites",
    "render_text",
    "resolve",
]
