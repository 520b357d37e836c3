"""Exceptions raised while loading and rendering image fonts."""

from __future__ import annotations

from pathlib import Path


class ImageFontError(Exception):
    pass


class ImageFontLoadError(ImageFontError):
    """Loading a font description failed. Terminal for that one load."""


class ParseFailure(ImageFontLoadError):
    def __init__(self, message: str) -> None:
        super().__init__(f"couldn't parse on-disk representation: {message}")


class Io(ImageFontLoadError):
    def __init__(self, error: OSError) -> None:
        super().__init__(f"i/o error when loading image font: {error}")
        self.error = error


class NotAnImage(ImageFontLoadError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"path at {path} wasn't loaded as an image")
        self.path = path


class EmptyDescription(ImageFontLoadError):
    def __init__(self) -> None:
        super().__init__("can't create character map from an empty string")


class ImageFontRenderError(ImageFontError):
    """Rendering one text failed. The text keeps its previous image."""


class MissingImageFontAsset(ImageFontRenderError):
    def __init__(self) -> None:
        super().__init__("ImageFont asset not loaded")


class MissingTextureAsset(ImageFontRenderError):
    def __init__(self) -> None:
        super().__init__("Font texture asset not loaded")


class CopyFailure(ImageFontRenderError):
    def __init__(self, message: str) -> None:
        super().__init__(f"failed to copy from atlas: {message}")


class UnknownError(ImageFontRenderError):
    def __init__(self, message: str = "internal error") -> None:
        super().__init__(message)
