"""Re-rendering texts when their content or their font changes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from .assets import AssetEvent, Assets, Handle, Image
from .errors import ImageFontRenderError, MissingImageFontAsset, MissingTextureAsset
from .font import ImageFont
from .render import ImageFontText, render_text

logger = logging.getLogger(__name__)

NOT_RENDERED = -1


@dataclass
class TextSprite:
    """An `ImageFontText` and the image it was last rendered to."""

    text: ImageFontText
    image: Optional[Handle[Image]] = None
    rendered_version: int = NOT_RENDERED

    @property
    def dirty(self) -> bool:
        return self.rendered_version != self.text.version


def mark_changed_fonts_as_dirty(
    events: Iterable[AssetEvent[ImageFont]],
    texts: Iterable[ImageFontText],
) -> int:
    """Bump every text whose font was loaded or modified. Returns how many."""
    changed_fonts: Set[Handle[ImageFont]] = set()
    for event in events:
        if event.kind in ("added", "modified"):
            logger.info("Image font %r finished loading; marking as dirty", event.handle)
            changed_fonts.add(event.handle)

    marked = 0
    for text in texts:
        if text.font in changed_fonts:
            text.mark_changed()
            marked += 1
    return marked


def render_sprites(
    sprites: Iterable[TextSprite],
    image_fonts: Assets[ImageFont],
    images: Assets[Image],
) -> List[TextSprite]:
    """Render every dirty sprite into a fresh image. Returns the ones rendered.

    A sprite whose font or texture isn't loaded yet stays dirty and is tried
    again on the next call. Any other failure is logged and the sprite keeps
    its previous image until its text changes again.
    """
    rendered: List[TextSprite] = []
    for sprite in sprites:
        if not sprite.dirty:
            continue
        version = sprite.text.version
        try:
            image = render_text(sprite.text, image_fonts, images)
        except (MissingImageFontAsset, MissingTextureAsset) as e:
            logger.debug("Not rendering [%s] yet: %s", sprite.text.text, e)
            continue
        except ImageFontRenderError as e:
            logger.error("Error when rendering image font text %r: %s", sprite.text, e)
            sprite.rendered_version = version
            continue
        # the old image is no longer referenced by this sprite
        if sprite.image is not None:
            images.remove(sprite.image)
        sprite.image = images.add(image)
        sprite.rendered_version = version
        rendered.append(sprite)
    return rendered


class ImageFontRenderer:
    """Runs one update pass over a set of sprites: dirty marking, then rendering."""

    def __init__(self, image_fonts: Assets[ImageFont], images: Assets[Image]) -> None:
        self.image_fonts = image_fonts
        self.images = images

    def update(self, sprites: Iterable[TextSprite]) -> List[TextSprite]:
        sprites = list(sprites)
        # nothing reacts to image changes
        self.images.drain_events()
        mark_changed_fonts_as_dirty(self.image_fonts.drain_events(), (sprite.text for sprite in sprites))
        return render_sprites(sprites, self.image_fonts, self.images)
