"""
Fonts and glyph shaping on top of Pillow.

A GlyphShape is the rasterized coverage of a string at one font size, cropped
to its ink bounding box. The layout engine only needs its size and ink; the
renderer pastes the same coverage in colour, so what gets drawn is exactly
what was placed.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

FALLBACK_FONTS = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/Library/Fonts/Arial.ttf",
    "C:\\Windows\\Fonts\\arial.ttf",
)


def _pixel_size(size: float) -> int:
    return max(1, int(round(size)))


@dataclass(frozen=True)
class FontHandle:
    """Immutable font reference shared by the whole run.

    ``path`` is None when Pillow's bundled default font is used.
    """

    path: Optional[str] = None

    @classmethod
    def load(cls, path: Optional[str] = None) -> "FontHandle":
        """Resolve a font file.

        Order: explicit path, the FONT_PATH environment variable, common
        system fonts, then Pillow's built-in font.
        """
        if path is None:
            path = os.environ.get("FONT_PATH")
        if path is not None:
            # fail loudly on a bad explicit font instead of silently falling back
            ImageFont.truetype(path, 10)
            return cls(path)
        for candidate in FALLBACK_FONTS:
            if os.path.exists(candidate):
                logger.debug("Using system font %s", candidate)
                return cls(candidate)
        logger.debug("No system font found, using Pillow's default font")
        return cls(None)

    def at_size(self, size: float) -> ImageFont.FreeTypeFont:
        return _font_at_size(self.path, _pixel_size(size))

    @property
    def family(self) -> str:
        if self.path is None:
            return "sans-serif"
        return self.at_size(12).getname()[0]


@lru_cache(maxsize=256)
def _font_at_size(path: Optional[str], size: int):
    if path is None:
        return ImageFont.load_default(size=size)
    return ImageFont.truetype(path, size)


@dataclass(frozen=True)
class GlyphShape:
    """Coverage of ``text`` at ``font_size``.

    ``coverage`` is an "L" image whose size is the ink bounding box.
    ``offset`` is the (left, top) of that box relative to the drawing origin
    Pillow would use for the string.
    """

    text: str
    font_size: float
    coverage: Image.Image
    offset: Tuple[int, int] = (0, 0)
    rotated: bool = False

    @property
    def width(self) -> int:
        return self.coverage.width

    @property
    def height(self) -> int:
        return self.coverage.height

    @property
    def ink(self) -> np.ndarray:
        return np.asarray(self.coverage) > 0

    def rotate(self) -> "GlyphShape":
        """Turn the shape 90 degrees counter-clockwise."""
        return GlyphShape(
            text=self.text,
            font_size=self.font_size,
            coverage=self.coverage.transpose(Image.Transpose.ROTATE_90),
            offset=self.offset,
            rotated=not self.rotated,
        )


class PilGlyphShaper:
    """Rasterizes strings with a FontHandle.

    Results are cached, shaping the same (text, size) twice returns the same
    GlyphShape object.
    """

    def __init__(self, font: Optional[FontHandle] = None):
        self.font = font if font is not None else FontHandle.load()
        self._shape = lru_cache(maxsize=1024)(self._shape_uncached)

    def shape(self, text: str, size: float) -> GlyphShape:
        return self._shape(text, float(size))

    def _shape_uncached(self, text: str, size: float) -> GlyphShape:
        font = self.font.at_size(size)
        left, top, right, bottom = (int(v) for v in font.getbbox(text))
        width, height = max(right - left, 1), max(bottom - top, 1)
        coverage = Image.new("L", (width, height), 0)
        ImageDraw.Draw(coverage).text((-left, -top), text, font=font, fill=255)
        return GlyphShape(text=text, font_size=size, coverage=coverage, offset=(left, top))
