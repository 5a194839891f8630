"""
Draw placed words as a Pillow image or an SVG document.
"""

import base64
import os
from typing import Optional, Sequence
from xml.sax import saxutils

import numpy as np
from PIL import Image

from .colors import ColorFunc, random_color_func, to_rgba
from .errors import ConfigurationError
from .layout import Word
from .text import GlyphShape

FONT_FORMATS = {".ttf": "truetype", ".otf": "opentype", ".woff": "woff", ".woff2": "woff2"}


def _check_scale(scale: float) -> None:
    if not 0 < scale <= 100:
        raise ConfigurationError("scale must be in (0, 100], got %r" % scale)


def _scaled_shape(word: Word, shaper, scale: float) -> GlyphShape:
    if scale == 1:
        return word.shape
    shape = shaper.shape(word.text, word.font_size * scale)
    return shape.rotate() if word.rotated else shape


def to_image(
    words: Sequence[Word],
    width: int,
    height: int,
    shaper,
    scale: float = 1.0,
    background_color=(0, 0, 0, 255),
    color_func: Optional[ColorFunc] = None,
    rng: Optional[np.random.Generator] = None,
) -> Image.Image:
    """Render words onto an RGBA image of size (width * scale, height * scale).

    At scale 1 the exact coverage used for placement is pasted; otherwise
    each word is re-shaped at its scaled font size.
    """
    _check_scale(scale)
    color_func = color_func or random_color_func
    rng = rng if rng is not None else np.random.default_rng()

    img = Image.new("RGBA", (int(width * scale), int(height * scale)), to_rgba(background_color))
    for word in words:
        color = to_rgba(color_func(word, rng))
        shape = _scaled_shape(word, shaper, scale)
        x, y = int(word.position[0] * scale), int(word.position[1] * scale)
        fill = Image.new("RGBA", shape.coverage.size, color)
        img.paste(fill, (x, y), shape.coverage)
    return img


def _svg_color(color) -> str:
    r, g, b, a = to_rgba(color)
    return "rgba({},{},{},{:.3g})".format(r, g, b, a / 255)


def _font_face(font) -> str:
    if font.path is None:
        return ""
    ext = os.path.splitext(font.path)[1].lower()
    with open(font.path, "rb") as f:
        data = base64.b64encode(f.read()).decode("ascii")
    return (
        '<style>@font-face{{font-family:{family};'
        'src:url("data:font/{sub};base64,{data}") format("{fmt}");}}</style>'.format(
            family=saxutils.escape(repr(font.family)),
            sub=ext.lstrip(".") or "ttf",
            data=data,
            fmt=FONT_FORMATS.get(ext, "truetype"),
        )
    )


def to_svg(
    words: Sequence[Word],
    width: int,
    height: int,
    shaper,
    scale: float = 1.0,
    background_color=(0, 0, 0, 255),
    color_func: Optional[ColorFunc] = None,
    rng: Optional[np.random.Generator] = None,
    embed_font: bool = False,
) -> str:
    """Render words as an SVG string.

    Text is positioned on its baseline so that an SVG viewer with the same
    font draws the glyphs where the layout put them. Rotated words are turned
    by -90 degrees, i.e. they read bottom to top.
    """
    _check_scale(scale)
    color_func = color_func or random_color_func
    rng = rng if rng is not None else np.random.default_rng()
    font = shaper.font

    out_w, out_h = int(width * scale), int(height * scale)
    result = [
        '<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" '
        'viewBox="0 0 {w} {h}">'.format(w=out_w, h=out_h)
    ]
    if embed_font:
        result.append(_font_face(font))
    family = font.family if font.path is None else repr(font.family)
    result.append("<style>text{{font-family:{};}}</style>".format(saxutils.escape(family)))
    result.append('<rect width="100%" height="100%" style="fill:{}"></rect>'.format(
        _svg_color(background_color)))

    for word in words:
        color = color_func(word, rng)
        size = word.font_size * scale
        shape = shaper.shape(word.text, size)
        left, top = shape.offset
        ascent, _ = font.at_size(size).getmetrics()
        x, y = word.position[0] * scale, word.position[1] * scale
        if word.rotated:
            # (u, v) in the upright box lands on (v, width - u) after the turn
            x += ascent - top
            y += shape.width + left
            transform = "translate({:.2f},{:.2f}) rotate(-90)".format(x, y)
        else:
            x -= left
            y += ascent - top
            transform = "translate({:.2f},{:.2f})".format(x, y)
        result.append(
            '<text transform="{}" font-size="{:.2f}" style="fill:{}">{}</text>'.format(
                transform, size, _svg_color(color), saxutils.escape(word.text)))

    result.append("</svg>")
    return "\n".join(result)
