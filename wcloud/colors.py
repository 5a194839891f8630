"""
Colour functions for rendering.

A colour function takes ``(word, rng)`` and returns anything Pillow's
ImageColor understands, or an RGB(A) tuple.
"""

import math
from typing import Callable, List, Sequence, Union

import numpy as np
from PIL import ImageColor

# --- RColorBrewer palettes ---
PALETTES = {
    "Dark2": ["#1B9E77", "#D95F02", "#7570B3", "#E7298A", "#66A61E", "#E6AB02", "#A6761D", "#666666"],
    "Set1": ["#E41A1C", "#377EB8", "#4DAF4A", "#984EA3", "#FF7F00", "#FFFF33", "#A65628", "#F781BF"],
    "Set2": ["#66C2A5", "#FC8D62", "#8DA0CB", "#E78AC3", "#A6D854", "#FFD92F", "#E5C494", "#B3B3B3"],
    "Paired": ["#A6CEE3", "#1F78B4", "#B2DF8A", "#33A02C", "#FB9A99", "#E31A1C", "#FDBF6F", "#FF7F00"],
    "Blues": ["#C6DBEF", "#9ECAE1", "#6BAED6", "#4292C6", "#2171B5", "#084594"],
    "Greys": ["#D9D9D9", "#BDBDBD", "#969696", "#737373", "#525252", "#252525"],
    "YlOrRd": ["#FED976", "#FEB24C", "#FD8D3C", "#FC4E2A", "#E31A1C", "#B10026"],
    "Spectral": ["#D53E4F", "#F46D43", "#FDAE61", "#FEE08B", "#E6F598", "#ABDDA4", "#66C2A5", "#3288BD"],
}

ColorFunc = Callable[..., Union[str, tuple]]


def to_rgba(color) -> tuple:
    """Normalize a colour string or tuple to an RGBA tuple."""
    if isinstance(color, str):
        color = ImageColor.getrgb(color)
    color = tuple(int(c) for c in color)
    if len(color) == 3:
        color += (255,)
    return color


def random_color_func(word, rng: np.random.Generator) -> str:
    """Fully saturated colour with a random hue."""
    hue = int(rng.integers(0, 255))
    return "hsl(%d, 100%%, 50%%)" % hue


def get_palette(palette: Union[str, Sequence[str]]) -> List[str]:
    if isinstance(palette, str):
        try:
            return list(PALETTES[palette])
        except KeyError:
            raise ValueError("Unknown palette %r, choose from %s"
                             % (palette, ", ".join(sorted(PALETTES)))) from None
    colors = list(palette)
    if not colors:
        raise ValueError("A palette needs at least one colour")
    return colors


def palette_color_func(palette: Union[str, Sequence[str]] = "Dark2") -> ColorFunc:
    """Map word frequency onto a palette, most frequent words get the first colour."""
    colors = get_palette(palette)
    nc = len(colors)

    def color_func(word, rng=None):
        ci = min(int(math.ceil(nc * word.frequency)), nc) - 1
        ci = max(0, ci)
        return colors[nc - 1 - ci]

    return color_func
