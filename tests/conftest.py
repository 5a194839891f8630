"""Shared test fixtures."""

import math

import numpy as np
import pytest
from PIL import Image

from wcloud.text import GlyphShape


class BoxShaper:
    """Deterministic shaper: every glyph is a solid box 0.6 * size wide."""

    def __init__(self, overrides=None):
        self.calls = []
        self.overrides = overrides or {}

    def shape(self, text, size):
        self.calls.append((text, size))
        if text in self.overrides:
            width, height = self.overrides[text]
        else:
            width = max(1, math.ceil(len(text) * size * 0.6))
            height = max(1, math.ceil(size))
        coverage = Image.new("L", (width, height), 255)
        return GlyphShape(text=text, font_size=size, coverage=coverage)

    def sizes_for(self, text):
        return [size for t, size in self.calls if t == text]


@pytest.fixture
def box_shaper():
    return BoxShaper()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def holed_mask():
    """20x20 mask, drawable everywhere except a 5x5 block in the middle."""
    mask = np.zeros((20, 20), dtype=np.uint8)
    mask[7:12, 7:12] = 255
    return mask
