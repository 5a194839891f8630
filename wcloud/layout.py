"""
Greedy word placement.

Words are placed one at a time, most frequent first. Each word gets a target
font size derived from the previous word's, then the engine shrinks it, tries
the other orientation once, and finally gives up. The first word that cannot
be placed ends the layout: nothing after it is attempted.
"""

import logging
from dataclasses import dataclass, field
from operator import itemgetter
from typing import Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np

from .config import WordCloudConfig
from .errors import ConfigurationError, NoPlaceableWordsError, WordAbandoned
from .sat import (
    MaskIndex,
    OccupancyTable,
    Position,
    Rect,
    find_space_for_rect,
    find_space_for_rect_masked,
)
from .text import GlyphShape

logger = logging.getLogger(__name__)

# The first word is measured at this fraction of the canvas height
FIRST_WORD_HEIGHT_RATIO = 0.95

Frequencies = Union[Mapping[str, float], Iterable[Tuple[str, float]]]


@dataclass(frozen=True)
class Word:
    """A placed word. ``position`` is the top-left of its glyph box."""

    text: str
    frequency: float
    font_size: float
    rotated: bool
    position: Tuple[int, int]
    index: int
    shape: GlyphShape = field(repr=False, compare=False)

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """(x, y, width, height) of the drawn glyphs."""
        return self.position[0], self.position[1], self.shape.width, self.shape.height


def normalize_frequencies(frequencies: Frequencies) -> List[Tuple[str, float]]:
    """Sort by frequency (ties keep input order) and scale so the top is 1.0.

    Non-positive frequencies are dropped.
    """
    items = frequencies.items() if isinstance(frequencies, Mapping) else frequencies
    pairs = [(str(word), float(freq)) for word, freq in items if freq > 0]
    if not pairs:
        return []
    pairs.sort(key=itemgetter(1), reverse=True)
    max_freq = pairs[0][1]
    return [(word, freq / max_freq) for word, freq in pairs]


class Canvas:
    """Occupancy plus optional mask index for one run."""

    def __init__(self, table: OccupancyTable, mask_index: Optional[MaskIndex] = None):
        self.table = table
        self.mask_index = mask_index
        self.width = table.width
        self.height = table.height

    @classmethod
    def create(cls, width=None, height=None, mask=None) -> "Canvas":
        if mask is not None:
            try:
                return cls(OccupancyTable.from_mask(mask), MaskIndex.from_mask(mask))
            except ValueError as exc:
                raise ConfigurationError(str(exc)) from exc
        if width is None or height is None or width <= 0 or height <= 0:
            raise ConfigurationError(
                "A canvas needs a positive width and height or a mask, got %rx%r"
                % (width, height))
        return cls(OccupancyTable.blank(int(width), int(height)))

    @property
    def masked(self) -> bool:
        return self.mask_index is not None

    def fits(self, rect: Rect) -> bool:
        return rect.width <= self.width and rect.height <= self.height

    def search(self, rect: Rect, rng: np.random.Generator, trials: int) -> Optional[Position]:
        if self.mask_index is not None:
            return find_space_for_rect_masked(
                self.table, self.width, self.height, self.mask_index, rect, rng, trials)
        return find_space_for_rect(self.table, self.width, self.height, rect, rng, trials)


class PlacementEngine:
    """Runs the placement loop with a glyph shaper and a config.

    Args:
        shaper: Anything with ``shape(text, size) -> GlyphShape``.
        config: Layout settings. Defaults to WordCloudConfig().
    """

    def __init__(self, shaper, config: Optional[WordCloudConfig] = None):
        self.shaper = shaper
        self.config = config if config is not None else WordCloudConfig()

    def layout(
        self,
        frequencies: Frequencies,
        width: Optional[int] = None,
        height: Optional[int] = None,
        mask=None,
        rng: Optional[np.random.Generator] = None,
    ) -> List[Word]:
        """Place words on a width x height canvas or inside a mask.

        Returns:
            The placed words in placement order.

        Raises:
            ConfigurationError: No usable canvas.
            NoPlaceableWordsError: No word could be placed at all.
        """
        words = normalize_frequencies(frequencies)
        if not words:
            raise NoPlaceableWordsError("There are no words to place")
        canvas = Canvas.create(width, height, mask)
        if rng is None:
            rng = np.random.default_rng(self.config.random_seed)

        font_size = self.initial_font_size(words[0][0], canvas)
        logger.debug("Initial font size %.1f for %r", font_size, words[0][0])

        placed: List[Word] = []
        last_freq = 1.0
        for text, freq in words:
            font_size = self.target_font_size(font_size, freq, last_freq)
            try:
                word = self._place_word(canvas, text, freq, font_size, len(placed), rng)
            except WordAbandoned as exc:
                logger.info("%s; stopping after %d words", exc, len(placed))
                break
            placed.append(word)
            font_size, last_freq = word.font_size, freq

        if not placed:
            raise NoPlaceableWordsError(
                "Couldn't find space to draw. Either the canvas is too small "
                "or too much of it is masked out.")
        logger.info("Placed %d of %d words on a %dx%d canvas",
                    len(placed), len(words), canvas.width, canvas.height)
        return placed

    def initial_font_size(self, first_word: str, canvas: Canvas) -> float:
        """Starting size for the largest word.

        The word is measured at nearly the canvas height and its box's aspect
        ratio is stretched over the canvas width. For masks the result shrinks
        with the share of free pixels.
        """
        shape = self.shaper.shape(first_word, canvas.height * FIRST_WORD_HEIGHT_RATIO)
        rect = self._rect_for(shape)
        size = canvas.width * rect.height / rect.width
        if canvas.masked:
            size *= canvas.table.free_fraction()
        if self.config.max_font_size is not None:
            size = min(size, self.config.max_font_size)
        return size

    def target_font_size(self, last_size: float, freq: float, last_freq: float) -> float:
        rs = self.config.relative_scaling
        if self.config.repeat or rs == 0:
            return last_size
        return last_size * (rs * (freq / last_freq) + (1 - rs))

    def _rect_for(self, shape: GlyphShape) -> Rect:
        margin = self.config.margin
        return Rect(shape.width + margin, shape.height + margin)

    def _next_font_size(self, font_size: float) -> Optional[float]:
        next_size = font_size - self.config.font_step
        if next_size >= self.config.min_font_size and next_size > 0:
            return next_size
        return None

    def _place_word(self, canvas, text, freq, font_size, index, rng) -> Word:
        cfg = self.config
        if font_size < cfg.min_font_size:
            raise WordAbandoned(text, font_size)

        initial_font_size = font_size
        rotated = bool(rng.random() < cfg.rotate_chance)

        while True:
            shape = self.shaper.shape(text, font_size)
            if rotated:
                shape = shape.rotate()
            rect = self._rect_for(shape)

            pos = None
            if canvas.fits(rect):
                pos = canvas.search(rect, rng, cfg.search_trials)
            if pos is not None:
                break

            next_size = self._next_font_size(font_size)
            if next_size is not None:
                font_size = next_size
            elif not rotated:
                logger.debug("No room for %r horizontally, trying rotated", text)
                rotated = True
                font_size = initial_font_size
            else:
                raise WordAbandoned(text, font_size)

        half_margin = cfg.margin // 2
        x, y = pos.x + half_margin, pos.y + half_margin
        canvas.table.draw(shape.ink, x, y)
        logger.debug("Placed %r at (%d, %d) size %.1f%s",
                     text, x, y, font_size, " rotated" if rotated else "")
        return Word(
            text=text,
            frequency=freq,
            font_size=font_size,
            rotated=rotated,
            position=(x, y),
            index=index,
            shape=shape,
        )
