"""
wcloud - word clouds packed with a summed-area table.

Words are placed largest first at random free spots found through an integral
image of the canvas, shrinking and rotating until nothing more fits.

Usage:
    from wcloud import wordcloud, wordcloud_from_text

    # From word frequencies dict
    img = wordcloud({"python": 100, "data": 80, "analysis": 60}, seed=42)
    img.save("cloud.png")

    # From raw text, inside a silhouette (black = drawable)
    from PIL import Image
    img = wordcloud_from_text(text, mask=Image.open("mask.png"), palette="Dark2")
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

import numpy as np
from PIL import Image

from .colors import ColorFunc, palette_color_func, random_color_func
from .config import WordCloudConfig
from .layout import Frequencies, PlacementEngine, Word
from .render import to_image, to_svg
from .text import FontHandle, PilGlyphShaper
from .tokenizer import Tokenizer, repeat_words

logger = logging.getLogger(__name__)


@dataclass
class WordCloudResult:
    """A finished layout, ready to be drawn.

    ``colors`` holds one colour per word, picked once when the layout is made,
    so every render of the same result looks the same.
    """

    words: List[Word]
    width: int
    height: int
    shaper: PilGlyphShaper
    config: WordCloudConfig
    colors: list = field(default_factory=list, repr=False)

    def _color_of(self, word: Word, rng=None):
        return self.colors[word.index]

    def to_image(self) -> Image.Image:
        return to_image(
            self.words, self.width, self.height, self.shaper,
            scale=self.config.scale,
            background_color=self.config.background_color,
            color_func=self._color_of,
        )

    def to_svg(self, embed_font: bool = False) -> str:
        return to_svg(
            self.words, self.width, self.height, self.shaper,
            scale=self.config.scale,
            background_color=self.config.background_color,
            color_func=self._color_of,
            embed_font=embed_font,
        )

    def to_file(self, filename: str, image_format: Optional[str] = None) -> None:
        """Write a PNG (default) or SVG, guessing from the extension."""
        if image_format is None:
            image_format = "svg" if str(filename).lower().endswith(".svg") else "png"
        if image_format == "svg":
            with open(filename, "w", encoding="utf-8") as f:
                f.write(self.to_svg())
        else:
            self.to_image().save(filename, format=image_format.upper())
        logger.info("Saved %d words to %s", len(self.words), filename)


class WordCloud:
    """Word cloud generator.

    Args:
        config: Layout and rendering settings.
        font_path: Path to a .ttf/.otf font file. None = FONT_PATH or a system font.
        tokenizer: Used by generate_from_text. Defaults to a Tokenizer that
            honours ``config.max_words`` and ``config.repeat``.
        color_func: Callable ``(word, rng) -> color``. Defaults to random hues.
    """

    def __init__(
        self,
        config: Optional[WordCloudConfig] = None,
        font_path: Optional[str] = None,
        tokenizer: Optional[Tokenizer] = None,
        color_func: Optional[ColorFunc] = None,
    ):
        self.config = config if config is not None else WordCloudConfig()
        self.shaper = PilGlyphShaper(FontHandle.load(font_path))
        self.tokenizer = tokenizer or Tokenizer(
            max_words=self.config.max_words, repeat=self.config.repeat)
        self.color_func = color_func

    def generate_from_frequencies(
        self,
        frequencies: Frequencies,
        width: int = 400,
        height: int = 200,
        mask=None,
    ) -> WordCloudResult:
        """Lay out pre-computed frequencies.

        Args:
            frequencies: Mapping or (word, frequency) pairs; any scale.
            width: Canvas width, ignored when a mask is given.
            height: Canvas height, ignored when a mask is given.
            mask: Optional single-channel image, black pixels are drawable.
        """
        items = list(frequencies.items()) if hasattr(frequencies, "items") else list(frequencies)
        items.sort(key=lambda item: item[1], reverse=True)
        items = items[:self.config.max_words]
        if self.config.repeat and 0 < len(items) < self.config.max_words:
            items = repeat_words(items, self.config.max_words)

        rng = np.random.default_rng(self.config.random_seed)
        engine = PlacementEngine(self.shaper, self.config)
        words = engine.layout(items, width=width, height=height, mask=mask, rng=rng)
        if mask is not None:
            height, width = np.asarray(mask).shape[:2]
        color_func = self.color_func or random_color_func
        colors = [color_func(word, rng) for word in words]
        return WordCloudResult(words, width, height, self.shaper, self.config, colors)

    def generate_from_text(self, text: str, width: int = 400, height: int = 200,
                           mask=None) -> WordCloudResult:
        return self.generate_from_frequencies(
            self.tokenizer.get_normalized_word_frequencies(text), width, height, mask)


# --- Convenience functions ---

def wordcloud(
    frequencies: Frequencies,
    width: int = 400,
    height: int = 200,
    mask=None,
    palette: Optional[Union[str, Sequence[str]]] = None,
    font_path: Optional[str] = None,
    seed: Optional[int] = None,
    **kwargs,
) -> Image.Image:
    """Generate a word cloud image from frequencies.

    Extra keyword arguments are WordCloudConfig fields (margin, rotate_chance,
    relative_scaling, ...).
    """
    config = WordCloudConfig(random_seed=seed, **kwargs)
    color_func = palette_color_func(palette) if palette is not None else None
    cloud = WordCloud(config, font_path=font_path, color_func=color_func)
    return cloud.generate_from_frequencies(frequencies, width, height, mask).to_image()


def wordcloud_from_text(text: str, stopwords: Optional[set] = None, **kwargs) -> Image.Image:
    """Generate a word cloud from raw text.

    Tokenizes, removes stopwords, counts frequencies, then calls wordcloud().
    """
    tokenizer = Tokenizer(
        exclude_words=stopwords,
        max_words=kwargs.get("max_words", 200),
        repeat=kwargs.get("repeat", False),
    )
    return wordcloud(tokenizer.get_normalized_word_frequencies(text), **kwargs)
