"""Word clouds packed with a summed-area table."""

from .colors import PALETTES, palette_color_func, random_color_func
from .config import WordCloudConfig
from .errors import ConfigurationError, NoPlaceableWordsError, WordAbandoned, WordCloudError
from .layout import PlacementEngine, Word
from .sat import MaskIndex, OccupancyTable, Position, Rect
from .text import FontHandle, GlyphShape, PilGlyphShaper
from .tokenizer import DEFAULT_EXCLUDE_WORDS, Tokenizer
from .wordcloud import WordCloud, WordCloudResult, wordcloud, wordcloud_from_text

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DEFAULT_EXCLUDE_WORDS",
    "FontHandle",
    "GlyphShape",
    "MaskIndex",
    "NoPlaceableWordsError",
    "OccupancyTable",
    "PALETTES",
    "PilGlyphShaper",
    "PlacementEngine",
    "Position",
    "Rect",
    "Tokenizer",
    "Word",
    "WordAbandoned",
    "WordCloud",
    "WordCloudConfig",
    "WordCloudError",
    "WordCloudResult",
    "palette_color_func",
    "random_color_func",
    "wordcloud",
    "wordcloud_from_text",
]
