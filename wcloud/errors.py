"""Exceptions raised by wcloud."""


class WordCloudError(Exception):
    """Base class for wcloud errors."""


class ConfigurationError(WordCloudError, ValueError):
    """A setting is outside its valid range. Raised before any layout work."""


class NoPlaceableWordsError(WordCloudError):
    """Not even the first word could be placed at any size or rotation."""


class WordAbandoned(WordCloudError):
    """A word could not be placed; the layout stops at this word."""

    def __init__(self, text: str, font_size: float):
        super().__init__("No space left for %r (last tried font size %.1f)" % (text, font_size))
        self.text = text
        self.font_size = font_size
