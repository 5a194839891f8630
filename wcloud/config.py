"""Word cloud settings."""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .errors import ConfigurationError
from .sat import DEFAULT_SEARCH_TRIALS

Color = Union[str, Tuple[int, ...]]


@dataclass
class WordCloudConfig:
    """Layout and rendering settings, validated on construction."""

    # Layout
    margin: int = 2
    min_font_size: float = 4.0
    max_font_size: Optional[float] = None
    font_step: float = 1.0
    rotate_chance: float = 0.1
    relative_scaling: float = 0.5
    repeat: bool = False
    max_words: int = 200
    search_trials: int = DEFAULT_SEARCH_TRIALS
    random_seed: Optional[int] = None

    # Rendering
    scale: float = 1.0
    background_color: Color = (0, 0, 0, 255)

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if not 0 < self.scale <= 100:
            raise ConfigurationError("scale must be in (0, 100], got %r" % self.scale)
        if not 0 <= self.relative_scaling <= 1:
            raise ConfigurationError(
                "relative_scaling must be between 0 and 1, got %r" % self.relative_scaling)
        if self.min_font_size < 0:
            raise ConfigurationError(
                "min_font_size cannot be negative, got %r" % self.min_font_size)
        if self.max_font_size is not None and self.max_font_size <= 0:
            raise ConfigurationError(
                "max_font_size must be positive, got %r" % self.max_font_size)
        if self.font_step <= 0:
            raise ConfigurationError("font_step must be positive, got %r" % self.font_step)
        if self.margin < 0:
            raise ConfigurationError("margin cannot be negative, got %r" % self.margin)
        if not 0 <= self.rotate_chance <= 1:
            raise ConfigurationError(
                "rotate_chance must be between 0 and 1, got %r" % self.rotate_chance)
        if self.search_trials <= 0:
            raise ConfigurationError(
                "search_trials must be positive, got %r" % self.search_trials)
        if self.max_words <= 0:
            raise ConfigurationError("max_words must be positive, got %r" % self.max_words)
