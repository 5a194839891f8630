import pytest

from wcloud.config import WordCloudConfig
from wcloud.errors import ConfigurationError


def test_defaults_are_valid():
    config = WordCloudConfig()
    assert config.margin == 2
    assert config.min_font_size == 4.0
    assert config.relative_scaling == 0.5
    assert config.rotate_chance == 0.1


@pytest.mark.parametrize("kwargs", [
    {"scale": 0},
    {"scale": 100.5},
    {"relative_scaling": -0.1},
    {"relative_scaling": 1.5},
    {"min_font_size": -1},
    {"max_font_size": 0},
    {"font_step": 0},
    {"margin": -2},
    {"rotate_chance": 2},
    {"search_trials": 0},
    {"max_words": 0},
])
def test_invalid_ranges(kwargs):
    with pytest.raises(ConfigurationError):
        WordCloudConfig(**kwargs)


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        WordCloudConfig(relative_scaling=3)


def test_boundaries_are_accepted():
    WordCloudConfig(scale=100, relative_scaling=0, min_font_size=0, rotate_chance=1)
    WordCloudConfig(relative_scaling=1, rotate_chance=0)
