import numpy as np
import pytest

from conftest import BoxShaper
from wcloud.colors import PALETTES, palette_color_func, random_color_func, to_rgba
from wcloud.config import WordCloudConfig
from wcloud.errors import ConfigurationError
from wcloud.layout import PlacementEngine
from wcloud.render import to_image, to_svg
from wcloud.text import FontHandle, PilGlyphShaper


@pytest.fixture(scope="module")
def pil_shaper():
    return PilGlyphShaper(FontHandle.load())


@pytest.fixture
def placed(pil_shaper):
    engine = PlacementEngine(pil_shaper, WordCloudConfig(random_seed=11))
    return engine.layout({"apple": 1.0, "pear": 0.6, "<fig>": 0.4}, width=160, height=80)


def test_image_size_and_background():
    img = to_image([], 40, 20, BoxShaper(), background_color="#ff0000")
    assert img.size == (40, 20)
    assert img.mode == "RGBA"
    assert img.getpixel((5, 5)) == (255, 0, 0, 255)


def test_image_draws_exactly_the_placed_ink(pil_shaper, placed):
    img = to_image(placed, 160, 80, pil_shaper, background_color=(0, 0, 0, 255),
                   color_func=lambda word, rng: "white")
    drawn = np.asarray(img.convert("L")) > 0
    expected = np.zeros((80, 160), dtype=bool)
    for word in placed:
        x, y, w, h = word.box
        expected[y:y + h, x:x + w] |= word.shape.ink
    np.testing.assert_array_equal(drawn, expected)


def test_scaled_image(pil_shaper, placed):
    img = to_image(placed, 160, 80, pil_shaper, scale=2)
    assert img.size == (320, 160)


def test_invalid_scale(pil_shaper, placed):
    with pytest.raises(ConfigurationError):
        to_image(placed, 160, 80, pil_shaper, scale=0)
    with pytest.raises(ConfigurationError):
        to_svg(placed, 160, 80, pil_shaper, scale=101)


def test_svg_document(pil_shaper, placed):
    svg = to_svg(placed, 160, 80, pil_shaper, color_func=lambda word, rng: "#123456")
    assert svg.startswith("<svg")
    assert svg.rstrip().endswith("</svg>")
    assert 'width="160" height="80"' in svg
    assert svg.count("<text") == len(placed)
    assert "rgba(18,52,86,1)" in svg
    if any(w.text == "<fig>" for w in placed):
        assert "&lt;fig&gt;" in svg
    for word in placed:
        if word.rotated:
            assert "rotate(-90)" in svg


def test_svg_embeds_font_when_available(pil_shaper, placed):
    svg = to_svg(placed, 160, 80, pil_shaper, embed_font=True)
    if pil_shaper.font.path is not None:
        assert "@font-face" in svg
        assert "base64," in svg
    else:
        assert "@font-face" not in svg


def test_random_colors_are_reproducible(placed):
    first = [random_color_func(w, np.random.default_rng(3)) for w in placed]
    second = [random_color_func(w, np.random.default_rng(3)) for w in placed]
    assert first == second
    assert first[0].startswith("hsl(")


def test_palette_maps_frequency(placed):
    color_func = palette_color_func("Dark2")
    top = placed[0]
    assert top.frequency == 1.0
    assert color_func(top) == PALETTES["Dark2"][0]


def test_palette_from_list_and_unknown_name():
    class _Word:
        frequency = 0.01

    assert palette_color_func(["#000000", "#ffffff"])(_Word()) == "#ffffff"
    with pytest.raises(ValueError):
        palette_color_func("NoSuchPalette")


def test_to_rgba():
    assert to_rgba("#010203") == (1, 2, 3, 255)
    assert to_rgba((1, 2, 3, 4)) == (1, 2, 3, 4)
    assert to_rgba("hsl(0, 100%, 50%)") == (255, 0, 0, 255)
