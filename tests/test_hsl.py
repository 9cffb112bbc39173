import pytest

from xlsxcell.hsl import HSL, hsl_model, hsl_to_rgb, rgb_to_hsl

_LEVELS = range(0, 256, 17)


@pytest.mark.parametrize("r", _LEVELS)
def test_rgb_round_trip(r):
    for g in _LEVELS:
        for b in _LEVELS:
            assert hsl_to_rgb(*rgb_to_hsl(r, g, b)) == (r, g, b)


@pytest.mark.parametrize("r", _LEVELS)
def test_components_stay_in_unit_range(r):
    for g in _LEVELS:
        for b in _LEVELS:
            h, s, l = rgb_to_hsl(r, g, b)
            assert 0.0 <= h < 1.0
            assert 0.0 <= s <= 1.0
            assert 0.0 <= l <= 1.0


@pytest.mark.parametrize("level", [0, 17, 128, 200, 255])
def test_grey_is_achromatic(level):
    h, s, l = rgb_to_hsl(level, level, level)
    assert h == 0.0
    assert s == 0.0
    assert l == level / 255


def test_black_and_white():
    assert rgb_to_hsl(0, 0, 0) == (0.0, 0.0, 0.0)
    assert hsl_to_rgb(0.0, 0.0, 1.0) == (255, 255, 255)


def test_rgba_of_white_is_full_scale():
    assert HSL(0.0, 0.0, 1.0).rgba() == (0xFFFF, 0xFFFF, 0xFFFF, 0xFFFF)


def test_rgba_scales_bytes_to_sixteen_bits():
    colour = HSL(*rgb_to_hsl(51, 102, 153))
    assert colour.rgba() == (51 * 0x101, 102 * 0x101, 153 * 0x101, 0xFFFF)


def test_hsl_model_returns_hsl_unchanged():
    colour = HSL(0.25, 0.5, 0.75)
    assert hsl_model(colour) is colour


def test_hsl_model_from_rgba_object():
    class Rgb:
        def rgba(self):
            return (34 * 0x101, 68 * 0x101, 204 * 0x101, 0xFFFF)

    assert hsl_model(Rgb()) == HSL(*rgb_to_hsl(34, 68, 204))


def test_hsl_model_from_sequence():
    assert hsl_model((255 * 0x101, 0, 0, 0xFFFF)) == HSL(*rgb_to_hsl(255, 0, 0))


def test_out_of_range_byte_is_rejected():
    with pytest.raises(ValueError):
        rgb_to_hsl(256, 0, 0)
    with pytest.raises(ValueError):
        rgb_to_hsl(0, -1, 0)