import pytest

from fluidblob.palettes import (
    PALETTES,
    Palette,
    get_palette,
    hex_to_rgb,
    interpolate_colors,
    list_palettes,
    random_palette,
    rgb_to_hex,
    sample_gradient,
)

RGB_RING = [(0, 0, 0), (255, 0, 0), (0, 255, 0), (0, 0, 255)]


def test_hex_conversion():
    assert hex_to_rgb("#1b0cec") == (0x1B, 0x0C, 0xEC)
    assert hex_to_rgb("FF9AAD") == (255, 154, 173)
    assert rgb_to_hex((1, 2, 255)) == "#0102FF"


@pytest.mark.parametrize(
    "bad",
    ["#fff", "#12345", "#GGGGGG", "", "#1234567", "#-1-2-3", "#+F+F+F", "## 12345", "# 1 2 3", "##123456"],
)
def test_hex_rejects_malformed(bad):
    with pytest.raises(ValueError):
        hex_to_rgb(bad)


def test_interpolation_rounds_half_up():
    assert interpolate_colors((0, 0, 0), (1, 3, 5), 0.5) == (1, 2, 3)
    assert interpolate_colors((10, 20, 30), (10, 20, 30), 0.7) == (10, 20, 30)


def test_two_entry_palette_returns_black_and_white_scenario():
    colors = Palette(["#000000", "#FFFFFF"]).colors
    assert sample_gradient(0.5, 0.0, colors) == (255, 255, 255)


@pytest.mark.parametrize("progress", [0.0, 0.25, 0.5, 0.99, 1.0])
@pytest.mark.parametrize("offset", [0.0, 0.1, 0.199])
def test_two_entry_palette_is_constant(progress, offset):
    colors = [(12, 34, 56), (200, 100, 50)]
    assert sample_gradient(progress, offset, colors) == (200, 100, 50)


def test_three_entry_palette_starts_at_index_one():
    colors = Palette(["#000000", "#FF0000", "#00FF00"]).colors
    assert sample_gradient(0.0, 0.0, colors) == (255, 0, 0)


def test_index_zero_is_never_sampled():
    colors = [(1, 2, 3)] + RGB_RING[1:]
    for k in range(121):
        assert sample_gradient(k / 100, 0.0, colors) != (1, 2, 3)


def test_continuous_across_segment_boundary():
    # n = 3, t = progress * 2; the i=1 -> i=2 boundary sits at progress 0.5
    below = sample_gradient(0.5 - 1e-9, 0.0, RGB_RING)
    at = sample_gradient(0.5, 0.0, RGB_RING)
    assert at == (0, 255, 0)
    assert all(abs(a - b) <= 1 for a, b in zip(below, at))


def test_last_segment_wraps_to_index_one():
    # t = 2.2 -> i = 3, next wraps to 1 (not 0)
    assert sample_gradient(1.0, 0.1, RGB_RING) == (51, 0, 204)


def test_out_of_domain_progress_folds_into_ring():
    colors = [(0, 0, 0)] + [(i * 20, 0, 0) for i in range(1, 12)]
    # n = 11, t = 11.9 lands past index n and folds back to the 1 -> 2 segment
    assert sample_gradient(1.0, 0.19, colors) == (38, 0, 0)


def test_palette_rejects_signed_hex_entries():
    with pytest.raises(ValueError):
        Palette(["#000000", "#-1-2-3"])
    pal = Palette(["#000000", "#FFFFFF"])
    with pytest.raises(ValueError):
        pal.set_entry(1, "# 1 2 3")
    assert pal[1] == (255, 255, 255)


def test_palette_sample_uses_its_own_colors():
    pal = Palette(["#000000", "#FF0000", "#00FF00", "#0000FF"])
    assert pal.sample(0.0, 0.0) == (255, 0, 0)
    assert pal.sample(1.0, 0.1) == sample_gradient(1.0, 0.1, pal.colors)


def test_palette_rejects_short_lists():
    with pytest.raises(ValueError):
        Palette(["#000000"])
    pal = Palette(["#000000", "#FFFFFF"])
    with pytest.raises(ValueError):
        pal.set_all([])
    assert len(pal) == 2


def test_palette_entry_edit_and_background():
    pal = Palette(PALETTES["default"])
    pal.set_entry(0, "#101010")
    pal.set_entry(3, (1, 2, 3))
    assert pal.background == (16, 16, 16)
    assert pal[3] == (1, 2, 3)
    assert pal.to_hex()[0] == "#101010"
    with pytest.raises(IndexError):
        pal.set_entry(len(pal), "#000000")
    with pytest.raises(ValueError):
        pal.set_entry(1, (300, 0, 0))


def test_colors_property_is_a_copy():
    pal = Palette(["#000000", "#FFFFFF"])
    pal.colors.append((1, 1, 1))
    assert len(pal) == 2


def test_named_palettes():
    assert "default" in list_palettes()
    assert get_palette("default").to_hex()[0] == "#1B0CEC"
    with pytest.raises(KeyError, match="Available"):
        get_palette("nope")


def test_random_palette():
    pal = random_palette()
    assert len(pal) == 7
    for value in pal.to_hex():
        assert len(value) == 7 and value.startswith("#")
