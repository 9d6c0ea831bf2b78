import numpy as np
import pytest

from gpufractals.colormap import (
    DEFAULT_PALETTE,
    PALETTE_SIZE,
    colormap,
    grayscale,
    normalize_outcome,
    palette_color,
    palette_from_matplotlib,
)


@pytest.mark.parametrize("total", [1, 3, 8, 40, 1000])
def test_endpoints(total):
    low = colormap(0, total)
    high = colormap(total, total)
    np.testing.assert_array_equal(low[:3], DEFAULT_PALETTE[0])
    np.testing.assert_array_equal(high[:3], DEFAULT_PALETTE[PALETTE_SIZE - 1])
    assert low[3] == 1.0 and high[3] == 1.0


def test_red_channel_is_non_decreasing():
    reds = colormap(np.arange(101), 100)[:, 0]
    assert np.all(np.diff(reds) >= 0.0)


def test_exact_stops_are_returned_unchanged():
    for stop in range(PALETTE_SIZE):
        np.testing.assert_array_equal(colormap(stop, 8)[:3], DEFAULT_PALETTE[stop])


def test_interpolates_between_stops():
    np.testing.assert_allclose(colormap(1, 16)[:3], (DEFAULT_PALETTE[0] + DEFAULT_PALETTE[1]) / 2.0)
    np.testing.assert_allclose(
        palette_color(0.25 + 0.125 / 4)[:3],
        0.75 * DEFAULT_PALETTE[2] + 0.25 * DEFAULT_PALETTE[3],
    )


def test_values_past_last_stop_are_clamped():
    np.testing.assert_array_equal(palette_color(0.95)[:3], DEFAULT_PALETTE[-1])
    np.testing.assert_array_equal(palette_color(1.0)[:3], DEFAULT_PALETTE[-1])


def test_zero_total_normalizes_to_zero():
    assert normalize_outcome(0, 0) == 0.0
    np.testing.assert_array_equal(colormap(np.zeros((2, 2)), 0)[..., :3], np.broadcast_to(DEFAULT_PALETTE[0], (2, 2, 3)))


def test_array_shapes():
    assert colormap(np.zeros((2, 3), dtype=int), 5).shape == (2, 3, 4)
    assert grayscale(np.zeros((4, 5))).shape == (4, 5, 4)


def test_grayscale():
    np.testing.assert_array_equal(grayscale(0.25), [0.25, 0.25, 0.25, 1.0])


def test_custom_palette():
    palette = np.linspace(0.0, 1.0, PALETTE_SIZE)[:, None].repeat(3, axis=1)
    np.testing.assert_allclose(colormap(3, 4, palette)[:3], [palette[6, 0]] * 3)


def test_palette_from_matplotlib():
    from matplotlib import colormaps

    palette = palette_from_matplotlib("viridis")
    assert palette.shape == (PALETTE_SIZE, 3)
    np.testing.assert_allclose(palette[0], colormaps["viridis"](0.0)[:3])
    np.testing.assert_allclose(palette[-1], colormaps["viridis"](1.0)[:3])


def test_palette_from_matplotlib_unknown_name():
    with pytest.raises(KeyError):
        palette_from_matplotlib("definitely-not-a-colormap")
