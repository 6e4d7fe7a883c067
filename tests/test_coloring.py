import numpy as np
import pytest

from fractal_bitmap.rendering.coloring import CubedShadeColoring, cubed_shade


@pytest.mark.parametrize("iterations,expected", [
    (0, 0),
    (1, (2 ** 3) & 0xFF),      # shade 2
    (10, (25 ** 3) & 0xFF),    # shade 25 -> 15625 wraps to 9
    (50, 0),                   # shade 128, cube is a multiple of 256
    (99, (253 ** 3) & 0xFF),
    (100, 0),                  # shade 256 wraps to 0
])
def test_cubed_shade_wraps_to_a_byte(iterations, expected):
    assert cubed_shade(iterations, 100) == expected


def test_wraparound_value():
    assert cubed_shade(10, 100) == 9


def test_color_is_yellow_channel():
    coloring = CubedShadeColoring(100)
    assert coloring.color(10) == (9, 9, 0)


def test_vectorized_matches_scalar():
    coloring = CubedShadeColoring(100)
    iterations = np.arange(101)
    shades = coloring.shades(iterations)
    assert shades.dtype == np.uint8
    assert shades.tolist() == [cubed_shade(n, 100) for n in range(101)]


def test_rejects_bad_max_iter():
    with pytest.raises(ValueError):
        CubedShadeColoring(0)
