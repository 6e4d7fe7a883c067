import pytest

from fractal_bitmap.core.pixel_buffer import PixelBuffer


@pytest.fixture
def rgb_2x2_buffer():
    """2x2 raster holding red, green, blue and black."""
    buffer = PixelBuffer(2, 2)
    buffer.set_pixel(0, 0, 255, 0, 0)
    buffer.set_pixel(1, 0, 0, 255, 0)
    buffer.set_pixel(0, 1, 0, 0, 255)
    buffer.set_pixel(1, 1, 0, 0, 0)
    return buffer
