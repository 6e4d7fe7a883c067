"""
Contiguous 24-bit raster storage.

Pixels are stored row-major, three bytes each, in blue-green-red order so
the buffer can be written to a bitmap file without reordering.
"""

import numpy as np
from typing import Tuple, Union
import logging

logger = logging.getLogger(__name__)

BYTES_PER_PIXEL = 3

ChannelValues = Union[int, np.ndarray]


class PixelBuffer:
    """Owned BGR byte raster with range-checked writes."""

    def __init__(self, width: int, height: int):
        """
        Allocate a zero-filled raster.

        Args:
            width, height: Image resolution in pixels
        """
        if width <= 0 or height <= 0:
            raise ValueError("Width and height must be positive")

        self.width = width
        self.height = height
        self._data = np.zeros(width * height * BYTES_PER_PIXEL, dtype=np.uint8)
        # One row per pixel: [blue, green, red]
        self._pixels = self._data.reshape(width * height, BYTES_PER_PIXEL)

    @property
    def total_pixels(self) -> int:
        return self.width * self.height

    @property
    def nbytes(self) -> int:
        return self._data.nbytes

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        return y * self.width + x

    def set_pixel(self, x: int, y: int, red: int, green: int, blue: int) -> None:
        """Write one pixel."""
        pixel = self._pixels[self._offset(x, y)]
        pixel[0] = blue
        pixel[1] = green
        pixel[2] = red

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        """Read one pixel back as (red, green, blue)."""
        blue, green, red = self._pixels[self._offset(x, y)]
        return int(red), int(green), int(blue)

    def write_span(self, start: int, red: ChannelValues, green: ChannelValues,
                   blue: ChannelValues) -> None:
        """
        Write a contiguous run of pixels starting at a flat row-major index.

        The run length is taken from the longest channel array; scalar
        channels are broadcast over the run.

        Args:
            start: Flat index of the first pixel
            red, green, blue: Channel values, scalars or 1-D uint8 arrays
        """
        count = max(np.size(red), np.size(green), np.size(blue))
        end = start + count
        if start < 0 or end > self.total_pixels:
            raise IndexError(f"Span [{start}, {end}) outside buffer of {self.total_pixels} pixels")

        span = self._pixels[start:end]
        span[:, 0] = blue
        span[:, 1] = green
        span[:, 2] = red

    def as_bytes(self) -> memoryview:
        """Read-only view of the raw BGR bytes."""
        return memoryview(self._data).toreadonly()

    def as_array(self) -> np.ndarray:
        """Read-only (height, width, 3) BGR view of the raster."""
        view = self._data.reshape(self.height, self.width, BYTES_PER_PIXEL).view()
        view.flags.writeable = False
        return view
