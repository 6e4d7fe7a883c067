"""
Mandelbrot escape-time images rendered in parallel and saved as bitmaps.

The pixel grid is split into contiguous ranges, one per worker thread. Each
worker maps its pixels onto the complex plane, counts escape iterations,
records them in a shared histogram and writes a shade into the shared pixel
buffer, which is finally serialized as an uncompressed 24-bit bitmap.

Example usage:
    >>> from fractal_bitmap import MandelbrotRenderer, RenderConfig
    >>> renderer = MandelbrotRenderer(RenderConfig(width=800, height=600, num_workers=4))
    >>> result, written = renderer.render_to_file("mandelbrot.bmp")
    >>> result.histogram.total()
    480000
"""

__version__ = "1.0.0"
__author__ = "Fractal Bitmap Team"

from fractal_bitmap.core.math_functions import (
    Viewport,
    EscapeTimeIterator,
    map_to_fractal,
    escape_iterations,
    MAX_ITERATIONS,
)
from fractal_bitmap.core.pixel_buffer import PixelBuffer
from fractal_bitmap.core.histogram import Histogram
from fractal_bitmap.rendering.coloring import CubedShadeColoring, cubed_shade
from fractal_bitmap.rendering.image_output import BitmapExporter, read_bitmap_headers
from fractal_bitmap.acceleration.threading_backend import ThreadedAccelerator, create_work_ranges
from fractal_bitmap.io.config import ConfigManager

# Main API classes
from fractal_bitmap.api import MandelbrotRenderer, RenderConfig, RenderResult, render

__all__ = [
    "MandelbrotRenderer",
    "RenderConfig",
    "RenderResult",
    "render",
    "Viewport",
    "EscapeTimeIterator",
    "map_to_fractal",
    "escape_iterations",
    "MAX_ITERATIONS",
    "PixelBuffer",
    "Histogram",
    "CubedShadeColoring",
    "cubed_shade",
    "BitmapExporter",
    "read_bitmap_headers",
    "ThreadedAccelerator",
    "create_work_ranges",
    "ConfigManager",
]
