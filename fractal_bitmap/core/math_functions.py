"""
Core mathematical functions for Mandelbrot escape-time evaluation.

This module provides the coordinate mapping from the pixel grid onto the
complex plane and the escape-time iteration itself, both as scalar
functions and as vectorized NumPy versions that produce identical results.
"""

import numpy as np
from typing import Tuple
import logging

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
ESCAPE_RADIUS = 2.0
VIEWPORT_SCALE = 4.5


def map_to_fractal(x: int, y: int, width: int, height: int,
                   scale: float = VIEWPORT_SCALE,
                   center: Tuple[float, float] = (0.0, 0.0)) -> Tuple[float, float]:
    """
    Map a pixel coordinate onto the complex plane.

    The image height spans ``scale`` units of the imaginary axis and the
    pixel grid center lands on ``center``.

    Args:
        x, y: Pixel coordinates
        width, height: Image resolution in pixels
        scale: Extent of the imaginary axis covered by the image height
        center: Complex-plane point under the grid center (real, imag)

    Returns:
        Tuple of (real, imag)
    """
    step = scale / height
    real = (x - width / 2.0) * step + center[0]
    imag = (y - height / 2.0) * step + center[1]
    return real, imag


def escape_iterations(real: float, imag: float, max_iter: int = MAX_ITERATIONS,
                      escape_radius: float = ESCAPE_RADIUS) -> int:
    """
    Count iterations of z = z^2 + c before |z| exceeds the escape radius.

    Returns ``max_iter`` for points that never escape.
    """
    z = complex(0.0, 0.0)
    c = complex(real, imag)

    iterations = 0
    while iterations < max_iter:
        z = z * z + c
        if abs(z) > escape_radius:
            break
        iterations += 1

    return iterations


class Viewport:
    """Fixed affine mapping from the pixel grid to the complex plane."""

    def __init__(self, width: int, height: int, scale: float = VIEWPORT_SCALE,
                 center: Tuple[float, float] = (0.0, 0.0)):
        """
        Initialize viewport geometry.

        Args:
            width, height: Image resolution in pixels
            scale: Extent of the imaginary axis covered by the image height
            center: Complex-plane point under the grid center (real, imag)
        """
        if width <= 0 or height <= 0:
            raise ValueError("Width and height must be positive")
        if scale <= 0:
            raise ValueError("scale must be positive")

        self.width = width
        self.height = height
        self.scale = scale
        self.center = (float(center[0]), float(center[1]))
        self.step = scale / height

    @property
    def total_pixels(self) -> int:
        return self.width * self.height

    def map_pixel(self, x: int, y: int) -> Tuple[float, float]:
        """Convert pixel coordinates to (real, imag)."""
        return map_to_fractal(x, y, self.width, self.height, self.scale, self.center)

    def map_indices(self, indices: np.ndarray) -> np.ndarray:
        """
        Map flat row-major pixel indices to complex coordinates.

        Args:
            indices: 1-D integer array of indices in [0, width*height)

        Returns:
            complex128 array of the same length
        """
        indices = np.asarray(indices, dtype=np.int64)
        x = (indices % self.width).astype(np.float64)
        y = (indices // self.width).astype(np.float64)

        real = (x - self.width / 2.0) * self.step + self.center[0]
        imag = (y - self.height / 2.0) * self.step + self.center[1]

        c = np.empty(indices.shape, dtype=np.complex128)
        c.real = real
        c.imag = imag
        return c


class EscapeTimeIterator:
    """Vectorized escape-time iteration over arrays of complex points."""

    def __init__(self, max_iter: int = MAX_ITERATIONS, escape_radius: float = ESCAPE_RADIUS):
        """
        Initialize iterator.

        Args:
            max_iter: Maximum number of iterations
            escape_radius: Radius for escape condition
        """
        if max_iter <= 0:
            raise ValueError("max_iter must be positive")
        if escape_radius <= 0:
            raise ValueError("escape_radius must be positive")

        self.max_iter = max_iter
        self.escape_radius = escape_radius

    def iterate(self, c: np.ndarray) -> np.ndarray:
        """
        Compute escape iteration counts.

        Matches :func:`escape_iterations` element by element: a point's
        count grows by one for every iteration it survives.

        Args:
            c: Complex parameter array

        Returns:
            int32 array of iteration counts in [0, max_iter]
        """
        c = np.asarray(c, dtype=np.complex128)
        z = np.zeros_like(c)
        iterations = np.zeros(c.shape, dtype=np.int32)
        active = np.ones(c.shape, dtype=bool)

        for _ in range(self.max_iter):
            if not np.any(active):
                break

            z_active = z[active]
            z_active = z_active * z_active + c[active]
            z[active] = z_active

            survived = np.abs(z_active) <= self.escape_radius
            iterations[active] += survived
            active[active] = survived

        return iterations

    def evaluate(self, real: float, imag: float) -> int:
        """Scalar evaluation with this iterator's settings."""
        return escape_iterations(real, imag, self.max_iter, self.escape_radius)
