"""
Tone mapping from escape-iteration counts to pixel colors.

The palette is a single non-linear curve: the iteration count is scaled to
a shade in [0, 256], cubed, and truncated to one byte. The wraparound of the
cube is what produces the banded look of the output and is kept on purpose.
"""

import numpy as np
from typing import Tuple
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


def cubed_shade(iterations: int, max_iter: int) -> int:
    """Shade byte for a single iteration count."""
    shade = (256 * iterations) // max_iter
    return (shade * shade * shade) & 0xFF


@dataclass(frozen=True)
class CubedShadeColoring:
    """Yellow-channel coloring: red = green = shade, blue = 0."""

    max_iter: int

    def __post_init__(self):
        if self.max_iter <= 0:
            raise ValueError("max_iter must be positive")

    def color(self, iterations: int) -> Tuple[int, int, int]:
        """
        Color for one pixel.

        Returns:
            (red, green, blue) bytes
        """
        shade = cubed_shade(iterations, self.max_iter)
        return shade, shade, 0

    def shades(self, iterations: np.ndarray) -> np.ndarray:
        """Vectorized shade bytes for an array of iteration counts."""
        shade = (256 * np.asarray(iterations, dtype=np.int64)) // self.max_iter
        return ((shade * shade * shade) & 0xFF).astype(np.uint8)
