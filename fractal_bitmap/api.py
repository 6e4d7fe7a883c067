"""
Main API classes for Mandelbrot bitmap generation.

This module combines the escape-time math, the threaded backend and the
bitmap exporter behind a single configuration object.
"""

import numbers
import time
import logging
from typing import Optional, Dict, Any, Tuple, Union
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .core.math_functions import Viewport, EscapeTimeIterator, MAX_ITERATIONS, ESCAPE_RADIUS, VIEWPORT_SCALE
from .core.pixel_buffer import PixelBuffer
from .core.histogram import Histogram
from .rendering.coloring import CubedShadeColoring
from .rendering.image_output import BitmapExporter
from .acceleration.threading_backend import ThreadedAccelerator, get_optimal_worker_count, KERNELS

logger = logging.getLogger(__name__)


def _require_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be an integer, got {value!r}")


def _require_real(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} must be a number, got {value!r}")


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for a Mandelbrot render."""

    # Image parameters
    width: int = 800
    height: int = 600

    # Fractal parameters
    max_iterations: int = MAX_ITERATIONS
    escape_radius: float = ESCAPE_RADIUS

    # Viewport
    scale: float = VIEWPORT_SCALE
    center: Tuple[float, float] = (0.0, 0.0)

    # Performance
    num_workers: Optional[int] = None
    kernel: str = 'numpy'

    # Output
    output_path: str = 'test.bmp'

    def validate(self):
        """Validate configuration parameters."""
        for name in ('width', 'height', 'max_iterations'):
            _require_int(name, getattr(self, name))
        if self.num_workers is not None:
            _require_int('num_workers', self.num_workers)

        for name in ('escape_radius', 'scale'):
            _require_real(name, getattr(self, name))

        if not isinstance(self.center, (tuple, list)) or len(self.center) != 2:
            raise ValueError("center must be (real, imag)")
        for value in self.center:
            _require_real('center', value)

        if not isinstance(self.kernel, str):
            raise ValueError(f"kernel must be a string, got {type(self.kernel).__name__}")
        if not isinstance(self.output_path, str):
            raise ValueError(f"output_path must be a string, got {type(self.output_path).__name__}")

        if self.width <= 0 or self.height <= 0:
            raise ValueError("Width and height must be positive")

        if self.max_iterations <= 0:
            raise ValueError("max_iterations must be positive")

        if self.escape_radius <= 0:
            raise ValueError("escape_radius must be positive")

        if self.scale <= 0:
            raise ValueError("scale must be positive")

        if self.num_workers is not None and self.num_workers <= 0:
            raise ValueError("num_workers must be positive")

        if self.kernel not in KERNELS:
            raise ValueError(f"Unknown kernel '{self.kernel}'. Available: {', '.join(KERNELS)}")

    def resolved_workers(self) -> int:
        """Worker count to use, probing the host when none is configured."""
        if self.num_workers is None:
            return get_optimal_worker_count()
        return self.num_workers

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['center'] = list(self.center)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RenderConfig':
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        data = dict(data)
        if 'center' in data:
            if isinstance(data['center'], str):
                raise ValueError(f"center must be (real, imag), got {data['center']!r}")
            try:
                data['center'] = tuple(float(v) for v in data['center'])
            except (TypeError, ValueError) as e:
                raise ValueError(f"center must be (real, imag): {e}") from e
        return cls(**data)


@dataclass
class RenderResult:
    """Pixel buffer and histogram of a finished render."""

    buffer: PixelBuffer
    histogram: Histogram
    render_time: float

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height


class MandelbrotRenderer:
    """Main Mandelbrot rendering engine."""

    def __init__(self, config: Optional[RenderConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Rendering configuration (uses defaults if None)
        """
        self.config = config or RenderConfig()
        self.config.validate()

        self.viewport = Viewport(self.config.width, self.config.height,
                                 self.config.scale, self.config.center)
        self.iterator = EscapeTimeIterator(self.config.max_iterations, self.config.escape_radius)
        self.coloring = CubedShadeColoring(self.config.max_iterations)
        self.accelerator = ThreadedAccelerator(self.config.resolved_workers(), self.config.kernel)
        self.exporter = BitmapExporter()

        logger.info(f"MandelbrotRenderer initialized: {self.config.width}x{self.config.height}, "
                    f"max_iterations={self.config.max_iterations}")

    def render(self) -> RenderResult:
        """Render the configured image into memory."""
        start_time = time.time()

        logger.info("Starting render: Mandelbrot")
        buffer, histogram = self.accelerator.render_parallel(self.viewport, self.iterator, self.coloring)

        total_time = time.time() - start_time
        logger.info(f"Render complete: {total_time:.2f}s")

        return RenderResult(buffer, histogram, total_time)

    def render_to_file(self, output_path: Optional[Union[str, Path]] = None) -> Tuple[RenderResult, bool]:
        """
        Render and write the bitmap.

        Args:
            output_path: Bitmap path (defaults to config.output_path)

        Returns:
            Tuple of (result, written) where written is False on I/O failure
        """
        result = self.render()
        path = Path(output_path if output_path is not None else self.config.output_path)
        return result, self.exporter.write(result.buffer, path)


def render(width: int = 800, height: int = 600, num_workers: Optional[int] = None,
           **kwargs) -> RenderResult:
    """Render a Mandelbrot image with the given geometry and worker count."""
    config = RenderConfig(width=width, height=height, num_workers=num_workers, **kwargs)
    return MandelbrotRenderer(config).render()
