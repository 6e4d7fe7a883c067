"""
Thread-pool backend for parallel fractal computation.

The pixel domain is enumerated in row-major order and cut into one
contiguous range per worker. Each worker writes only its own range of the
shared pixel buffer; the histogram is the single shared structure and is
updated under its lock.
"""

import os
import time
import logging
import numpy as np
from typing import List, Optional
from dataclasses import dataclass
from concurrent.futures import ThreadPoolExecutor

from ..core.math_functions import Viewport, EscapeTimeIterator
from ..core.pixel_buffer import PixelBuffer
from ..core.histogram import Histogram
from ..rendering.coloring import CubedShadeColoring

logger = logging.getLogger(__name__)

KERNELS = ('numpy', 'python')


@dataclass(frozen=True)
class WorkRange:
    """Half-open range [start, end) of row-major pixel indices."""
    worker_id: int
    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start


@dataclass
class WorkResult:
    """Timing for one completed range."""
    worker_id: int
    pixels: int
    processing_time: float


def create_work_ranges(total_pixels: int, num_workers: int) -> List[WorkRange]:
    """
    Split the pixel domain into one contiguous range per worker.

    Every range has ``total_pixels // num_workers`` pixels except the last,
    which also takes the remainder so that the ranges cover the domain.

    Args:
        total_pixels: width * height
        num_workers: Number of ranges to create

    Returns:
        List of WorkRange objects ordered by start index
    """
    if num_workers <= 0:
        raise ValueError("num_workers must be positive")
    if total_pixels < 0:
        raise ValueError("total_pixels must not be negative")

    chunk_size = total_pixels // num_workers
    ranges = []
    for i in range(num_workers):
        start = i * chunk_size
        end = total_pixels if i == num_workers - 1 else start + chunk_size
        ranges.append(WorkRange(worker_id=i, start=start, end=end))
    return ranges


def process_range_numpy(work: WorkRange, viewport: Viewport, iterator: EscapeTimeIterator,
                        coloring: CubedShadeColoring, buffer: PixelBuffer,
                        histogram: Histogram) -> WorkResult:
    """
    Evaluate one range with the vectorized kernel.

    Iteration counts for the whole range are computed at once, counted into
    a local histogram and merged into the shared one in a single step.
    """
    start_time = time.time()

    if work.size > 0:
        indices = np.arange(work.start, work.end, dtype=np.int64)
        iterations = iterator.iterate(viewport.map_indices(indices))

        histogram.accumulate(np.bincount(iterations, minlength=iterator.max_iter + 1))

        shades = coloring.shades(iterations)
        buffer.write_span(work.start, red=shades, green=shades, blue=0)

    return WorkResult(work.worker_id, work.size, time.time() - start_time)


def process_range_python(work: WorkRange, viewport: Viewport, iterator: EscapeTimeIterator,
                         coloring: CubedShadeColoring, buffer: PixelBuffer,
                         histogram: Histogram) -> WorkResult:
    """Evaluate one range pixel by pixel."""
    start_time = time.time()
    width = viewport.width

    for index in range(work.start, work.end):
        y, x = divmod(index, width)
        real, imag = viewport.map_pixel(x, y)
        iterations = iterator.evaluate(real, imag)
        histogram.increment(iterations)
        red, green, blue = coloring.color(iterations)
        buffer.set_pixel(x, y, red, green, blue)

    return WorkResult(work.worker_id, work.size, time.time() - start_time)


_RANGE_PROCESSORS = {
    'numpy': process_range_numpy,
    'python': process_range_python,
}


class ThreadedAccelerator:
    """Thread-pool based parallel fractal computation."""

    def __init__(self, num_workers: Optional[int] = None, kernel: str = 'numpy'):
        """
        Initialize accelerator.

        Args:
            num_workers: Number of worker threads (None for host CPU count)
            kernel: Per-range evaluation kernel, 'numpy' or 'python'
        """
        if num_workers is None:
            num_workers = get_optimal_worker_count()
        elif num_workers <= 0:
            raise ValueError("num_workers must be positive")
        if kernel not in _RANGE_PROCESSORS:
            raise ValueError(f"Unknown kernel '{kernel}'. Available: {', '.join(KERNELS)}")

        self.num_workers = num_workers
        self.kernel = kernel
        logger.info(f"Threaded accelerator: {self.num_workers} workers, {kernel} kernel")

    def render_parallel(self, viewport: Viewport, iterator: EscapeTimeIterator,
                        coloring: CubedShadeColoring):
        """
        Render the full pixel domain in parallel.

        Args:
            viewport: Pixel-to-complex mapping
            iterator: Escape-time iterator
            coloring: Iteration-count tone curve

        Returns:
            Tuple of (PixelBuffer, Histogram)
        """
        start_time = time.time()

        buffer = PixelBuffer(viewport.width, viewport.height)
        histogram = Histogram(iterator.max_iter)
        ranges = create_work_ranges(viewport.total_pixels, self.num_workers)
        process_range = _RANGE_PROCESSORS[self.kernel]

        for work in ranges:
            logger.info(f"Worker {work.worker_id}: begin {work.start}, end {work.end}")

        with ThreadPoolExecutor(max_workers=self.num_workers) as executor:
            futures = [executor.submit(process_range, work, viewport, iterator,
                                       coloring, buffer, histogram)
                       for work in ranges]

        # The executor has joined every worker; result() re-raises worker errors
        results = [future.result() for future in futures]

        for result in results:
            logger.debug(f"Worker {result.worker_id} finished {result.pixels} pixels "
                         f"in {result.processing_time:.3f}s")

        total_time = time.time() - start_time
        total_processing_time = sum(r.processing_time for r in results)
        logger.info(f"Parallel rendering complete: {total_time:.2f}s total, "
                    f"{total_processing_time:.2f}s processing time")

        return buffer, histogram


def get_optimal_worker_count() -> int:
    """Host-reported hardware parallelism, at least 1."""
    return os.cpu_count() or 1
