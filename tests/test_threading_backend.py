import numpy as np
import pytest

from fractal_bitmap.acceleration import threading_backend
from fractal_bitmap.acceleration.threading_backend import (
    ThreadedAccelerator,
    WorkRange,
    create_work_ranges,
    get_optimal_worker_count,
)
from fractal_bitmap.core.math_functions import (
    EscapeTimeIterator,
    Viewport,
    escape_iterations,
    map_to_fractal,
)
from fractal_bitmap.rendering.coloring import CubedShadeColoring, cubed_shade


def _assert_complete_cover(ranges, total):
    covered = np.zeros(total, dtype=np.int64)
    for work in ranges:
        covered[work.start:work.end] += 1
    assert (covered == 1).all()


class TestCreateWorkRanges:
    @pytest.mark.parametrize("workers", [1, 2, 7, 13])
    def test_complete_non_overlapping_cover(self, workers):
        total = 40 * 30
        ranges = create_work_ranges(total, workers)
        assert len(ranges) == workers
        _assert_complete_cover(ranges, total)

    def test_boundaries_follow_chunk_size(self):
        ranges = create_work_ranges(10, 3)
        assert ranges == [
            WorkRange(0, 0, 3),
            WorkRange(1, 3, 6),
            WorkRange(2, 6, 10),  # remainder goes to the last worker
        ]

    def test_even_split(self):
        ranges = create_work_ranges(480000, 4)
        assert [(r.start, r.end) for r in ranges] == [
            (0, 120000), (120000, 240000), (240000, 360000), (360000, 480000),
        ]

    def test_more_workers_than_pixels(self):
        ranges = create_work_ranges(3, 5)
        _assert_complete_cover(ranges, 3)
        assert [r.size for r in ranges] == [0, 0, 0, 0, 3]

    def test_rejects_bad_worker_count(self):
        with pytest.raises(ValueError):
            create_work_ranges(10, 0)


def test_optimal_worker_count_is_positive():
    assert get_optimal_worker_count() >= 1


def test_optimal_worker_count_falls_back_to_one(monkeypatch):
    monkeypatch.setattr("os.cpu_count", lambda: None)
    assert get_optimal_worker_count() == 1


class TestThreadedAccelerator:
    width, height, max_iter = 37, 23, 100

    def _render(self, workers, kernel='numpy'):
        viewport = Viewport(self.width, self.height)
        iterator = EscapeTimeIterator(self.max_iter)
        coloring = CubedShadeColoring(self.max_iter)
        return ThreadedAccelerator(workers, kernel).render_parallel(viewport, iterator, coloring)

    def _expected(self):
        counts = np.zeros(self.max_iter + 1, dtype=np.int64)
        pixels = {}
        for y in range(self.height):
            for x in range(self.width):
                n = escape_iterations(*map_to_fractal(x, y, self.width, self.height))
                counts[n] += 1
                shade = cubed_shade(n, self.max_iter)
                pixels[(x, y)] = (shade, shade, 0)
        return counts, pixels

    def test_rejects_bad_arguments(self):
        with pytest.raises(ValueError):
            ThreadedAccelerator(0)
        with pytest.raises(ValueError):
            ThreadedAccelerator(2, kernel='cuda')

    def test_defaults_to_host_parallelism(self):
        assert ThreadedAccelerator().num_workers == get_optimal_worker_count()

    @pytest.mark.parametrize("workers", [1, 2, 7, 10])
    @pytest.mark.parametrize("kernel", ['numpy', 'python'])
    def test_matches_sequential_evaluation(self, workers, kernel):
        # 37 * 23 = 851 pixels, not divisible by 2, 7 or 10
        buffer, histogram = self._render(workers, kernel)
        expected_counts, expected_pixels = self._expected()

        assert histogram.total() == self.width * self.height
        assert histogram.counts.tolist() == expected_counts.tolist()
        for (x, y), color in expected_pixels.items():
            assert buffer.get_pixel(x, y) == color

    def test_kernels_agree_byte_for_byte(self):
        numpy_buffer, numpy_hist = self._render(3, 'numpy')
        python_buffer, python_hist = self._render(3, 'python')
        assert bytes(numpy_buffer.as_bytes()) == bytes(python_buffer.as_bytes())
        assert numpy_hist.counts.tolist() == python_hist.counts.tolist()

    def test_independent_of_worker_count(self):
        reference, _ = self._render(1)
        for workers in (2, 5, 16):
            buffer, _ = self._render(workers)
            assert bytes(buffer.as_bytes()) == bytes(reference.as_bytes())

    def test_last_pixel_is_evaluated(self):
        # bottom-right pixel lies in the remainder when the split is uneven
        buffer, _ = self._render(7)
        x, y = self.width - 1, self.height - 1
        n = escape_iterations(*map_to_fractal(x, y, self.width, self.height))
        shade = cubed_shade(n, self.max_iter)
        assert buffer.get_pixel(x, y) == (shade, shade, 0)

    def test_worker_errors_propagate(self, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setitem(threading_backend._RANGE_PROCESSORS, "numpy", broken)
        with pytest.raises(RuntimeError, match="boom"):
            self._render(2)
