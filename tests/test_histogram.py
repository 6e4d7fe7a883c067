import threading

import numpy as np
import pytest

from fractal_bitmap.core.histogram import Histogram


def test_increment_and_read_back():
    histogram = Histogram(100)
    assert len(histogram) == 101

    histogram.increment(0)
    histogram.increment(100)
    histogram.increment(100)

    assert histogram[0] == 1
    assert histogram[100] == 2
    assert histogram.total() == 3
    assert histogram.nonzero_items() == [(0, 1), (100, 2)]


@pytest.mark.parametrize("count", [-1, 101])
def test_out_of_range_raises(count):
    with pytest.raises(IndexError):
        Histogram(100).increment(count)


def test_rejects_bad_size():
    with pytest.raises(ValueError):
        Histogram(0)


def test_accumulate():
    histogram = Histogram(3)
    histogram.accumulate(np.array([1, 0, 2, 5]))
    histogram.accumulate(np.array([0, 1, 0, 1]))
    assert histogram.counts.tolist() == [1, 1, 2, 6]

    with pytest.raises(IndexError):
        histogram.accumulate(np.array([1, 2]))


def test_counts_is_a_copy():
    histogram = Histogram(2)
    counts = histogram.counts
    counts[0] = 99
    assert histogram[0] == 0


def test_concurrent_increments_are_not_lost():
    histogram = Histogram(10)
    per_thread = 5000

    def worker(bucket):
        for _ in range(per_thread):
            histogram.increment(bucket)
            histogram.increment(10)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert histogram.total() == 8 * per_thread * 2
    assert histogram[10] == 8 * per_thread
    assert all(histogram[i] == per_thread for i in range(8))


@pytest.mark.parametrize("count", [-1, 11])
def test_read_out_of_range_raises(count):
    histogram = Histogram(10)
    histogram.increment(10)
    with pytest.raises(IndexError):
        histogram[count]


def test_accumulate_rejects_negative_counts():
    histogram = Histogram(3)
    histogram.accumulate(np.array([2, 2, 2, 2]))
    with pytest.raises(ValueError):
        histogram.accumulate(np.array([0, -1, 0, 0]))
    assert histogram.counts.tolist() == [2, 2, 2, 2]
