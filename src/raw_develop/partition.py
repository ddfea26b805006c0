"""Row partitioning for the decode and develop kernels.

Kernels are called as ``kernel(row_start, row_stop)`` and must write only
to their own rows of a preallocated output. Each worker derives its byte
offsets from absolute row/column indices, so ranges can run in any order
on any thread without locking.
"""

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

import numpy as np

# Samples unpacked per call; bounds the per-sample index temporaries.
BLOCK_SAMPLES = 1 << 20


def resolve_workers(workers: int | None) -> int:
    """Turn a worker setting into a positive thread count (None = all CPUs)."""
    if workers is None:
        return os.cpu_count() or 1
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    return workers


def row_ranges(height: int, workers: int) -> list[tuple[int, int]]:
    """Split ``[0, height)`` into at most ``workers`` contiguous disjoint ranges.

    Args:
        height: Number of rows
        workers: Maximum number of ranges

    Returns:
        List of (row_start, row_stop) pairs covering every row exactly once
    """
    count = max(1, min(workers, height))
    step, extra = divmod(height, count)
    ranges = []
    start = 0
    for i in range(count):
        stop = start + step + (1 if i < extra else 0)
        ranges.append((start, stop))
        start = stop
    return ranges


def run_partitioned(
    kernel: Callable[[int, int], None],
    height: int,
    workers: int | None = 1,
) -> None:
    """Run ``kernel`` over row ranges and wait for all of them.

    The first exception raised by a worker is re-raised here after every
    range has finished.
    """
    ranges = row_ranges(height, resolve_workers(workers))
    if len(ranges) == 1:
        kernel(*ranges[0])
        return

    with ThreadPoolExecutor(max_workers=len(ranges), thread_name_prefix="raw-develop") as pool:
        pending = [pool.submit(kernel, start, stop) for start, stop in ranges]
    for future in pending:
        future.result()


def fill_samples(
    out,
    unpack: Callable[[int, int], np.ndarray],
    workers: int | None = 1,
    block_rows: int | None = None,
) -> None:
    """Fill a (height, width) array from a sample-range unpacker, row-partitioned.

    ``unpack(first, stop)`` returns the values of linear samples
    ``first .. stop - 1``, where sample ``n`` is at row ``n // width``.
    Each worker walks its rows in blocks of ``block_rows`` (default: about
    ``BLOCK_SAMPLES`` samples), so the unpacker's temporaries stay small
    whatever the frame size.
    """
    height, width = out.shape
    if block_rows is None:
        block_rows = max(1, BLOCK_SAMPLES // max(width, 1))
    if block_rows < 1:
        raise ValueError(f"block_rows must be >= 1, got {block_rows}")

    def kernel(row_start: int, row_stop: int) -> None:
        for start in range(row_start, row_stop, block_rows):
            stop = min(start + block_rows, row_stop)
            values = unpack(start * width, stop * width)
            out[start:stop] = values.reshape(stop - start, width)

    run_partitioned(kernel, height, workers)
