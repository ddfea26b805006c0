"""16-bit decoder: one little-endian word per sample."""

import numpy as np

from .endian import as_byte_array, check_buffer
from .partition import fill_samples


def unpack16(data: np.ndarray, first: int, stop: int, swap: bool = False) -> np.ndarray:
    """Read words ``first .. stop - 1``; ``swap`` reads them big-endian."""
    dtype = ">u2" if swap else "<u2"
    return data[2 * first : 2 * stop].view(dtype)


def decode16(buffer, width: int, height: int, swap: bool = False, workers: int | None = 1) -> np.ndarray:
    """Decode a 16-bit buffer into a float32 (height, width) array.

    Args:
        buffer: Sensor bytes (borrowed, never modified)
        width: Image width in samples
        height: Image height in rows
        swap: Exchange the high and low byte of each word
        workers: Number of row-partitioned threads (None = all CPUs)

    Returns:
        float32 array with values in [0, 65535]
    """
    data = as_byte_array(buffer)
    check_buffer(data, width, height, 16, swap)

    out = np.empty((height, width), dtype=np.float32)
    fill_samples(out, lambda first, stop: unpack16(data, first, stop, swap), workers)
    return out
