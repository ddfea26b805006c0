"""14-bit packed decoder: four samples in every seven bytes.

Each sample is extracted from a three-byte window of its group and shifted
into place::

    phase  window     shift
    0      {0, 0, 1}  2
    1      {1, 2, 3}  4
    2      {3, 4, 5}  6
    3      {5, 5, 6}  0
"""

import numpy as np

from .endian import as_byte_array, check_buffer, gather
from .partition import fill_samples

GROUP_SAMPLES = 4
GROUP_BYTES = 7
MASK = 0x3FFF

# Indexed by sample_index % GROUP_SAMPLES.
OFFSETS = np.array(
    [
        [0, 0, 1],
        [1, 2, 3],
        [3, 4, 5],
        [5, 5, 6],
    ],
    dtype=np.int64,
)
SHIFTS = np.array([2, 4, 6, 0], dtype=np.uint32)


def unpack14(data: np.ndarray, first: int, stop: int, swap: bool = False) -> np.ndarray:
    """Unpack linear samples ``first .. stop - 1`` from a 14-bit stream."""
    n = np.arange(first, stop, dtype=np.int64)
    phase = n % GROUP_SAMPLES
    base = (n // GROUP_SAMPLES) * GROUP_BYTES

    window = base[:, None] + OFFSETS[phase]
    b = gather(data, window, swap)
    value = (b[:, 0] << 16) | (b[:, 1] << 8) | b[:, 2]
    return (value >> SHIFTS[phase]) & MASK


def decode14(buffer, width: int, height: int, swap: bool = False, workers: int | None = 1) -> np.ndarray:
    """Decode a 14-bit packed buffer into a float32 (height, width) array.

    Args:
        buffer: Packed sensor bytes (borrowed, never modified)
        width: Image width in samples
        height: Image height in rows
        swap: Exchange the bytes of each 16-bit word before unpacking
        workers: Number of row-partitioned threads (None = all CPUs)

    Returns:
        float32 array with values in [0, 16383]
    """
    data = as_byte_array(buffer)
    check_buffer(data, width, height, 14, swap)

    out = np.empty((height, width), dtype=np.float32)
    fill_samples(out, lambda first, stop: unpack14(data, first, stop, swap), workers)
    return out
