"""12-bit packed decoder: two samples in every three bytes.

Byte layout of one group (MSB first)::

    byte 0    byte 1    byte 2
    AAAAAAAA  AAAABBBB  BBBBBBBB

Sample A is the high 12 bits of bytes 0-1 (shifted right by 4), sample B
is the low 12 bits of bytes 1-2.
"""

import numpy as np

from .endian import as_byte_array, check_buffer, gather
from .partition import fill_samples

GROUP_SAMPLES = 2
GROUP_BYTES = 3
MASK = 0xFFF

# Indexed by sample_index % GROUP_SAMPLES.
OFFSETS = np.array([[0, 1], [1, 2]], dtype=np.int64)
SHIFTS = np.array([4, 0], dtype=np.uint32)


def unpack12(data: np.ndarray, first: int, stop: int, swap: bool = False) -> np.ndarray:
    """Unpack linear samples ``first .. stop - 1`` from a 12-bit stream.

    Byte addresses are computed from each sample's absolute index, so any
    sub-range can be unpacked independently of the others.
    """
    n = np.arange(first, stop, dtype=np.int64)
    phase = n % GROUP_SAMPLES
    base = (n // GROUP_SAMPLES) * GROUP_BYTES

    window = base[:, None] + OFFSETS[phase]
    b = gather(data, window, swap)
    value = (b[:, 0] << 8) | b[:, 1]
    return (value >> SHIFTS[phase]) & MASK


def decode12(buffer, width: int, height: int, swap: bool = False, workers: int | None = 1) -> np.ndarray:
    """Decode a 12-bit packed buffer into a float32 (height, width) array.

    Args:
        buffer: Packed sensor bytes (borrowed, never modified)
        width: Image width in samples
        height: Image height in rows
        swap: Exchange the bytes of each 16-bit word before unpacking
        workers: Number of row-partitioned threads (None = all CPUs)

    Returns:
        float32 array with values in [0, 4095]
    """
    data = as_byte_array(buffer)
    check_buffer(data, width, height, 12, swap)

    out = np.empty((height, width), dtype=np.float32)
    fill_samples(out, lambda first, stop: unpack12(data, first, stop, swap), workers)
    return out
