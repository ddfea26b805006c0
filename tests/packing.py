"""Inverse packers: the encoder side of the 12 and 14-bit layouts."""

import numpy as np


def pack12(samples) -> bytes:
    """Pack 12-bit samples, two per three bytes, MSB first."""
    s = np.asarray(samples, dtype=np.uint32)
    count = s.size
    if count % 2:
        s = np.append(s, np.zeros(1, dtype=np.uint32))
    a, b = s[0::2], s[1::2]
    groups = np.empty((a.size, 3), dtype=np.uint8)
    groups[:, 0] = a >> 4
    groups[:, 1] = ((a & 0xF) << 4) | (b >> 8)
    groups[:, 2] = b & 0xFF
    return groups.tobytes()[: -(-count * 12 // 8)]


def pack14(samples) -> bytes:
    """Pack 14-bit samples, four per seven bytes, MSB first."""
    s = np.asarray(samples, dtype=np.uint32)
    count = s.size
    if count % 4:
        s = np.append(s, np.zeros(4 - count % 4, dtype=np.uint32))
    s0, s1, s2, s3 = s[0::4], s[1::4], s[2::4], s[3::4]
    groups = np.empty((s0.size, 7), dtype=np.uint8)
    groups[:, 0] = s0 >> 6
    groups[:, 1] = ((s0 & 0x3F) << 2) | (s1 >> 12)
    groups[:, 2] = (s1 >> 4) & 0xFF
    groups[:, 3] = ((s1 & 0xF) << 4) | (s2 >> 10)
    groups[:, 4] = (s2 >> 2) & 0xFF
    groups[:, 5] = ((s2 & 0x3) << 6) | (s3 >> 8)
    groups[:, 6] = s3 & 0xFF
    return groups.tobytes()[: -(-count * 14 // 8)]

