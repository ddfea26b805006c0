"""Byte-order helpers and buffer sizing for packed sensor streams."""

import numpy as np

from .errors import BufferTooSmall


def as_byte_array(buffer) -> np.ndarray:
    """Borrow ``buffer`` as a flat read-only uint8 array without copying.

    Accepts bytes, bytearray, memoryview or a numpy array of any dtype.
    """
    if isinstance(buffer, np.ndarray):
        arr = np.ascontiguousarray(buffer).reshape(-1).view(np.uint8)
    else:
        arr = np.frombuffer(buffer, dtype=np.uint8)
    if arr.flags.writeable:
        # Read-only view; the caller's buffer stays writable.
        arr = arr.view()
        arr.flags.writeable = False
    return arr


def required_bytes(width: int, height: int, bit_depth: int, swap: bool = False) -> int:
    """Minimum packed buffer length for ``width * height`` samples.

    Swapped streams are addressed as whole 16-bit words, so the minimum is
    rounded up to an even length when ``swap`` is set.
    """
    nbytes = -(-width * height * int(bit_depth) // 8)
    if swap and nbytes % 2:
        nbytes += 1
    return nbytes


def check_dimensions(width: int, height: int) -> None:
    """Raise ValueError unless width and height are positive integers."""
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
            raise ValueError(f"{name} must be a positive integer, got {value!r}")


def check_buffer(data: np.ndarray, width: int, height: int, bit_depth: int, swap: bool = False) -> None:
    """Validate dimensions, then raise BufferTooSmall if ``data`` is too short."""
    check_dimensions(width, height)
    required = required_bytes(width, height, bit_depth, swap)
    if data.size < required:
        raise BufferTooSmall(required, data.size)


def physical_index(logical: np.ndarray, swap: bool) -> np.ndarray:
    """Map logical stream byte positions to positions in the buffer.

    With a 16-bit word swap, logical byte ``i`` sits at ``i ^ 1``. For a
    3- or 7-byte group this makes reads depend on whether the group starts
    on an even or odd byte offset.
    """
    if not swap:
        return logical
    return np.bitwise_xor(logical, 1)


def gather(data: np.ndarray, logical: np.ndarray, swap: bool) -> np.ndarray:
    """Read bytes at logical stream positions as uint32."""
    return data[physical_index(logical, swap)].astype(np.uint32)


def word_swap(buffer) -> bytes:
    """Exchange the two bytes of every 16-bit word in ``buffer``.

    A trailing odd byte is kept in place.
    """
    data = as_byte_array(buffer)
    even = data.size - data.size % 2
    swapped = data.copy()
    swapped[:even] = data[:even].reshape(-1, 2)[:, ::-1].reshape(-1)
    return swapped.tobytes()