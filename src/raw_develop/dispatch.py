"""Bit-depth dispatch: select the decoder for a packed stream."""

from .decode12 import decode12
from .decode14 import decode14
from .decode16 import decode16
from .errors import UnsupportedBitDepth
from .models import BitDepth, DecodedImage

DECODERS = {
    BitDepth.BITS_12: decode12,
    BitDepth.BITS_14: decode14,
    BitDepth.BITS_16: decode16,
}


def to_bit_depth(bit_depth) -> BitDepth:
    """Coerce an int to BitDepth, raising UnsupportedBitDepth otherwise."""
    if isinstance(bit_depth, bool):
        raise UnsupportedBitDepth(bit_depth)
    try:
        return BitDepth(bit_depth)
    except ValueError:
        raise UnsupportedBitDepth(bit_depth) from None


def decode(
    buffer,
    width: int,
    height: int,
    bit_depth: int,
    swap: bool = False,
    workers: int | None = 1,
) -> DecodedImage:
    """Decode a packed sensor buffer into a linear float image.

    Args:
        buffer: Packed bytes from the loader (borrowed read-only)
        width: Image width in samples
        height: Image height in rows
        bit_depth: 12, 14 or 16
        swap: Exchange the bytes of each 16-bit word before unpacking
        workers: Row-partitioned decode threads (None = all CPUs)

    Returns:
        DecodedImage holding a read-only float32 (height, width) array

    Raises:
        UnsupportedBitDepth: bit_depth is not 12, 14 or 16
        BufferTooSmall: buffer cannot supply width * height samples
        ValueError: width or height is not a positive integer
    """
    depth = to_bit_depth(bit_depth)
    data = DECODERS[depth](buffer, width, height, swap=swap, workers=workers)
    return DecodedImage(data=data, width=int(width), height=int(height), bit_depth=depth)
