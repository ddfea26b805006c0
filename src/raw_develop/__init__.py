"""raw_develop - decode packed 12/14/16-bit sensor data and develop it for display.

Core (pure, no I/O):
    - decode(): dispatch a packed buffer to the 12, 14 or 16-bit decoder
    - develop(): black/white normalization with intensity and vertical flip
    - DevelopSession: keep one decoded image, re-develop on demand

Surfaces:
    - raw_handler: headerless packed dump loading
    - exporter: display gamma, clamping, pseudo color, PNG export
    - pipeline / cli: batch processing and the ``raw-develop`` command
"""

from .decode12 import decode12
from .decode14 import decode14
from .decode16 import decode16
from .develop import develop
from .dispatch import decode
from .endian import required_bytes, word_swap
from .errors import BufferTooSmall, InvalidCalibration, RawDevelopError, UnsupportedBitDepth
from .models import BitDepth, CalibrationLevels, DecodedImage, DisplayParams
from .session import DevelopSession

__version__ = "0.1.0"
__all__ = [
    "decode",
    "decode12",
    "decode14",
    "decode16",
    "develop",
    "DevelopSession",
    "required_bytes",
    "word_swap",
    "BitDepth",
    "CalibrationLevels",
    "DecodedImage",
    "DisplayParams",
    "RawDevelopError",
    "UnsupportedBitDepth",
    "BufferTooSmall",
    "InvalidCalibration",
]
