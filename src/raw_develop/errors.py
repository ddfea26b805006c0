"""Errors raised by the decode and develop stages."""


class RawDevelopError(ValueError):
    """Base class for precondition failures in decode/develop."""


class UnsupportedBitDepth(RawDevelopError):
    """Bit depth is not one of 12, 14 or 16."""

    def __init__(self, bit_depth):
        self.bit_depth = bit_depth
        super().__init__(f"Unsupported bit depth: {bit_depth!r} (expected 12, 14 or 16)")


class BufferTooSmall(RawDevelopError):
    """Packed buffer cannot supply width * height samples."""

    def __init__(self, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__(f"Packed buffer too small: need {required} bytes, got {actual}")


class InvalidCalibration(RawDevelopError):
    """White level is not strictly greater than black level."""

    def __init__(self, black_level: int, white_level: int):
        self.black_level = black_level
        self.white_level = white_level
        super().__init__(
            f"Invalid calibration: white level {white_level} must be greater "
            f"than black level {black_level}"
        )
