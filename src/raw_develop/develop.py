"""Develop: map linear sensor samples to a three-channel display buffer."""

import numpy as np

from .errors import InvalidCalibration
from .models import CalibrationLevels, DecodedImage, DisplayParams
from .partition import run_partitioned


def check_calibration(levels: CalibrationLevels) -> None:
    """Raise InvalidCalibration unless white level > black level."""
    if levels.white_level <= levels.black_level:
        raise InvalidCalibration(levels.black_level, levels.white_level)


def develop(
    image: DecodedImage,
    levels: CalibrationLevels,
    params: DisplayParams,
    workers: int | None = 1,
) -> np.ndarray:
    """Normalize a decoded image into a grayscale RGB display buffer.

    Each sample maps to ``(sample - black) * intensity / (white - black)``
    and is copied to all three channels. With ``params.flip_y`` source
    row ``y`` is written to output row ``height - 1 - y``. Values are not
    clamped; values below black or above white fall outside [0, 1].

    Args:
        image: Decoded linear samples
        levels: Sensor black and white levels
        params: Intensity and vertical flip
        workers: Row-partitioned threads (None = all CPUs)

    Returns:
        float32 array of shape (height, width, 3)

    Raises:
        InvalidCalibration: white_level <= black_level
    """
    check_calibration(levels)

    src = image.data
    height = image.height
    black = np.float32(levels.black_level)
    intensity = np.float32(params.intensity)
    span = np.float32(levels.white_level - levels.black_level)
    flip_y = params.flip_y

    out = np.empty((height, image.width, 3), dtype=np.float32)

    def kernel(row_start: int, row_stop: int) -> None:
        value = (src[row_start:row_stop] - black) * intensity / span
        if flip_y:
            out[height - row_stop : height - row_start] = value[::-1, :, None]
        else:
            out[row_start:row_stop] = value[:, :, None]

    run_partitioned(kernel, height, workers)
    return out
