"""Value types shared by the decoders and the develop stage."""

from dataclasses import dataclass
from enum import IntEnum

import numpy as np
from pydantic import BaseModel, ConfigDict, Field


class BitDepth(IntEnum):
    """Sample width of a packed sensor stream."""

    BITS_12 = 12
    BITS_14 = 14
    BITS_16 = 16

    @property
    def max_value(self) -> int:
        return (1 << int(self)) - 1


@dataclass(frozen=True, eq=False)
class DecodedImage:
    """Linear samples decoded from a packed buffer.

    ``data`` is a read-only float32 array of shape (height, width), stored
    row-major, holding integer sample values in [0, 2**bit_depth - 1].
    """

    data: np.ndarray
    width: int
    height: int
    bit_depth: BitDepth

    def __post_init__(self):
        if self.data.shape != (self.height, self.width):
            raise ValueError(
                f"Sample array shape {self.data.shape} does not match "
                f"{self.height}x{self.width}"
            )
        view = self.data.view()
        view.flags.writeable = False
        object.__setattr__(self, "data", view)


class CalibrationLevels(BaseModel):
    """Sensor black and white levels.

    ``white_level > black_level`` is checked by develop, not here, so that
    bad sensor metadata surfaces as InvalidCalibration at the point of use.
    """

    model_config = ConfigDict(frozen=True)

    black_level: int = Field(default=0, ge=0)
    white_level: int = Field(default=4095, ge=0)


class DisplayParams(BaseModel):
    """Caller-owned display settings; changing them only re-runs develop."""

    model_config = ConfigDict(validate_assignment=True)

    intensity: float = Field(default=1.0, ge=0.0)
    flip_y: bool = False
