"""Keep one decoded image and re-develop it as display settings change."""

import numpy as np

from .develop import develop
from .dispatch import decode
from .models import CalibrationLevels, DecodedImage, DisplayParams


class DevelopSession:
    """Owns a DecodedImage and produces display buffers from it on demand.

    The packed buffer is only needed for decoding; after that, changes to
    intensity or flip re-run develop on the kept linear image.
    """

    def __init__(
        self,
        image: DecodedImage,
        levels: CalibrationLevels,
        params: DisplayParams | None = None,
        workers: int | None = 1,
    ):
        self.image = image
        self.levels = levels
        self.params = params if params is not None else DisplayParams()
        self.workers = workers

    @classmethod
    def from_buffer(
        cls,
        buffer,
        width: int,
        height: int,
        bit_depth: int,
        levels: CalibrationLevels,
        swap: bool = False,
        params: DisplayParams | None = None,
        workers: int | None = 1,
    ) -> "DevelopSession":
        """Decode ``buffer`` once and wrap the result in a session."""
        image = decode(buffer, width, height, bit_depth, swap=swap, workers=workers)
        return cls(image, levels, params=params, workers=workers)

    def develop(self, intensity: float | None = None, flip_y: bool | None = None) -> np.ndarray:
        """Update the display params that were given and develop the image.

        Returns a fresh (height, width, 3) float32 buffer every call. Both
        values are validated before either is applied.
        """
        update = {}
        if intensity is not None:
            update["intensity"] = intensity
        if flip_y is not None:
            update["flip_y"] = flip_y
        if update:
            checked = DisplayParams.model_validate({**self.params.model_dump(), **update})
            for name in update:
                setattr(self.params, name, getattr(checked, name))
        return develop(self.image, self.levels, self.params, workers=self.workers)

    __call__ = develop
