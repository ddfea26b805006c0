"""Configuration management."""

from pathlib import Path
from typing import Literal
from pydantic import BaseModel, Field
import yaml

from .models import CalibrationLevels, DisplayParams


class Config(BaseModel):
    """Decode and develop configuration."""

    # Sensor stream
    width: int | None = Field(default=None, gt=0)
    height: int | None = Field(default=None, gt=0)
    bit_depth: int = 12
    swap_endian: bool = False
    header_offset: int = Field(default=0, ge=0)

    # Calibration
    black_level: int = Field(default=0, ge=0)
    white_level: int = Field(default=4095, ge=0)

    # Develop
    intensity: float = Field(default=1.0, ge=0.0)
    flip_y: bool = True

    # Presentation
    display_gamma: float = Field(default=1.0, gt=0.0)
    pseudo_color: bool = False
    output_bits: Literal[8, 16] = 8

    # Threads for decode/develop (None = all CPUs)
    workers: int | None = Field(default=None, ge=1)

    def calibration(self) -> CalibrationLevels:
        return CalibrationLevels(black_level=self.black_level, white_level=self.white_level)

    def display_params(self) -> DisplayParams:
        return DisplayParams(intensity=self.intensity, flip_y=self.flip_y)


def load_config(path: Path) -> Config:
    """Load configuration from YAML file."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return Config(**(data or {}))


def save_config(config: Config, path: Path) -> None:
    """Save configuration to YAML file."""
    with open(path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False)
