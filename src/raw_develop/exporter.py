"""Presentation of developed buffers: gamma, clamping, false color and PNG export."""

import json
from datetime import datetime
from pathlib import Path
import numpy as np
import cv2
from PIL import Image


def to_display(buffer: np.ndarray, gamma: float = 1.0) -> np.ndarray:
    """Apply display gamma and clamp a developed buffer to [0, 1].

    Args:
        buffer: Developed (height, width, 3) float buffer, unclamped
        gamma: Exponent applied to each channel (1.0 = linear)

    Returns:
        float32 array of the same shape with values in [0, 1]
    """
    if gamma <= 0:
        raise ValueError(f"gamma must be > 0, got {gamma}")
    linear = np.maximum(buffer, 0.0).astype(np.float32)
    if gamma != 1.0:
        linear = np.power(linear, np.float32(gamma))
    return np.clip(linear, 0.0, 1.0)


def pseudo_color(buffer: np.ndarray) -> np.ndarray:
    """Map the first channel of a [0, 1] buffer to a blue-green-red heat map."""
    v = np.clip(buffer[..., 0], 0.0, 1.0)
    red = np.interp(v, [0.5, 0.75], [0.0, 1.0])
    green = np.interp(v, [0.0, 0.25, 0.75, 1.0], [0.0, 1.0, 1.0, 0.0])
    blue = np.interp(v, [0.25, 0.5], [1.0, 0.0])
    return np.stack([red, green, blue], axis=-1).astype(np.float32)


def quantize(display: np.ndarray, bits: int = 8) -> np.ndarray:
    """Convert a [0, 1] buffer to uint8 or uint16 with rounding."""
    if bits == 8:
        return (display * 255.0 + 0.5).astype(np.uint8)
    if bits == 16:
        return (display * 65535.0 + 0.5).astype(np.uint16)
    raise ValueError(f"Unsupported output bit depth: {bits}")


def export_image(
    buffer: np.ndarray,
    original_path: Path,
    output_dir: Path,
    settings: dict,
    gamma: float = 1.0,
    false_color: bool = False,
    bits: int = 8,
) -> Path:
    """Export a developed buffer as an RGB PNG with a JSON sidecar.

    Args:
        buffer: Developed (height, width, 3) float buffer
        original_path: Path to the packed dump (for naming)
        output_dir: Directory to save output
        settings: Decode/develop settings recorded in the sidecar
        gamma: Display gamma
        false_color: Render a pseudo-color heat map instead of grayscale
        bits: 8 (Pillow) or 16 (OpenCV) bits per channel

    Returns:
        Path to saved file
    """
    output_path = output_dir / f"{original_path.stem}_developed.png"

    display = to_display(buffer, gamma)
    if false_color:
        display = pseudo_color(display)
    pixels = quantize(display, bits)

    if bits == 8:
        Image.fromarray(pixels).save(output_path, "PNG")
    else:
        # OpenCV writes BGR channel order
        if not cv2.imwrite(str(output_path), cv2.cvtColor(pixels, cv2.COLOR_RGB2BGR)):
            raise OSError(f"Failed to write {output_path}")

    _save_sidecar(output_path, original_path, settings, gamma, false_color, bits)

    return output_path


def _save_sidecar(
    image_path: Path,
    original_path: Path,
    settings: dict,
    gamma: float,
    false_color: bool,
    bits: int,
) -> None:
    """Save develop settings as JSON sidecar file."""
    sidecar_path = image_path.with_suffix(".json")

    sidecar_data = {
        **settings,
        "display_gamma": gamma,
        "pseudo_color": false_color,
        "output_bits": bits,
        "processed_date": datetime.now().isoformat(),
        "original_file": original_path.name,
    }

    with open(sidecar_path, "w") as f:
        json.dump(sidecar_data, f, indent=2)
