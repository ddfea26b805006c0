"""Loading headerless packed sensor dumps."""

from pathlib import Path
import numpy as np

RAW_EXTENSIONS = {".raw", ".bin"}


def is_raw_file(path: Path) -> bool:
    """True for files that look like packed sensor dumps."""
    return path.is_file() and path.suffix.lower() in RAW_EXTENSIONS


def load_packed(path: Path, offset: int = 0) -> np.ndarray:
    """Read a packed sensor dump as a flat uint8 array.

    The file is plain sample data, optionally preceded by ``offset`` bytes
    of header that are skipped unread.

    Args:
        path: Path to the dump
        offset: Number of leading bytes to skip

    Returns:
        uint8 array of the remaining bytes
    """
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    return np.fromfile(path, dtype=np.uint8, offset=offset)
