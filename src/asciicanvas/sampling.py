import math

import numpy as np
from PIL import Image

# ITU-R BT.601 luma weights (0.299, 0.587, 0.114) in thousandths
LUMA_WEIGHTS = (299, 587, 114)
LUMA_SCALE = 1000

# Text cells are roughly twice as tall as they are wide
CELL_ASPECT = 0.5


def grid_rows(columns: int, width: int, height: int) -> int:
    """Number of glyph rows for ``columns`` glyphs across an image of the given size."""
    return max(1, math.floor(columns * (height / width) * CELL_ASPECT))


def downsample(image: Image.Image, columns: int, rows: int) -> np.ndarray:
    """Area-average an RGB image down (or up) to one sample per cell.

    Returns uint8 array of shape (rows, columns, 3).
    """
    small = image.resize((columns, rows), Image.BOX)
    return np.asarray(small, dtype=np.uint8).reshape(rows, columns, 3)


def luminance(samples: np.ndarray) -> np.ndarray:
    """Weighted brightness of each RGB sample, 0-255 float.

    Summed in integers and divided once so grey levels come out exact.
    """
    rgb = samples.astype(np.int64)
    r, g, b = LUMA_WEIGHTS
    return (r * rgb[..., 0] + g * rgb[..., 1] + b * rgb[..., 2]) / LUMA_SCALE


def adjust_contrast(brightness: np.ndarray, contrast: float) -> np.ndarray:
    """Stretch brightness around mid-grey and clamp back into 0-255."""
    return np.clip((brightness - 128.0) * contrast + 128.0, 0.0, 255.0)


def glyph_indices(adjusted: np.ndarray, palette_length: int) -> np.ndarray:
    """Map clamped brightness to palette positions.

    The brightness-scaled index is mirrored, so 0 selects the last palette
    entry and 255 selects the first.
    """
    last = palette_length - 1
    scaled = np.floor((adjusted / 255.0) * last).astype(np.intp)
    return last - scaled
