import numpy as np
import pytest
from PIL import Image

from asciicanvas.engine import GlyphCell, GlyphGrid
from asciicanvas.fonts import find_monospace_font

FONT_PATH = find_monospace_font()


@pytest.fixture
def font_path():
    if FONT_PATH is None:
        pytest.skip("No monospace font found on system")
    return FONT_PATH


def make_grid(lines, color=(0, 0, 0)):
    """Build a GlyphGrid from equal-length strings, every cell the same colour."""
    rows = [[GlyphCell(glyph=ch, color=color) for ch in line] for line in lines]
    return GlyphGrid(rows=rows, width=len(lines[0]), height=len(lines))


def gradient_image(width=256, height=64):
    """Horizontal black-to-white ramp, one grey level per column for width 256."""
    ramp = np.linspace(0, 255, width).round().astype(np.uint8)
    arr = np.repeat(np.tile(ramp, (height, 1))[:, :, None], 3, axis=2)
    return Image.fromarray(arr, "RGB")
