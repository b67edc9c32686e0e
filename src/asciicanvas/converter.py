import base64
import binascii
import io
import logging
import math
import numbers
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from asciicanvas.charsets import FALLBACK
from asciicanvas.engine import GlyphCell, GlyphGrid
from asciicanvas.errors import ImageDecodeError, InvalidParameters
from asciicanvas.sampling import adjust_contrast, downsample, glyph_indices, grid_rows, luminance

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = 120
DEFAULT_CONTRAST = 1.0


@dataclass(frozen=True)
class ConversionParameters:
    columns: int = DEFAULT_COLUMNS
    palette: str = FALLBACK
    contrast: float = DEFAULT_CONTRAST

    def effective_palette(self) -> str:
        return self.palette or FALLBACK

    def validate(self) -> None:
        if isinstance(self.columns, bool) or not isinstance(self.columns, int):
            raise InvalidParameters(f"Column count must be an integer, got {self.columns!r}")
        if self.columns < 1:
            raise InvalidParameters(f"Column count must be at least 1, got {self.columns}")
        if not self.effective_palette():
            raise InvalidParameters("Palette is empty")
        if isinstance(self.contrast, bool) or not isinstance(self.contrast, numbers.Real):
            raise InvalidParameters(f"Contrast must be a number, got {self.contrast!r}")
        if not math.isfinite(self.contrast):
            raise InvalidParameters(f"Contrast must be a finite number, got {self.contrast!r}")


def load_image(source: Image.Image | str | Path | bytes) -> Image.Image:
    """Decode an image from a path, raw bytes or a base64 ``data:`` URL.

    Decoder failures are reported as ImageDecodeError with the original
    exception chained.
    """
    try:
        if isinstance(source, Image.Image):
            return source.convert("RGB")
        if isinstance(source, str) and source.startswith("data:"):
            _, _, payload = source.partition(",")
            source = base64.b64decode(payload, validate=True)
        if isinstance(source, bytes):
            source = io.BytesIO(source)
        with Image.open(source) as img:
            return img.convert("RGB")
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError, binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e


def convert(image: Image.Image, params: ConversionParameters) -> GlyphGrid:
    """Convert an image to a grid of glyphs, one per downsampled cell.

    Brightness is BT.601 luma, stretched by ``params.contrast`` around 128 and
    clamped. The clamped value picks a palette index which is then mirrored:
    black lands on the last palette entry and white on the first. Each cell
    keeps the sampled RGB colour, whatever glyph was chosen.
    """
    params.validate()
    palette = params.effective_palette()

    try:
        rgb = image if image.mode == "RGB" else image.convert("RGB")
    except OSError as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e
    if rgb.width < 1 or rgb.height < 1:
        raise ImageDecodeError(f"Image has no pixels: {rgb.width}x{rgb.height}")
    cols = params.columns
    rows = grid_rows(cols, rgb.width, rgb.height)
    logger.debug("Converting %dx%d image to %dx%d glyph grid", rgb.width, rgb.height, cols, rows)

    try:
        samples = downsample(rgb, cols, rows)
    except OSError as e:
        raise ImageDecodeError(f"Could not sample image: {e}") from e
    adjusted = adjust_contrast(luminance(samples), params.contrast)
    indices = glyph_indices(adjusted, len(palette))

    grid_rows_out = []
    for y in range(rows):
        row = []
        for x in range(cols):
            r, g, b = samples[y, x]
            row.append(GlyphCell(glyph=palette[indices[y, x]], color=(int(r), int(g), int(b))))
        grid_rows_out.append(row)
    return GlyphGrid(rows=grid_rows_out, width=cols, height=rows)


def image_to_ascii(
    image: Image.Image | str | Path | bytes,
    columns: int = DEFAULT_COLUMNS,
    palette: str = FALLBACK,
    contrast: float = DEFAULT_CONTRAST,
) -> str:
    """Load ``image`` and return its glyph grid as newline-joined text."""
    grid = convert(load_image(image), ConversionParameters(columns=columns, palette=palette, contrast=contrast))
    return "\n".join(grid.lines())
