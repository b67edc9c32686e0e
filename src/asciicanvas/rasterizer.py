import functools
import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageColor, ImageDraw

from asciicanvas.engine import RGB, ColorMode, GlyphCell, GlyphGrid
from asciicanvas.errors import SurfaceUnavailable
from asciicanvas.fonts import load_font

logger = logging.getLogger(__name__)

CELL_WIDTH = 7
CELL_HEIGHT = 12
MARGIN = 10
FONT_SIZE = 12


@dataclass(frozen=True)
class ColorScheme:
    background: RGB
    foreground: RGB | None  # None paints each glyph in its cell's own colour


# Two dark and two light backgrounds, each paired with a legible foreground
SCHEMES: dict[ColorMode, ColorScheme] = {
    ColorMode.MONO: ColorScheme(ImageColor.getrgb("#ffffff"), ImageColor.getrgb("#334155")),
    ColorMode.VINTAGE_GREEN: ColorScheme(ImageColor.getrgb("#051a05"), ImageColor.getrgb("#00ff41")),
    ColorMode.CYBER_PINK: ColorScheme(ImageColor.getrgb("#2a0a18"), ImageColor.getrgb("#ff00ff")),
    ColorMode.ORIGINAL: ColorScheme(ImageColor.getrgb("#f8fafc"), None),
}


def foreground_for(cell: GlyphCell, scheme: ColorScheme) -> RGB:
    return cell.color if scheme.foreground is None else scheme.foreground


class Rasterizer:
    """Draws a glyph grid onto an RGB image with fixed cell geometry."""

    def __init__(
        self,
        cell_width: int = CELL_WIDTH,
        cell_height: int = CELL_HEIGHT,
        margin: int = MARGIN,
        font_size: int = FONT_SIZE,
        font_path: str | Path | None = None,
        schemes: dict[ColorMode, ColorScheme] | None = None,
        antialias: bool = True,
    ):
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.margin = margin
        self.font_size = font_size
        self.font_path = font_path
        self.schemes = SCHEMES if schemes is None else {**SCHEMES, **schemes}
        self.antialias = antialias
        self._font = None

    @property
    def font(self):
        if self._font is None:
            self._font = load_font(self.font_path, self.font_size)
        return self._font

    def surface_size(self, grid: GlyphGrid) -> tuple[int, int]:
        return (
            grid.width * self.cell_width + 2 * self.margin,
            grid.height * self.cell_height + 2 * self.margin,
        )

    def cell_origin(self, x: int, y: int) -> tuple[int, int]:
        return self.margin + x * self.cell_width, self.margin + y * self.cell_height

    def render(self, grid: GlyphGrid, mode: ColorMode) -> Image.Image:
        scheme = self.schemes[mode]
        size = self.surface_size(grid)
        try:
            surface = Image.new("RGB", size, scheme.background)
        except (ValueError, MemoryError) as e:
            raise SurfaceUnavailable(f"Could not allocate {size[0]}x{size[1]} surface: {e}") from e
        logger.debug("Rasterizing %dx%d grid onto %dx%d surface (%s)", grid.width, grid.height, *size, mode.value)

        draw = ImageDraw.Draw(surface)
        draw.fontmode = "L" if self.antialias else "1"
        font = self.font
        for y, row in enumerate(grid.rows):
            for x, cell in enumerate(row):
                if cell.glyph.isspace():
                    continue
                draw.text(self.cell_origin(x, y), cell.glyph, fill=foreground_for(cell, scheme), font=font)
        return surface


@functools.lru_cache(maxsize=1)
def default_rasterizer() -> Rasterizer:
    return Rasterizer()


def render(grid: GlyphGrid, mode: ColorMode, **kwargs) -> Image.Image:
    """Rasterize ``grid``, reusing the default Rasterizer (and its font) unless ``kwargs`` ask for another."""
    rasterizer = Rasterizer(**kwargs) if kwargs else default_rasterizer()
    return rasterizer.render(grid, mode)
