import logging
import time
from pathlib import Path

from PIL import Image

from asciicanvas.engine import GlyphGrid

logger = logging.getLogger(__name__)


def grid_to_text(grid: GlyphGrid) -> str:
    return "\n".join(grid.lines())


def grid_to_ansi(grid: GlyphGrid) -> str:
    """Wrap each glyph in an ANSI truecolor foreground escape for its cell colour."""
    out = []
    for row in grid.rows:
        parts = []
        for cell in row:
            r, g, b = cell.color
            parts.append(f"\033[38;2;{r};{g};{b}m{cell.glyph}")
        parts.append("\033[0m")
        out.append("".join(parts))
    return "\n".join(out)


def default_filename() -> str:
    return f"DIAGNOSIS_{int(time.time() * 1000)}.png"


def save_surface(surface: Image.Image, path: str | Path | None = None, directory: str | Path = ".") -> Path:
    """Write a rendered surface as PNG and return where it went."""
    path = Path(directory) / default_filename() if path is None else Path(path)
    surface.save(path, format="PNG")
    logger.info("Saved %dx%d image to %s", surface.width, surface.height, path)
    return path


def save_text(grid: GlyphGrid, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(grid_to_text(grid) + "\n", encoding="utf-8")
    logger.info("Saved %dx%d text grid to %s", grid.width, grid.height, path)
    return path
