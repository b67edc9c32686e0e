import functools
import logging
import os
import subprocess
from pathlib import Path

from PIL import ImageFont

from asciicanvas.errors import SurfaceUnavailable

logger = logging.getLogger(__name__)

FONT_ENV_VAR = "ASCIICANVAS_FONT"

FC_MATCH_TIMEOUT = 5.0

FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
]


@functools.lru_cache(maxsize=None)
def _match_monospace() -> str | None:
    """Ask fontconfig for the system monospace font, once per process."""
    try:
        result = subprocess.run(
            ["fc-match", "-f", "%{file}", "monospace"],
            capture_output=True,
            text=True,
            timeout=FC_MATCH_TIMEOUT,
        )
    except FileNotFoundError:
        return None
    except subprocess.TimeoutExpired:
        logger.warning("fc-match did not answer within %.0fs", FC_MATCH_TIMEOUT)
        return None
    if result.returncode == 0 and result.stdout.strip():
        return result.stdout.strip()
    return None


def find_monospace_font(font_path: str | Path | None = None) -> str | None:
    """Locate a monospace TrueType font.

    Tries the explicit path, then $ASCIICANVAS_FONT, the well-known
    DejaVu/Liberation locations and finally fc-match.
    """
    if font_path is not None:
        return str(font_path)
    env_path = os.environ.get(FONT_ENV_VAR)
    if env_path:
        return env_path
    for path in FONT_CANDIDATES:
        if os.path.exists(path):
            return path
    return _match_monospace()


def load_font(font_path: str | Path | None, font_size: int):
    """Load the glyph font, falling back to Pillow's bundled default."""
    path = find_monospace_font(font_path)
    if path is not None:
        try:
            font = ImageFont.truetype(path, font_size)
            logger.debug("Using font %s at %dpx", path, font_size)
            return font
        except OSError as e:
            if font_path is not None:
                raise SurfaceUnavailable(f"Could not load font {path}: {e}") from e
            logger.warning("Could not load font %s (%s), using Pillow default", path, e)
    else:
        logger.warning("No monospace font found, using Pillow default")
    try:
        return ImageFont.load_default(size=font_size)
    except OSError as e:
        raise SurfaceUnavailable(f"No usable font: {e}") from e
