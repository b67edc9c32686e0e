import itertools
import logging
from dataclasses import dataclass

from PIL import Image

from asciicanvas.converter import ConversionParameters, convert
from asciicanvas.engine import ColorMode, GlyphGrid
from asciicanvas.rasterizer import Rasterizer

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    grid: GlyphGrid
    surface: Image.Image
    token: int


class RenderSession:
    """Tracks which of several conversion requests is the latest.

    Work is never cancelled mid-flight. Each request takes a token from
    ``begin()``; a finished result is only kept by ``commit()`` if no newer
    token has been handed out since. Failures leave ``latest`` untouched.
    """

    def __init__(self, rasterizer: Rasterizer | None = None):
        self.rasterizer = rasterizer or Rasterizer()
        self.latest: RenderResult | None = None
        self._counter = itertools.count(1)
        self._current = 0

    def begin(self) -> int:
        self._current = next(self._counter)
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current

    def run(
        self,
        image: Image.Image,
        params: ConversionParameters,
        mode: ColorMode,
        token: int | None = None,
    ) -> RenderResult:
        if token is None:
            token = self.begin()
        grid = convert(image, params)
        surface = self.rasterizer.render(grid, mode)
        return RenderResult(grid=grid, surface=surface, token=token)

    def commit(self, result: RenderResult) -> bool:
        if not self.is_current(result.token):
            logger.debug("Discarding stale result %d (current is %d)", result.token, self._current)
            return False
        self.latest = result
        return True
