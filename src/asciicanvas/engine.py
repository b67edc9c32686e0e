from __future__ import annotations

import enum
from dataclasses import dataclass

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class GlyphCell:
    glyph: str
    color: RGB  # sampled source colour, independent of the glyph


@dataclass
class GlyphGrid:
    rows: list[list[GlyphCell]]  # row-major, every row holds `width` cells
    width: int
    height: int

    def lines(self) -> list[str]:
        return ["".join(cell.glyph for cell in row) for row in self.rows]

    def __iter__(self):
        return iter(self.rows)


class ColorMode(enum.Enum):
    MONO = "mono"
    VINTAGE_GREEN = "vintage-green"
    CYBER_PINK = "cyber-pink"
    ORIGINAL = "original"
