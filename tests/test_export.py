import re

from conftest import make_grid
from PIL import Image

from asciicanvas.engine import GlyphCell, GlyphGrid
from asciicanvas.export import grid_to_ansi, grid_to_text, save_surface, save_text


def test_grid_to_text():
    assert grid_to_text(make_grid(["@#", ". "])) == "@#\n. "


def test_grid_to_ansi_uses_cell_colours():
    grid = GlyphGrid(
        rows=[[GlyphCell("@", (255, 0, 0)), GlyphCell(".", (1, 2, 3))]],
        width=2,
        height=1,
    )
    assert grid_to_ansi(grid) == "\033[38;2;255;0;0m@\033[38;2;1;2;3m.\033[0m"


def test_grid_to_ansi_resets_every_row():
    result = grid_to_ansi(make_grid(["@@", "@@", "@@"]))
    lines = result.split("\n")
    assert len(lines) == 3
    assert all(line.endswith("\033[0m") for line in lines)


def test_save_surface_explicit_path(tmp_path):
    surface = Image.new("RGB", (5, 6), (1, 2, 3))
    path = save_surface(surface, tmp_path / "out.png")
    assert path == tmp_path / "out.png"
    with Image.open(path) as img:
        assert img.format == "PNG"
        assert img.size == (5, 6)
        assert img.convert("RGB").getpixel((0, 0)) == (1, 2, 3)


def test_save_surface_default_name(tmp_path):
    path = save_surface(Image.new("RGB", (2, 2)), directory=tmp_path)
    assert path.parent == tmp_path
    assert re.fullmatch(r"DIAGNOSIS_\d+\.png", path.name)
    assert path.exists()


def test_save_text(tmp_path):
    path = save_text(make_grid(["█▓", "░ "]), tmp_path / "out.txt")
    assert path.read_text(encoding="utf-8") == "█▓\n░ \n"
