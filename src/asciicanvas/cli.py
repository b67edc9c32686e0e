import argparse
import logging
import sys

from asciicanvas.charsets import CUSTOM, PALETTES, resolve_palette
from asciicanvas.converter import DEFAULT_COLUMNS, DEFAULT_CONTRAST, ConversionParameters, convert, load_image
from asciicanvas.engine import ColorMode
from asciicanvas.errors import AsciiCanvasError
from asciicanvas.export import grid_to_ansi, grid_to_text, save_surface, save_text
from asciicanvas.rasterizer import Rasterizer

DEFAULT_PALETTE = "detailed"
DEFAULT_MODE = ColorMode.MONO


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an image as text glyphs")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-s", "--size", type=int, default=DEFAULT_COLUMNS, help=f"Output width in columns (default: {DEFAULT_COLUMNS})"
    )
    parser.add_argument(
        "-p",
        "--palette",
        default=DEFAULT_PALETTE,
        choices=sorted(PALETTES) + [CUSTOM],
        help=f"Glyph palette to use (default: {DEFAULT_PALETTE})",
    )
    parser.add_argument("--chars", default="", help="Glyphs for the custom palette, densest first")
    parser.add_argument(
        "-k",
        "--contrast",
        type=float,
        default=DEFAULT_CONTRAST,
        help=f"Contrast around mid-grey (default: {DEFAULT_CONTRAST}). Values above 1 push tones to the extremes.",
    )
    parser.add_argument(
        "-m",
        "--mode",
        default=DEFAULT_MODE.value,
        choices=[m.value for m in ColorMode],
        help=f"Colour mode for the rendered image (default: {DEFAULT_MODE.value})",
    )
    parser.add_argument("-o", "--output", default=None, help="Write the rendered PNG to this path")
    parser.add_argument("-t", "--text", default=None, help="Write the glyph text to this path")
    parser.add_argument("-c", "--colour", action="store_true", default=False, help="Enable truecolor ANSI output")
    parser.add_argument("--font", default=None, help="Monospace TrueType font for the rendered PNG")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log debug output")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        palette = resolve_palette(args.palette, args.chars)
        image = load_image(args.image)
        grid = convert(image, ConversionParameters(columns=args.size, palette=palette, contrast=args.contrast))
        if args.output:
            surface = Rasterizer(font_path=args.font).render(grid, ColorMode(args.mode))
            save_surface(surface, args.output)
        if args.text:
            save_text(grid, args.text)
    except (AsciiCanvasError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not (args.output or args.text):
        print(grid_to_ansi(grid) if args.colour else grid_to_text(grid))


if __name__ == "__main__":
    main()
