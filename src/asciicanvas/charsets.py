from asciicanvas.errors import InvalidParameters

# All palettes run from visually densest (index 0) to sparsest (last index)
SIMPLE = "@%#*+=-:. "

DETAILED = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "

# Full block and the three shade blocks: U+2588, U+2593, U+2592, U+2591
BLOCK = "█▓▒░ "

BINARY = "01 "

# Substituted when a custom palette is empty
FALLBACK = "@ "

PALETTES = {
    "simple": SIMPLE,
    "detailed": DETAILED,
    "block": BLOCK,
    "binary": BINARY,
}

CUSTOM = "custom"


def resolve_palette(name: str, custom: str = "") -> str:
    """Return the glyph palette for a built-in name, or the custom string for ``"custom"``."""
    if name == CUSTOM:
        return custom or FALLBACK
    try:
        return PALETTES[name]
    except KeyError:
        raise InvalidParameters(f"Unknown palette: {name!r}") from None
