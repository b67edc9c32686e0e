class AsciiCanvasError(Exception):
    """Base class for conversion and rendering failures."""


class InvalidParameters(AsciiCanvasError, ValueError):
    """Column count, palette or contrast cannot be used for a conversion."""


class ImageDecodeError(AsciiCanvasError):
    """The source image could not be read or decoded."""


class SurfaceUnavailable(AsciiCanvasError):
    """No drawing surface or font could be obtained for rasterizing."""
