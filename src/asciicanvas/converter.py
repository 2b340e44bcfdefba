import logging
from pathlib import Path

from PIL import Image

from asciicanvas.model import PixelBuffer, ScanResult
from asciicanvas.sampling import MAX_CELLS, clamp_stride, scan

logger = logging.getLogger(__name__)

MAX_WIDTH = 800
MAX_HEIGHT = 600
DEFAULT_STRIDE = 10


def open_image(image: Image.Image | str | Path) -> Image.Image:
    if not isinstance(image, Image.Image):
        image = Image.open(image)
    return image


def fit_image(image: Image.Image, max_width: int = MAX_WIDTH, max_height: int = MAX_HEIGHT) -> Image.Image:
    """Scale an image down to fit within max_width x max_height. Never scales up."""
    ratio = min(max_width / image.width, max_height / image.height, 1)
    if ratio == 1:
        return image
    size = (max(1, round(image.width * ratio)), max(1, round(image.height * ratio)))
    logger.debug("Scaling %dx%d image to %dx%d", image.width, image.height, *size)
    return image.resize(size, Image.LANCZOS)


def load_image(
    image: Image.Image | str | Path,
    max_width: int = MAX_WIDTH,
    max_height: int = MAX_HEIGHT,
) -> PixelBuffer:
    """Decode an image, fit it to the display size, and wrap its RGBA pixels."""
    image = fit_image(open_image(image).convert("RGBA"), max_width, max_height)
    return PixelBuffer.from_image(image)


def format_colour(result: ScanResult) -> str:
    """Wrap each glyph's text cell in an ANSI truecolor foreground escape.

    Glyphs are in row-major order and line up one-to-one with the non-space
    cells of the text rows, so they are consumed in step with the text.
    """
    glyphs = iter(result.glyphs)
    out = []
    for line in result.rows:
        parts = []
        for char in line:
            if char == " ":
                parts.append(char)
                continue
            r, g, b = next(glyphs).colour
            parts.append(f"\033[38;2;{r};{g};{b}m{char}")
        parts.append("\033[0m")
        out.append("".join(parts))
    return "\n".join(out)


def image_to_ascii(
    image: Image.Image | str | Path | PixelBuffer,
    stride: int = DEFAULT_STRIDE,
    max_cells: int = MAX_CELLS,
    colour: bool = False,
) -> str:
    buffer = image if isinstance(image, PixelBuffer) else load_image(image)

    clamped = clamp_stride(buffer.width, buffer.height, stride, max_cells)
    if clamped != stride:
        logger.info("Stride %d exceeds %d cells, using %d", stride, max_cells, clamped)

    result = scan(buffer, clamped)
    if colour:
        return format_colour(result)
    return result.text
