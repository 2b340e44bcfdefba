import logging
import math

import numpy as np

from asciicanvas.charsets import ALPHA_THRESHOLD, BLANK, SYMBOLS, symbol_index
from asciicanvas.model import Glyph, PixelBuffer, ScanResult

logger = logging.getLogger(__name__)

MAX_CELLS = 100_000

# Text cell for each symbol index; blank becomes a space
_TEXT_CELLS = np.array([symbol or " " for symbol in SYMBOLS])


def scan(buffer: PixelBuffer, stride: int) -> ScanResult:
    """Sample every `stride`-th pixel and classify it into glyphs and text rows.

    Samples the top-left pixel of each stride x stride cell. Samples with alpha
    at or below ALPHA_THRESHOLD, or brightness below the lowest symbol bound,
    produce a space and no glyph. Glyphs and rows come from the same index grid.
    """
    sampled = buffer.pixels[::stride, ::stride]  # (rows, cols, 4)
    rgb = sampled[:, :, :3].astype(np.float64)
    brightness = rgb.sum(axis=2) / 3.0

    indices = symbol_index(brightness)
    indices[sampled[:, :, 3] <= ALPHA_THRESHOLD] = BLANK

    rows = tuple("".join(row) for row in _TEXT_CELLS[indices])

    # nonzero walks row-major, which is the glyph order
    glyphs = tuple(
        Glyph(
            x=int(c) * stride,
            y=int(r) * stride,
            symbol=SYMBOLS[indices[r, c]],
            colour=(int(sampled[r, c, 0]), int(sampled[r, c, 1]), int(sampled[r, c, 2])),
        )
        for r, c in zip(*np.nonzero(indices))
    )
    logger.debug(
        "Scanned %dx%d at stride %d: %d cells, %d glyphs",
        buffer.width,
        buffer.height,
        stride,
        indices.size,
        len(glyphs),
    )
    return ScanResult(glyphs=glyphs, rows=rows)


def cell_count(width: int, height: int, stride: int) -> int:
    """Number of samples a scan takes: ceil(width/stride) * ceil(height/stride)."""
    if stride <= 0:
        raise ValueError(f"Stride must be positive, got {stride}")
    if width <= 0 or height <= 0:
        raise ValueError(f"Dimensions must be positive, got {width}x{height}")
    return -(-width // stride) * -(-height // stride)


def clamp_stride(width: int, height: int, stride: int, max_cells: int = MAX_CELLS) -> int:
    """Smallest stride >= `stride` whose scan samples at most `max_cells` cells."""
    if max_cells <= 0:
        raise ValueError(f"max_cells must be positive, got {max_cells}")
    if cell_count(width, height, stride) <= max_cells:
        return stride

    # ceil(w/s) * ceil(h/s) >= w*h / s**2, so no stride below sqrt(w*h / max_cells) fits
    needed = -(-(width * height) // max_cells)
    lower = math.isqrt(needed)
    if lower * lower < needed:
        lower += 1
    clamped = max(stride, lower)
    while cell_count(width, height, clamped) > max_cells:
        clamped += 1

    logger.debug("Clamped stride %d to %d for %dx%d (max %d cells)", stride, clamped, width, height, max_cells)
    return clamped
