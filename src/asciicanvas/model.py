from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image

if TYPE_CHECKING:
    from asciicanvas.engine import Surface

CHANNELS = 4


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Read-only view of RGBA pixels, shape (height, width, 4), uint8."""

    pixels: np.ndarray

    def __post_init__(self):
        pixels = np.asarray(self.pixels)
        if pixels.ndim != 3 or pixels.shape[2] != CHANNELS:
            raise ValueError(f"Expected an (height, width, 4) RGBA array, got shape {pixels.shape}")
        if pixels.shape[0] <= 0 or pixels.shape[1] <= 0:
            raise ValueError(f"Pixel buffer must be non-empty, got {pixels.shape[1]}x{pixels.shape[0]}")
        if pixels.dtype != np.uint8:
            if pixels.min() < 0 or pixels.max() > 255:
                raise ValueError("Pixel values must be in 0-255")
            pixels = pixels.astype(np.uint8)
        # Own view so the caller's array keeps its own writeable flag
        view = pixels.view()
        view.flags.writeable = False
        object.__setattr__(self, "pixels", view)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        return cls(np.asarray(image.convert("RGBA"), dtype=np.uint8))

    @classmethod
    def from_bytes(cls, data: bytes, width: int, height: int) -> "PixelBuffer":
        """Wrap row-major RGBA bytes, 4 bytes per pixel."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Pixel buffer must be non-empty, got {width}x{height}")
        expected = width * height * CHANNELS
        if len(data) != expected:
            raise ValueError(f"Expected {expected} bytes for {width}x{height} RGBA, got {len(data)}")
        return cls(np.frombuffer(data, dtype=np.uint8).reshape(height, width, CHANNELS))


@dataclass(frozen=True)
class Glyph:
    x: int
    y: int
    symbol: str
    colour: tuple[int, int, int]

    @property
    def css(self) -> str:
        r, g, b = self.colour
        return f"rgb({r},{g},{b})"

    def draw(self, surface: Surface) -> None:
        surface.set_fill(self.colour)
        surface.fill_text(self.symbol, self.x, self.y)


@dataclass(frozen=True)
class ScanResult:
    glyphs: tuple[Glyph, ...] = ()
    rows: tuple[str, ...] = ()  # one string per sampled row

    @property
    def text(self) -> str:
        return "\n".join(self.rows)

    @property
    def columns(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def cell_count(self) -> int:
        return len(self.rows) * self.columns
