from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol

from asciicanvas.model import Glyph, PixelBuffer, ScanResult
from asciicanvas.sampling import scan


class Surface(Protocol):
    def clear(self) -> None:
        """Remove everything painted so far."""
        ...

    def set_fill(self, colour: tuple[int, int, int]) -> None:
        """Set the colour used by subsequent fill_text calls."""
        ...

    def fill_text(self, symbol: str, x: int, y: int) -> None:
        """Paint a symbol with its cell's top-left corner at (x, y) in source pixels."""
        ...


def render(buffer: PixelBuffer, stride: int) -> tuple[tuple[Glyph, ...], str]:
    """Scan once and return (glyphs to draw, text to export)."""
    result = scan(buffer, stride)
    return result.glyphs, result.text


def paint(surface: Surface, glyphs: Iterable[Glyph]) -> None:
    surface.clear()
    for glyph in glyphs:
        glyph.draw(surface)


@dataclass
class Renderer:
    """Draws a buffer onto a surface and exports the same scan as text.

    Holds no scan state: each call scans afresh for the stride it is given.
    """

    buffer: PixelBuffer
    surface: Surface

    def draw(self, stride: int) -> ScanResult:
        result = scan(self.buffer, stride)
        paint(self.surface, result.glyphs)
        return result

    def to_text(self, stride: int) -> str:
        return scan(self.buffer, stride).text
