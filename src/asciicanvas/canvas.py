import math
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

MIN_FONT_SIZE = 6
FONT_SCALE = 1.6


def font_size_for(stride: int) -> int:
    """Font size in pixels for glyphs spaced `stride` pixels apart."""
    # Half-up rounding, not banker's
    return max(MIN_FONT_SIZE, math.floor(stride * FONT_SCALE + 0.5))


def load_font(size: int, font_path: str | Path | None = None) -> ImageFont.FreeTypeFont:
    if font_path is None:
        return ImageFont.load_default(size=size)
    return ImageFont.truetype(str(font_path), size)


class ImageSurface:
    """Pillow-backed drawing surface the size of the source image."""

    def __init__(
        self,
        width: int,
        height: int,
        font: ImageFont.FreeTypeFont | None = None,
        background: tuple[int, int, int] = (0, 0, 0),
    ):
        self.width = width
        self.height = height
        self.background = background
        self.font = font if font is not None else load_font(font_size_for(1))
        self.fill = (255, 255, 255)
        self.image = Image.new("RGB", (width, height), background)
        self._draw = ImageDraw.Draw(self.image)

    @classmethod
    def for_stride(cls, width: int, height: int, stride: int, font_path: str | Path | None = None) -> "ImageSurface":
        return cls(width, height, font=load_font(font_size_for(stride), font_path))

    def clear(self) -> None:
        self._draw.rectangle((0, 0, self.width, self.height), fill=self.background)

    def set_fill(self, colour: tuple[int, int, int]) -> None:
        self.fill = colour

    def fill_text(self, symbol: str, x: int, y: int) -> None:
        # "la" anchors at the left/ascender, i.e. the top of the text line
        self._draw.text((x, y), symbol, fill=self.fill, font=self.font, anchor="la")

    def show_image(self, image: Image.Image) -> None:
        """Replace the surface contents with an image scaled to the surface."""
        self.clear()
        self.image.paste(image.convert("RGB").resize((self.width, self.height)))

    def save(self, path: str | Path) -> None:
        self.image.save(path)
