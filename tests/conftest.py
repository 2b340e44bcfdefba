import logging
import os
import shutil
import subprocess

import numpy as np
import pytest

from asciicanvas.model import PixelBuffer

_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
]


def _find_monospace_font():
    """Find a monospace font on the system."""
    for path in _FONT_CANDIDATES:
        if os.path.exists(path):
            return path
    if shutil.which("fc-match"):
        out = subprocess.run(["fc-match", "-f", "%{file}", "monospace"], capture_output=True, text=True)
        if out.returncode == 0 and out.stdout.strip().endswith((".ttf", ".otf")):
            return out.stdout.strip()
    return None


FONT_PATH = _find_monospace_font()
needs_font = pytest.mark.skipif(FONT_PATH is None, reason="No monospace font found on system")


def make_buffer(width, height, rgb=(255, 255, 255), alpha=255):
    """Uniform RGBA buffer."""
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[:, :, :3] = rgb
    pixels[:, :, 3] = alpha
    return PixelBuffer(pixels)


def grey_buffer(values, alpha=255):
    """Buffer from a 2D list of grey levels, one pixel per entry."""
    grey = np.asarray(values, dtype=np.uint8)
    pixels = np.empty(grey.shape + (4,), dtype=np.uint8)
    pixels[:, :, 0] = grey
    pixels[:, :, 1] = grey
    pixels[:, :, 2] = grey
    pixels[:, :, 3] = alpha
    return PixelBuffer(pixels)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo handler setup done by the CLI so caplog keeps working."""
    logger = logging.getLogger("asciicanvas")
    yield
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
