import logging

from PIL import Image

from asciicanvas.converter import fit_image, format_colour, image_to_ascii, load_image
from asciicanvas.model import PixelBuffer
from asciicanvas.sampling import scan
from conftest import grey_buffer, make_buffer


def test_fit_image_scales_down_keeping_aspect():
    image = fit_image(Image.new("RGB", (1600, 900)))
    assert image.size == (800, 450)


def test_fit_image_limited_by_height():
    image = fit_image(Image.new("RGB", (1000, 1200)))
    assert image.size == (500, 600)


def test_fit_image_never_scales_up():
    image = Image.new("RGB", (40, 30))
    assert fit_image(image) is image


def test_load_image_from_path(tmp_path):
    path = tmp_path / "in.png"
    Image.new("RGB", (12, 8), (255, 255, 255)).save(path)
    buffer = load_image(path)
    assert isinstance(buffer, PixelBuffer)
    assert (buffer.width, buffer.height) == (12, 8)
    assert buffer.pixels[0, 0].tolist() == [255, 255, 255, 255]


def test_load_image_keeps_transparency():
    buffer = load_image(Image.new("RGBA", (4, 4), (255, 255, 255, 0)))
    assert buffer.pixels[:, :, 3].max() == 0


def test_load_image_custom_limits():
    buffer = load_image(Image.new("L", (100, 50)), max_width=10, max_height=10)
    assert (buffer.width, buffer.height) == (10, 5)


def test_image_to_ascii_white():
    assert image_to_ascii(Image.new("RGB", (4, 4), (255, 255, 255)), stride=1) == "@@@@\n@@@@\n@@@@\n@@@@"


def test_image_to_ascii_accepts_buffer():
    assert image_to_ascii(grey_buffer([[255, 30], [10, 150]]), stride=1) == "@W\n _"


def test_image_to_ascii_clamps_stride(caplog):
    buffer = make_buffer(100, 100)
    with caplog.at_level(logging.INFO, logger="asciicanvas"):
        text = image_to_ascii(buffer, stride=1, max_cells=100)
    assert text == "\n".join(["@" * 10] * 10)
    assert "using 10" in caplog.text


def test_image_to_ascii_colour():
    text = image_to_ascii(make_buffer(2, 1, rgb=(255, 0, 0)), stride=1, colour=True)
    # (255 + 0 + 0) / 3 = 85 -> "/"
    assert text == "\033[38;2;255;0;0m/\033[38;2;255;0;0m/\033[0m"


def test_format_colour_leaves_blanks_plain():
    result = scan(grey_buffer([[255, 0], [0, 100]]), 1)
    lines = format_colour(result).split("\n")
    assert lines[0] == "\033[38;2;255;255;255m@ \033[0m"
    assert lines[1] == " \033[38;2;100;100;100m$\033[0m"


def test_colour_false_has_no_escapes():
    text = image_to_ascii(make_buffer(2, 2, rgb=(255, 0, 0)), stride=1, colour=False)
    assert "\033" not in text
