import argparse
import logging
import sys
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from asciicanvas.canvas import ImageSurface
from asciicanvas.converter import MAX_HEIGHT, MAX_WIDTH, format_colour, load_image
from asciicanvas.engine import Renderer
from asciicanvas.sampling import MAX_CELLS, clamp_stride, scan
from asciicanvas.terminal import get_terminal_columns, stride_for_columns

logger = logging.getLogger("asciicanvas")


def setup_logging(verbose: bool, log_path: str | None = None) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(logging.DEBUG if log_path else level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    handlers: list[logging.Handler] = [handler]

    if log_path:
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s"))
        handlers.append(file_handler)

    logger.handlers[:] = handlers
    logger.propagate = False


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an image as coloured ASCII art")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-s",
        "--stride",
        type=_positive_int,
        default=None,
        help="Sampling step in pixels (default: fit the terminal width)",
    )
    parser.add_argument(
        "--max-cells",
        type=_positive_int,
        default=MAX_CELLS,
        help=f"Upper bound on sampled cells; the stride is raised to stay under it (default: {MAX_CELLS})",
    )
    parser.add_argument("--max-width", type=_positive_int, default=MAX_WIDTH, help="Downscale wider images to this")
    parser.add_argument("--max-height", type=_positive_int, default=MAX_HEIGHT, help="Downscale taller images to this")
    parser.add_argument("-c", "--colour", action="store_true", default=False, help="Enable truecolor ANSI output")
    parser.add_argument("-o", "--output", default=None, help="Also paint the glyphs into this PNG file")
    parser.add_argument("-t", "--text", default=None, help="Write the plain text grid to this file instead of stdout")
    parser.add_argument("--font", default=None, help="TrueType font for --output (default: Pillow's built-in font)")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log debug messages to stderr")
    parser.add_argument("--log", default=None, help="Also write debug logs to this file")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.log)

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)

    try:
        buffer = load_image(image_path, args.max_width, args.max_height)
    except UnidentifiedImageError:
        print(f"Not an image: {image_path}", file=sys.stderr)
        sys.exit(1)

    stride = args.stride
    if stride is None:
        stride = stride_for_columns(buffer.width, get_terminal_columns())
    clamped = clamp_stride(buffer.width, buffer.height, stride, args.max_cells)
    if clamped != stride:
        logger.warning("Stride %d exceeds %d cells, using %d", stride, args.max_cells, clamped)
        stride = clamped

    if args.output:
        surface = ImageSurface.for_stride(buffer.width, buffer.height, stride, args.font)
        if stride == 1:
            # Stride 1 previews the source image itself
            surface.show_image(Image.fromarray(buffer.pixels))
            result = scan(buffer, stride)
        else:
            result = Renderer(buffer, surface).draw(stride)
        surface.save(args.output)
        logger.debug("Wrote %s", args.output)
    else:
        result = scan(buffer, stride)

    if args.text:
        Path(args.text).write_text(result.text, encoding="utf-8")
    if args.colour:
        print(format_colour(result))
    elif not args.text:
        print(result.text)
