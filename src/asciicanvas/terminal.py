import os
import sys

DEFAULT_COLUMNS = 80


def get_terminal_columns() -> int:
    """Width of the terminal in characters, or DEFAULT_COLUMNS if not a tty."""
    if not sys.stdout.isatty():
        return DEFAULT_COLUMNS
    return os.get_terminal_size().columns


def stride_for_columns(width: int, columns: int) -> int:
    """Smallest stride that fits a `width`-pixel image into `columns` characters."""
    return max(1, -(-width // max(1, columns)))
