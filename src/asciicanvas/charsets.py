import numpy as np

# Samples at or below this alpha are blank regardless of colour
ALPHA_THRESHOLD = 128

# (inclusive lower bound, symbol), brightest first; below the last bound is blank
SYMBOL_TABLE = [
    (250, "@"),
    (240, "*"),
    (220, "+"),
    (200, "#"),
    (180, "&"),
    (160, "%"),
    (140, "_"),
    (120, ":"),
    (100, "$"),
    (80, "/"),
    (60, "-"),
    (40, "X"),
    (20, "W"),
]

# Ascending bounds for searchsorted. Index 0 of SYMBOLS is the blank slot.
BOUNDS = np.array([bound for bound, _ in reversed(SYMBOL_TABLE)], dtype=np.float64)
SYMBOLS = [""] + [symbol for _, symbol in reversed(SYMBOL_TABLE)]
BLANK = 0


def symbol_index(brightness):
    """Index into SYMBOLS for a brightness value or array of values.

    Counts how many bounds are <= the value, so the highest matching bound wins.
    """
    return np.searchsorted(BOUNDS, brightness, side="right")


def to_symbol(brightness: float) -> str:
    """Map one average brightness (0-255) to its symbol, or "" for blank."""
    return SYMBOLS[int(symbol_index(brightness))]
