"""Fixed-pitch text layout helpers for 58mm receipts.

The printer font renders Hangul syllables two cells wide and everything
else one cell wide, so padding has to be computed on visual width rather
than on ``len()``.
"""
from decimal import Decimal, ROUND_HALF_UP

RECEIPT_WIDTH = 32  # Normal text, 58mm paper
QUAD_WIDTH = 16     # Double width + double height

CURRENCY_SUFFIX = "원"

HANGUL_FIRST = "가"
HANGUL_LAST = "힣"

_FRACTION = Decimal("0.001")


def is_wide(char: str) -> bool:
    """Return True if the character occupies two print cells."""
    return HANGUL_FIRST <= char <= HANGUL_LAST


def text_width(text: str) -> int:
    """Visual width of text in print cells."""
    return sum(2 if is_wide(char) else 1 for char in text)


def align(text: str, mode: str = "left", width: int = RECEIPT_WIDTH) -> str:
    """Pad text with spaces to fill ``width`` cells.

    Text that already fills the width is returned as-is; it is never
    truncated here.
    """
    actual = text_width(text)
    if actual >= width:
        return text

    padding = width - actual
    if mode == "center":
        left = padding // 2
        return " " * left + text + " " * (padding - left)
    elif mode == "right":
        return " " * padding + text
    return text + " " * padding


def format_number(value) -> str:
    """Format a number with thousands separators.

    Integral values print without a fraction. Anything else keeps at most
    three fraction digits, rounded half-up, trailing zeros dropped.
    """
    quantized = Decimal(str(value)).quantize(_FRACTION, rounding=ROUND_HALF_UP)
    text = f"{quantized:,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_amount(amount) -> str:
    """Format a currency amount, e.g. 15900 -> '15,900원'."""
    return format_number(amount) + CURRENCY_SUFFIX


def format_price(amount, width: int = 15) -> str:
    """Right-align a formatted amount in ``width`` characters."""
    return format_amount(amount).rjust(width)


def row(label: str, value: str, width: int = RECEIPT_WIDTH) -> str:
    """Put label on the left and value on the right of a single line."""
    padding = max(0, width - text_width(label) - text_width(value))
    return label + " " * padding + value
