"""
DecimalCodec: Locale-Agnostic Decimal Extraction

Turns free-form numeric text ("$1,800.25", "1.800,25 EUR", "180,025.") into
an exact mantissa/scale pair and formats the pair back.

Separator policy:
- Only '.' and ',' are separators, every other non-digit is dropped
- The separator closest to the end of the text is the decimal point,
  unless the fractional digit budget (max_places) ran out first
- All other separators are thousands separators and are dropped

Scanning runs backward over the text so the decision needs no lookahead.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, List


# =============================================================================
# CONSTANTS
# =============================================================================

# max_places value that lets the first separator from the right win
AUTODETECT_PLACES: Final[int] = -1

DECIMAL_POINT: Final[str] = "."
SEPARATORS: Final[frozenset] = frozenset(".,")
DIGITS: Final[str] = "0123456789"


# =============================================================================
# TYPES
# =============================================================================


class ScanState(Enum):
    """State of the backward scan"""

    OUTSIDE_FRACTION = "outside_fraction"
    INSIDE_FRACTION = "inside_fraction"


@dataclass(frozen=True)
class DecimalExtraction:
    """
    Result of extract_decimal.

    Unpacks as (display, mantissa, scale) so callers can write
    `text, mantissa, scale = extract_decimal(s)`.
    """

    display: str
    mantissa: int
    scale: int

    def __iter__(self):
        return iter((self.display, self.mantissa, self.scale))


# =============================================================================
# EXTRACTION
# =============================================================================


def extract_decimal(text: str, max_places: int = AUTODETECT_PLACES) -> DecimalExtraction:
    """
    Extract a decimal number from arbitrary text.

    Args:
        text: Any text with digits and '.'/',' separators
        max_places: Maximum number of fractional digits to consider,
            any negative value (AUTODETECT_PLACES) treats every digit up to the first
            right-hand separator as fractional

    Returns:
        DecimalExtraction(display, mantissa, scale) where the value is
        mantissa * 10**-scale and display is the canonical string
        ('.' as the decimal point, no thousands separators)

    Examples:
        >>> tuple(extract_decimal("$1,800.25"))
        ('1800.25', 180025, 2)
        >>> tuple(extract_decimal("1.800,25 EUR", 1))
        ('180025', 180025, 0)
    """
    state = ScanState.OUTSIDE_FRACTION
    out: List[str] = []  # reversed output
    mantissa = 0
    pow10 = 1
    scale = 0

    for char in reversed(text):
        if char in DIGITS:
            if not out:
                # first digit from the right, a fraction may start here
                state = ScanState.INSIDE_FRACTION
            if max_places >= 0 and len(out) == max_places:
                state = ScanState.OUTSIDE_FRACTION
            out.append(char)
            mantissa += int(char) * pow10
            pow10 *= 10
        elif char in SEPARATORS and state is ScanState.INSIDE_FRACTION:
            out.append(DECIMAL_POINT)
            scale = len(out) - 1
            state = ScanState.OUTSIDE_FRACTION

    return DecimalExtraction("".join(reversed(out)), mantissa, scale)


# =============================================================================
# FORMATTING
# =============================================================================


def format_decimal(mantissa: int, scale: int) -> str:
    """
    Format a mantissa/scale pair as a decimal string.

    The decimal point goes right after `scale` digits counted from the least
    significant one. A zero mantissa is always "0", and no zero padding is
    added when scale exceeds the digit count.

    Args:
        mantissa: Non-negative integer digits
        scale: Non-negative power of ten divisor

    Returns:
        Decimal string, e.g. format_decimal(180025, 2) == "1800.25"
    """
    if mantissa < 0 or scale < 0:
        raise ValueError(f"mantissa and scale must be >= 0, got {mantissa}, {scale}")
    if mantissa == 0:
        return "0"

    out: List[str] = []
    num = mantissa
    while num > 0:
        num, digit = divmod(num, 10)
        out.append(DIGITS[digit])
        if len(out) == scale:
            out.append(DECIMAL_POINT)
    return "".join(reversed(out))
