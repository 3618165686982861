"""
Numeric text codecs.
"""

from xsdkit.core.math.decimal_codec import (
    AUTODETECT_PLACES,
    DecimalExtraction,
    ScanState,
    extract_decimal,
    format_decimal,
)

__all__ = [
    "AUTODETECT_PLACES",
    "DecimalExtraction",
    "ScanState",
    "extract_decimal",
    "format_decimal",
]
