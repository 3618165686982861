"""
Scalar Adapters: DecimalValue and DateTimeValue

XSD-style scalar value types for bound documents. Both implement the text
codec capability (from_text/to_text) and plug into pydantic as plain
strings in JSON form.

DecimalValue: exact mantissa * 10**-scale, parsed with the locale-agnostic
DecimalCodec, so "$1,800.25" and "1.800,25 EUR" give the same value.

DateTimeValue: ISO-8601-like timestamp in three accepted input shapes,
written back as UTC with millisecond precision. Unparseable or empty text
gives the zero sentinel, never an error.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Final

from pydantic_core import core_schema

from xsdkit.core.domain.codecs import ValueObject, text_codec_schema
from xsdkit.core.math.decimal_codec import AUTODETECT_PLACES, extract_decimal, format_decimal
from xsdkit.exceptions import DateTimeParseError


logger = logging.getLogger(__name__)


# =============================================================================
# DECIMAL
# =============================================================================


class DecimalValue(ValueObject):
    """
    Exact decimal value: mantissa * 10**-scale.

    Unsigned, as in currency amounts.
    """

    __slots__ = ("mantissa", "scale")

    mantissa: int
    scale: int

    def __init__(self, mantissa: int = 0, scale: int = 0) -> None:
        if mantissa < 0:
            raise ValueError(f"mantissa cannot be negative: {mantissa}")
        if scale < 0:
            raise ValueError(f"scale cannot be negative: {scale}")
        self._init(mantissa=mantissa, scale=scale)

    @classmethod
    def from_text(cls, text: str) -> "DecimalValue":
        _, mantissa, scale = extract_decimal(text, AUTODETECT_PLACES)
        return cls(mantissa=mantissa, scale=scale)

    def to_text(self) -> str:
        return format_decimal(self.mantissa, self.scale)

    @property
    def is_zero(self) -> bool:
        return self.mantissa == 0

    def to_decimal(self) -> Decimal:
        """Exact decimal.Decimal for arithmetic"""
        return Decimal(self.mantissa).scaleb(-self.scale)

    def __str__(self) -> str:
        return self.to_text()

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> core_schema.CoreSchema:
        return text_codec_schema(cls)


# =============================================================================
# DATETIME
# =============================================================================

# Zero sentinel for empty or unparseable timestamps
ZERO_DATETIME: Final[datetime] = datetime(1, 1, 1, tzinfo=timezone.utc)
# latest instant the UTC output can hold
MAX_DATETIME: Final[datetime] = datetime.max.replace(tzinfo=timezone.utc)

# Input layouts, fractional seconds optional
LAYOUT_UTC: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"
LAYOUT_TZ: Final[str] = "%Y-%m-%dT%H:%M:%S.%f%z"
LAYOUT_LOCAL: Final[str] = "%Y-%m-%dT%H:%M:%S.%f"

# Output layout is LAYOUT_UTC with milliseconds; years below 1000 are
# zero-padded, which strftime does not guarantee
OUTPUT_FORMAT: Final[str] = "{:04d}-{:02d}-{:02d}T{:02d}:{:02d}:{:02d}.{:03d}Z"

# len("YYYY-MM-DDTHH:MM:SS"): a sign at or past this index starts an offset
DATETIME_LEN: Final[int] = 19

_FRACTION_RE = re.compile(r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d{1,9}))?(.*)$")


def tz_offset_pos(timestamp: str) -> int:
    """Index of the timezone offset sign, or -1 when there is none."""
    pos = timestamp.rfind("+")
    if pos >= DATETIME_LEN:
        return pos
    pos = timestamp.rfind("-")
    if pos >= DATETIME_LEN:
        return pos
    return -1


def has_tz_offset(timestamp: str) -> bool:
    return tz_offset_pos(timestamp) > -1


def normalize_tz_offset(timestamp: str) -> str:
    """Drop the colon from a "+01:00" style offset."""
    pos = tz_offset_pos(timestamp)
    if pos > -1:
        return timestamp[:pos] + timestamp[pos:].replace(":", "")
    return timestamp


def _with_microseconds(timestamp: str) -> str:
    # strptime's %f takes at most 6 digits and is not optional
    match = _FRACTION_RE.match(timestamp)
    if match is None:
        return timestamp
    base, fraction, rest = match.groups()
    fraction = (fraction or "")[:6].ljust(6, "0")
    return f"{base}.{fraction}{rest}"


def parse_datetime(timestamp: str) -> datetime:
    """
    Parse an ISO-8601-like timestamp.

    Layout is picked by inspection: a "Z" suffix means UTC, a sign at or
    after index 19 means an explicit offset, anything else is read as a
    naive UTC time.

    Args:
        timestamp: e.g. "2020-01-02T03:04:05.678Z",
            "2020-01-02T03:04:05+01:00", "2020-01-02T03:04:05"

    Returns:
        Timezone-aware datetime

    Raises:
        DateTimeParseError: If the text matches no layout
    """
    try:
        if timestamp.endswith("Z"):
            parsed = datetime.strptime(_with_microseconds(timestamp), LAYOUT_UTC)
            return parsed.replace(tzinfo=timezone.utc)
        if has_tz_offset(timestamp):
            return datetime.strptime(_with_microseconds(normalize_tz_offset(timestamp)), LAYOUT_TZ)
        parsed = datetime.strptime(_with_microseconds(timestamp), LAYOUT_LOCAL)
        return parsed.replace(tzinfo=timezone.utc)
    except ValueError as e:
        raise DateTimeParseError(timestamp, str(e)) from e


class DateTimeValue(ValueObject):
    """
    Timestamp wrapper with best-effort parsing.

    Empty and unparseable text both give the zero sentinel; use
    parse_datetime directly to tell them apart.
    """

    __slots__ = ("moment",)

    moment: datetime

    def __init__(self, moment: datetime = ZERO_DATETIME) -> None:
        self._init(moment=moment)

    @classmethod
    def from_text(cls, text: str) -> "DateTimeValue":
        if not text:
            return cls()
        try:
            return cls(moment=parse_datetime(text))
        except DateTimeParseError as e:
            logger.debug("timestamp reset to zero: %s", e)
            return cls()

    def to_text(self) -> str:
        moment = self.moment
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        else:
            try:
                moment = moment.astimezone(timezone.utc)
            except OverflowError:
                # offset pushes the instant past year 1 or 9999: clamp
                moment = ZERO_DATETIME if moment.utcoffset() > timedelta(0) else MAX_DATETIME
        return OUTPUT_FORMAT.format(
            moment.year,
            moment.month,
            moment.day,
            moment.hour,
            moment.minute,
            moment.second,
            moment.microsecond // 1000,
        )

    @property
    def is_zero(self) -> bool:
        return self.moment == ZERO_DATETIME

    def __str__(self) -> str:
        return self.to_text()

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> core_schema.CoreSchema:
        return text_codec_schema(cls)
