"""
Value objects: scalar adapters and namespace-aware attributes.
"""

from xsdkit.core.domain.attributes import XMLNS, PrefixedAttribute
from xsdkit.core.domain.codecs import AttributeCodec, QName, RawAttribute, TextCodec
from xsdkit.core.domain.scalars import (
    ZERO_DATETIME,
    DateTimeValue,
    DecimalValue,
    parse_datetime,
)

__all__ = [
    # Codec capabilities
    "TextCodec",
    "AttributeCodec",
    "QName",
    "RawAttribute",
    # Attributes
    "XMLNS",
    "PrefixedAttribute",
    # Scalars
    "ZERO_DATETIME",
    "DateTimeValue",
    "DecimalValue",
    "parse_datetime",
]
