"""
xsdkit: XSD-style scalar codecs and prefix-aware XML attributes.

- DecimalCodec: exact decimals from free-form numeric text
- PrefixRegistry / PrefixedAttribute: `prefix:local` attribute names
- DecimalValue / DateTimeValue: text codecs for bound documents
- XmlCodec: binds pydantic models to XML and JSON
"""

from xsdkit.binding import XmlAnyAttr, XmlAttr, XmlCodec, XmlElement, XmlModel, XmlText
from xsdkit.config import CodecSettings
from xsdkit.core.domain import (
    XMLNS,
    DateTimeValue,
    DecimalValue,
    PrefixedAttribute,
    QName,
    RawAttribute,
    parse_datetime,
)
from xsdkit.core.math import extract_decimal, format_decimal
from xsdkit.core.namespaces import PrefixRegistry, default_registry
from xsdkit.exceptions import (
    ConfigurationError,
    DateTimeParseError,
    XmlBindingError,
    XsdKitError,
)

__version__ = "0.1.0"

__all__ = [
    # Decimal codec
    "extract_decimal",
    "format_decimal",
    # Namespaces
    "XMLNS",
    "PrefixRegistry",
    "default_registry",
    "PrefixedAttribute",
    "QName",
    "RawAttribute",
    # Scalars
    "DecimalValue",
    "DateTimeValue",
    "parse_datetime",
    # Binding
    "XmlCodec",
    "XmlModel",
    "XmlElement",
    "XmlAttr",
    "XmlAnyAttr",
    "XmlText",
    "CodecSettings",
    # Errors
    "XsdKitError",
    "XmlBindingError",
    "DateTimeParseError",
    "ConfigurationError",
]
