"""
Exceptions raised by xsdkit.

Extraction of decimals and registry lookups never raise; these types cover
the strict parsers, configuration and document binding.
"""


class XsdKitError(Exception):
    """Base class for all xsdkit errors."""


class XmlBindingError(XsdKitError, ValueError):
    """Document does not match the bound model, or is not well-formed XML."""


class DateTimeParseError(XsdKitError, ValueError):
    """Timestamp text matches none of the accepted layouts."""

    def __init__(self, text: str, reason: str = ""):
        self.text = text
        message = f"cannot parse timestamp {text!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ConfigurationError(XsdKitError, ValueError):
    """Malformed configuration value."""
