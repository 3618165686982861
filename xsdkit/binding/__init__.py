"""
Document binding: pydantic models <-> XML.
"""

from xsdkit.binding.codec import XmlCodec
from xsdkit.binding.fields import XmlAnyAttr, XmlAttr, XmlElement, XmlModel, XmlText

__all__ = [
    "XmlCodec",
    "XmlModel",
    "XmlElement",
    "XmlAttr",
    "XmlAnyAttr",
    "XmlText",
]
