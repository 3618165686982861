"""
Configuration: environment readers and codec settings.
"""

from xsdkit.config.env import (
    read_bool,
    read_int,
    read_string,
    read_string_allow_empty,
    read_typed,
)
from xsdkit.config.settings import CodecSettings

__all__ = [
    "CodecSettings",
    "read_string",
    "read_string_allow_empty",
    "read_typed",
    "read_int",
    "read_bool",
]
