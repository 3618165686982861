"""
Environment readers.

Typed readers return `(value, error)`: when the variable is set but cannot
be converted, the fallback comes back together with the conversion error so
the caller decides whether to log it, ignore it or abort.
"""

import os
from typing import Callable, Optional, Tuple, TypeVar


T = TypeVar("T")

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def read_string(key: str, fallback: str) -> str:
    """Value of `key`, or fallback when unset or empty."""
    value = os.environ.get(key)
    if value:
        return value
    return fallback


def read_string_allow_empty(key: str, fallback: str) -> str:
    """Same as read_string but an empty value is returned as is."""
    return os.environ.get(key, fallback)


def read_typed(
    key: str, fallback: T, parser: Callable[[str], T]
) -> Tuple[T, Optional[Exception]]:
    """
    Value of `key` converted with `parser`.

    Args:
        key: Environment variable name
        fallback: Value for unset or empty variables and failed conversions
        parser: Conversion, raising ValueError (or any Exception) on bad input

    Returns:
        (value, None) on success or when unset/empty,
        (fallback, error) when the parser fails
    """
    value = os.environ.get(key)
    if not value:
        return fallback, None
    try:
        return parser(value), None
    except Exception as e:
        return fallback, e


def parse_bool(value: str) -> bool:
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"invalid boolean: {value!r}")


def read_int(key: str, fallback: int) -> Tuple[int, Optional[Exception]]:
    return read_typed(key, fallback, int)


def read_bool(key: str, fallback: bool) -> Tuple[bool, Optional[Exception]]:
    return read_typed(key, fallback, parse_bool)
