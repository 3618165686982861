"""
Codec capabilities shared by the value types and the document binding.

The binding dispatches by capability, not by inheritance:
- TextCodec: element text, character data and JSON form
- AttributeCodec: attributes that need the PrefixRegistry
"""

from typing import TYPE_CHECKING, Any, NamedTuple, Protocol, Tuple, runtime_checkable

from pydantic_core import core_schema

if TYPE_CHECKING:
    from xsdkit.core.namespaces import PrefixRegistry


class QName(NamedTuple):
    """Namespace URI plus local name, as seen by the serializer"""

    namespace: str
    local: str


class RawAttribute(NamedTuple):
    """Attribute as produced or consumed by the serializer"""

    name: QName
    value: str


class ValueObject:
    """
    Immutable value compared slot by slot.

    Text codec types derive from this instead of being dataclasses:
    pydantic turns dataclass instances into dicts when dumping in python
    mode, and these values must come back as themselves.
    """

    __slots__: Tuple[str, ...] = ()

    def _init(self, **values: Any) -> None:
        for name, value in values.items():
            object.__setattr__(self, name, value)

    def _values(self) -> Tuple[Any, ...]:
        return tuple(getattr(self, name) for name in self.__slots__)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._values() == other._values()

    def __hash__(self) -> int:
        return hash((type(self), self._values()))

    def __reduce__(self) -> Tuple[Any, Tuple[Any, ...]]:
        # constructors take the slots positionally, in order
        return type(self), self._values()

    def __repr__(self) -> str:
        args = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.__slots__)
        return f"{type(self).__name__}({args})"


@runtime_checkable
class TextCodec(Protocol):
    @classmethod
    def from_text(cls, text: str) -> Any: ...

    def to_text(self) -> str: ...


@runtime_checkable
class AttributeCodec(Protocol):
    @classmethod
    def from_raw_attribute(cls, raw: RawAttribute, registry: "PrefixRegistry") -> Any: ...

    def to_raw_attribute(self, declared: QName, registry: "PrefixRegistry") -> RawAttribute: ...


def is_text_codec(tp: Any) -> bool:
    """True when the class provides the TextCodec methods"""
    return isinstance(tp, type) and callable(getattr(tp, "from_text", None)) and callable(
        getattr(tp, "to_text", None)
    )


def is_attribute_codec(tp: Any) -> bool:
    """True when the class provides the AttributeCodec methods"""
    return isinstance(tp, type) and callable(getattr(tp, "from_raw_attribute", None)) and callable(
        getattr(tp, "to_raw_attribute", None)
    )


def text_codec_schema(cls: Any) -> core_schema.CoreSchema:
    """
    pydantic core schema for a text codec value type.

    Accepts an instance or its text form, dumps to text in JSON mode and
    keeps the instance in python mode.
    """

    def validate(value: Any) -> Any:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_text(value)
        raise ValueError(f"expected {cls.__name__} or str, got {type(value).__name__}")

    def serialize(value: Any, info: core_schema.SerializationInfo) -> Any:
        if info.mode_is_json():
            return value.to_text()
        return value

    return core_schema.no_info_plain_validator_function(
        validate,
        serialization=core_schema.plain_serializer_function_ser_schema(serialize, info_arg=True),
    )
