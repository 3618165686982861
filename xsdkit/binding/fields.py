"""
Field markers: how pydantic model fields map onto XML.

Markers go into `typing.Annotated`:

    class Root(XmlModel):
        __xml_name__ = QName("http://some.com", "root")

        version: Annotated[Optional[PrefixedAttribute], XmlAttr("version", omitempty=True)] = None
        date: Annotated[DateTimeValue, XmlElement("date")] = DateTimeValue()
        child: Annotated[Child, XmlElement("child")]

Fields without a marker bind as child elements named after the field.
"""

import functools
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, List, Optional, Tuple, Type

from pydantic import BaseModel

from xsdkit.core.domain.codecs import QName, is_attribute_codec, is_text_codec
from xsdkit.exceptions import XmlBindingError


# =============================================================================
# MARKERS
# =============================================================================


@dataclass(frozen=True)
class XmlElement:
    """Child element; namespace None inherits the parent's namespace"""

    local: str
    namespace: Optional[str] = None
    omitempty: bool = False


@dataclass(frozen=True)
class XmlAttr:
    """Attribute; an empty namespace matches the local name in any namespace"""

    local: str
    namespace: str = ""
    omitempty: bool = False


@dataclass(frozen=True)
class XmlAnyAttr:
    """list[PrefixedAttribute] receiving every attribute no other field matched"""


@dataclass(frozen=True)
class XmlText:
    """Character data of the element"""


# =============================================================================
# RESOLVED BINDINGS
# =============================================================================


class BindingKind(str, Enum):
    ELEMENT = "element"
    ATTRIBUTE = "attribute"
    ANY_ATTRIBUTE = "any_attribute"
    TEXT = "text"


class ValueKind(str, Enum):
    MODEL = "model"
    ATTRIBUTE_CODEC = "attribute_codec"
    TEXT_CODEC = "text_codec"
    PLAIN = "plain"


@dataclass(frozen=True)
class FieldBinding:
    """One model field resolved against its marker"""

    name: str
    key: str  # validation key, the alias when the field has one
    kind: BindingKind
    local: str
    namespace: Optional[str]
    omitempty: bool
    value_type: Any
    value_kind: ValueKind
    repeated: bool

    @property
    def qname(self) -> QName:
        return QName(self.namespace or "", self.local)

    def matches(self, name: QName) -> bool:
        return name.local == self.local and (not self.namespace or self.namespace == name.namespace)


def _unwrap(annotation: Any) -> Tuple[Any, bool]:
    """Strip Optional[...] and list[...]; returns (inner type, repeated)."""
    repeated = False
    while True:
        origin = typing.get_origin(annotation)
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if origin is typing.Union or origin is types.UnionType:
            if len(args) != 1:
                raise XmlBindingError(f"cannot bind union type {annotation!r}")
            annotation = args[0]
        elif origin is list:
            repeated = True
            annotation = args[0]
        else:
            return annotation, repeated


def _value_kind(tp: Any) -> ValueKind:
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return ValueKind.MODEL
    if is_attribute_codec(tp):
        return ValueKind.ATTRIBUTE_CODEC
    if is_text_codec(tp):
        return ValueKind.TEXT_CODEC
    return ValueKind.PLAIN


def xml_name(model_cls: Type[BaseModel]) -> Optional[QName]:
    """Element name a model declares through `__xml_name__`, if any."""
    name = getattr(model_cls, "__xml_name__", None)
    if name is None:
        return None
    if isinstance(name, str):
        return QName("", name)
    return QName(*name)


def _resolve_marker(
    model_cls: Type[BaseModel], name: str, marker: Any, value_kind: ValueKind, repeated: bool
) -> Tuple[BindingKind, str, Optional[str], bool]:
    where = f"{model_cls.__name__}.{name}"
    scalar = not repeated and value_kind is not ValueKind.MODEL

    if isinstance(marker, XmlElement):
        return BindingKind.ELEMENT, marker.local, marker.namespace, marker.omitempty
    if isinstance(marker, XmlAttr):
        if not scalar:
            raise XmlBindingError(f"{where}: attributes must be scalar")
        return BindingKind.ATTRIBUTE, marker.local, marker.namespace, marker.omitempty
    if isinstance(marker, XmlAnyAttr):
        if not repeated or value_kind is not ValueKind.ATTRIBUTE_CODEC:
            raise XmlBindingError(f"{where}: any-attribute needs a list of attribute codecs")
        return BindingKind.ANY_ATTRIBUTE, "", "", True
    if not scalar:
        raise XmlBindingError(f"{where}: character data must be scalar")
    return BindingKind.TEXT, "", "", True


@functools.lru_cache(maxsize=None)
def bindings_for(model_cls: Type[BaseModel]) -> Tuple[FieldBinding, ...]:
    """
    Resolve the XML bindings of a model, in field declaration order.

    Raises:
        XmlBindingError: On unsupported field types or misplaced markers
    """
    bindings: List[FieldBinding] = []
    for name, info in model_cls.model_fields.items():
        marker = next(
            (m for m in info.metadata if isinstance(m, (XmlElement, XmlAttr, XmlAnyAttr, XmlText))),
            None,
        )
        value_type, repeated = _unwrap(info.annotation)
        value_kind = _value_kind(value_type)
        key = info.alias or name

        if marker is None:
            marker = XmlElement(name)

        kind, local, namespace, omitempty = _resolve_marker(
            model_cls, name, marker, value_kind, repeated
        )

        bindings.append(
            FieldBinding(
                name=name,
                key=key,
                kind=kind,
                local=local,
                namespace=namespace,
                omitempty=omitempty,
                value_type=value_type,
                value_kind=value_kind,
                repeated=repeated,
            )
        )
    return tuple(bindings)


class XmlModel(BaseModel):
    """
    Convenience base for bound documents.

    Accepts field names as well as aliases (JSON names like "@version").
    """

    __xml_name__: ClassVar[Optional[QName]] = None

    model_config = {"populate_by_name": True}
