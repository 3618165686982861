"""
Marshal: bound pydantic model -> XML text.

Element names are written unprefixed; an element whose namespace differs
from the one in scope declares it with xmlns="...". Attribute codec fields
resolve their `prefix:local` names through the PrefixRegistry, so the
output reuses the prefixes recorded by an earlier unmarshal (or seeded by
configuration). The tree is built and serialized with ElementTree.
"""

import xml.etree.ElementTree as ET
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel

from xsdkit.binding.fields import BindingKind, FieldBinding, ValueKind, bindings_for, xml_name
from xsdkit.core.domain.attributes import XMLNS
from xsdkit.core.domain.codecs import QName, RawAttribute
from xsdkit.core.namespaces import PrefixRegistry


def is_empty(value: Any) -> bool:
    """omitempty test: None, empty string or list, zero value objects"""
    if value is None:
        return True
    if isinstance(value, (str, list, tuple)):
        return len(value) == 0
    return bool(getattr(value, "is_zero", False))


def text_of(value: Any) -> str:
    if hasattr(value, "to_text"):
        return value.to_text()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class Encoder:
    """Builds the element tree of one document."""

    def __init__(self, registry: PrefixRegistry):
        self.registry = registry

    def encode(
        self,
        instance: BaseModel,
        name: QName,
        namespace_in_scope: str = "",
        parent: Optional[ET.Element] = None,
    ) -> ET.Element:
        bindings = bindings_for(type(instance))
        attributes: List[RawAttribute] = []
        text: Optional[str] = None

        for binding in bindings:
            value = getattr(instance, binding.name)
            if binding.kind is BindingKind.ATTRIBUTE:
                raw = self._attribute(binding, value)
                if raw is not None:
                    attributes.append(raw)
            elif binding.kind is BindingKind.ANY_ATTRIBUTE:
                for item in value or []:
                    if not item.local:
                        continue
                    declared = QName(item.namespace, item.local)
                    attributes.append(item.to_raw_attribute(declared, self.registry))
            elif binding.kind is BindingKind.TEXT and not is_empty(value):
                text = text_of(value)

        declared_default = next(
            (raw.value for raw in attributes if raw.name.local == XMLNS), None
        )
        if declared_default is None and name.namespace != namespace_in_scope:
            attributes.insert(0, RawAttribute(QName("", XMLNS), name.namespace))
        scope = declared_default if declared_default is not None else name.namespace

        # Names are already `prefix:local`; a repeated name keeps its first
        # position and its last value.
        attrib = {raw.name.local: raw.value for raw in attributes}
        if parent is None:
            elem = ET.Element(name.local, attrib)
        else:
            elem = ET.SubElement(parent, name.local, attrib)
        elem.text = text

        for binding in bindings:
            if binding.kind is not BindingKind.ELEMENT:
                continue
            value = getattr(instance, binding.name)
            items = value if binding.repeated else [value]
            for item in items or []:
                self._element(elem, binding, item, scope)
        return elem

    def _attribute(self, binding: FieldBinding, value: Any) -> Optional[RawAttribute]:
        declared = binding.qname
        if binding.value_kind is ValueKind.ATTRIBUTE_CODEC:
            if value is None:
                if binding.omitempty:
                    return None
                value = binding.value_type()
            return value.to_raw_attribute(declared, self.registry)
        if binding.omitempty and is_empty(value):
            return None
        qualified = declared.local
        if declared.namespace:
            prefix = self.registry.lookup_prefix(declared.namespace)
            if prefix is not None:
                qualified = f"{prefix}:{declared.local}"
        return RawAttribute(QName("", qualified), "" if value is None else text_of(value))

    def _element(self, parent: ET.Element, binding: FieldBinding, value: Any, scope: str) -> None:
        if value is None or (binding.omitempty and is_empty(value)):
            return
        namespace = binding.namespace if binding.namespace is not None else scope

        if binding.value_kind is ValueKind.MODEL:
            declared = xml_name(type(value))
            if declared is not None:
                name = QName(declared.namespace or namespace, declared.local)
            else:
                name = QName(namespace, binding.local)
            self.encode(value, name, scope, parent)
            return

        child = ET.SubElement(parent, binding.local)
        if namespace != scope:
            child.set(XMLNS, namespace)
        child.text = text_of(value)


def marshal(instance: BaseModel, registry: PrefixRegistry, indent: str = "") -> str:
    """
    Write `instance` as an XML document (no XML declaration).

    Empty elements are written as `<x></x>`; a non-empty indent puts each
    element on its own line.
    """
    name = xml_name(type(instance)) or QName("", type(instance).__name__)
    root = Encoder(registry).encode(instance, name)
    if indent:
        ET.indent(root, space=indent)
    return ET.tostring(root, encoding="unicode", short_empty_elements=False)
