"""
Unmarshal: XML text -> bound pydantic model.

ElementTree drops namespace declarations from the attribute maps, so the
parse listens to `start-ns` events and turns each declaration back into a
raw attribute of the element that carries it:

    xmlns:z="uri"  -> RawAttribute(QName("xmlns", "z"), "uri")
    xmlns="uri"    -> RawAttribute(QName("", "xmlns"), "uri")

Attribute codec fields then see declarations exactly like any other
attribute and record them in the PrefixRegistry.
"""

import io
import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from xsdkit.binding.fields import BindingKind, FieldBinding, ValueKind, bindings_for, xml_name
from xsdkit.core.domain.attributes import XMLNS
from xsdkit.core.domain.codecs import QName, RawAttribute
from xsdkit.core.namespaces import PrefixRegistry
from xsdkit.exceptions import XmlBindingError


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def split_tag(tag: str) -> QName:
    """ElementTree "{uri}local" -> QName(uri, local)"""
    if tag.startswith("{"):
        namespace, _, local = tag[1:].partition("}")
        return QName(namespace, local)
    return QName("", tag)


def parse_document(data: Any) -> Tuple[ET.Element, Dict[ET.Element, List[RawAttribute]]]:
    """
    Parse XML keeping namespace declarations.

    Returns:
        (root element, element -> raw attributes in document order)

    Raises:
        XmlBindingError: If the text is not well-formed XML
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    raw_attributes: Dict[ET.Element, List[RawAttribute]] = {}
    pending: List[RawAttribute] = []
    root = None
    try:
        for event, item in ET.iterparse(io.BytesIO(data), events=("start-ns", "start")):
            if event == "start-ns":
                prefix, uri = item
                name = QName(XMLNS, prefix) if prefix else QName("", XMLNS)
                pending.append(RawAttribute(name, uri))
                continue
            if root is None:
                root = item
            attributes = pending + [
                RawAttribute(split_tag(key), value) for key, value in item.attrib.items()
            ]
            raw_attributes[item] = attributes
            pending = []
    except ET.ParseError as e:
        raise XmlBindingError(f"malformed XML: {e}") from e

    if root is None:
        raise XmlBindingError("empty XML document")
    return root, raw_attributes


class Decoder:
    """Binds one parsed document onto a model, feeding the registry."""

    def __init__(
        self, registry: PrefixRegistry, raw_attributes: Dict[ET.Element, List[RawAttribute]]
    ):
        self.registry = registry
        self.raw_attributes = raw_attributes

    def decode(self, element: ET.Element, model_cls: Type[ModelT]) -> ModelT:
        values: Dict[str, Any] = {}
        bindings = bindings_for(model_cls)

        self._decode_attributes(element, bindings, values)

        for binding in bindings:
            if binding.kind is BindingKind.ELEMENT:
                self._decode_children(element, binding, values)
            elif binding.kind is BindingKind.TEXT:
                text = (element.text or "") + "".join(child.tail or "" for child in element)
                values[binding.key] = self._scalar(binding, text)

        try:
            return model_cls.model_validate(values)
        except ValidationError as e:
            tag = split_tag(element.tag).local
            raise XmlBindingError(f"<{tag}> does not fit {model_cls.__name__}: {e}") from e

    def _decode_attributes(
        self, element: ET.Element, bindings: Tuple[FieldBinding, ...], values: Dict[str, Any]
    ) -> None:
        attribute_bindings = [b for b in bindings if b.kind is BindingKind.ATTRIBUTE]
        catch_all = next((b for b in bindings if b.kind is BindingKind.ANY_ATTRIBUTE), None)
        if catch_all is not None:
            values[catch_all.key] = []

        for raw in self.raw_attributes.get(element, []):
            # first matching field wins, a later attribute overwrites
            binding = next((b for b in attribute_bindings if b.matches(raw.name)), None)
            if binding is not None:
                values[binding.key] = self._attribute(binding, raw)
            elif catch_all is not None:
                codec = catch_all.value_type
                values[catch_all.key].append(codec.from_raw_attribute(raw, self.registry))
            else:
                logger.debug("ignored attribute %s on <%s>", raw.name, element.tag)

    def _decode_children(
        self, element: ET.Element, binding: FieldBinding, values: Dict[str, Any]
    ) -> None:
        matched = [child for child in element if binding.matches(split_tag(child.tag))]
        if not matched:
            return
        decoded = [self._child(binding, child) for child in matched]
        values[binding.key] = decoded if binding.repeated else decoded[-1]

    def _child(self, binding: FieldBinding, child: ET.Element) -> Any:
        if binding.value_kind is ValueKind.MODEL:
            return self.decode(child, binding.value_type)
        return self._scalar(binding, "".join(child.itertext()))

    def _attribute(self, binding: FieldBinding, raw: RawAttribute) -> Any:
        if binding.value_kind is ValueKind.ATTRIBUTE_CODEC:
            return binding.value_type.from_raw_attribute(raw, self.registry)
        return self._scalar(binding, raw.value)

    @staticmethod
    def _scalar(binding: FieldBinding, text: str) -> Any:
        if binding.value_kind in (ValueKind.TEXT_CODEC, ValueKind.ATTRIBUTE_CODEC):
            return binding.value_type.from_text(text)
        # plain types are coerced by pydantic
        return text


def unmarshal(data: Any, model_cls: Type[ModelT], registry: PrefixRegistry) -> ModelT:
    """
    Parse `data` into `model_cls`.

    Raises:
        XmlBindingError: On malformed XML, a root element other than the
            model's `__xml_name__`, or values the model rejects
    """
    root, raw_attributes = parse_document(data)
    expected = xml_name(model_cls)
    actual = split_tag(root.tag)
    if expected is not None and not (
        expected.local == actual.local
        and (not expected.namespace or expected.namespace == actual.namespace)
    ):
        raise XmlBindingError(f"expected root element {expected}, got {actual}")
    return Decoder(registry, raw_attributes).decode(root, model_cls)
