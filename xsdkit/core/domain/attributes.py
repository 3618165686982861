"""
PrefixedAttribute: Namespace-Prefix-Aware XML Attribute

ElementTree (like most XML serializers) handles element namespaces but
cannot write `prefix:local` attribute names. PrefixedAttribute closes that
gap: on unmarshal it records namespace declarations in a PrefixRegistry, on
marshal it consults the registry to build the qualified attribute name and
to fill empty values.

Marshal resolution order:
1. Stored name, or the declared (field) name when the attribute has none
2. xmlns:<local> for namespace declarations, value from the prefix binding
3. bare xmlns for the default namespace declaration
4. otherwise prefix:<local> when the namespace (or the default namespace
   for unqualified names) has a prefix, else <local>
5. empty values: default namespace for xmlns, else the attribute default
"""

from typing import Any, Final

from pydantic_core import core_schema

from xsdkit.core.domain.codecs import QName, RawAttribute, ValueObject, text_codec_schema
from xsdkit.core.namespaces import PrefixRegistry


# Namespace of `xmlns:*` declaration attributes, and the name of the
# unprefixed default namespace declaration
XMLNS: Final[str] = "xmlns"


# =============================================================================
# PREFIXED ATTRIBUTE
# =============================================================================


class PrefixedAttribute(ValueObject):
    """
    Attribute value with its namespace and local name.

    Declare it as `Optional[PrefixedAttribute]` with omitempty to leave the
    attribute out when unset; a zero instance marshals under the declared
    field name.
    """

    __slots__ = ("namespace", "local", "value")

    namespace: str
    local: str
    value: str

    def __init__(self, namespace: str = "", local: str = "", value: str = "") -> None:
        self._init(namespace=namespace, local=local, value=value)

    @classmethod
    def new(cls, local: str, value: str) -> "PrefixedAttribute":
        return cls(local=local, value=value)

    @classmethod
    def new_ns(cls, namespace: str, local: str, value: str) -> "PrefixedAttribute":
        return cls(namespace=namespace, local=local, value=value)

    @property
    def is_zero(self) -> bool:
        return not (self.namespace or self.local or self.value)

    # -------------------------------------------------------------------------
    # text codec (JSON form carries the value only)
    # -------------------------------------------------------------------------

    @classmethod
    def from_text(cls, text: str) -> "PrefixedAttribute":
        return cls(value=text)

    def to_text(self) -> str:
        return self.value

    # -------------------------------------------------------------------------
    # attribute codec
    # -------------------------------------------------------------------------

    @classmethod
    def from_raw_attribute(
        cls, raw: RawAttribute, registry: PrefixRegistry
    ) -> "PrefixedAttribute":
        """
        Build from a parsed attribute, recording namespace declarations.

        Args:
            raw: Attribute as parsed; `xmlns:p="uri"` arrives as
                QName("xmlns", "p") and `xmlns="uri"` as QName("", "xmlns")
            registry: Registry receiving the declarations

        Returns:
            The attribute stored verbatim
        """
        namespace, local = raw.name
        if namespace == XMLNS:
            registry.register_prefix(local, raw.value)
        if namespace == "" and local == XMLNS:
            registry.set_default_namespace(raw.value)
        return cls(namespace=namespace, local=local, value=raw.value)

    def to_raw_attribute(self, declared: QName, registry: PrefixRegistry) -> RawAttribute:
        """
        Resolve the serialized `prefix:local` name and value.

        Args:
            declared: Name declared on the bound field, used when unset
            registry: Registry to resolve prefixes and defaults

        Returns:
            RawAttribute with an empty namespace and the qualified name
        """
        if self.local == "":
            # unset, or restored from text without a name
            namespace, local = declared
        else:
            namespace, local = self.namespace, self.local
        value = self.value

        if namespace == XMLNS:
            qualified = f"{XMLNS}:{local}"
            if value == "":
                value = registry.lookup_uri(local) or ""
        else:
            if namespace == "" and local != XMLNS:
                namespace = registry.default_namespace
            prefix = registry.lookup_prefix(namespace)
            qualified = f"{prefix}:{local}" if prefix is not None else local

        if value == "":
            if local == XMLNS:
                value = registry.default_namespace
            else:
                value = registry.lookup_attribute_default(local) or ""

        return RawAttribute(QName("", qualified), value)

    # -------------------------------------------------------------------------
    # pydantic integration
    # -------------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> core_schema.CoreSchema:
        return text_codec_schema(cls)

