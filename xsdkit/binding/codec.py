"""
XmlCodec: one registry, many documents.

A codec owns the PrefixRegistry its documents read and write. Unmarshal
records the namespace declarations it meets, and a later marshal through
the same codec reuses them, so a parse/serialize cycle keeps its prefixes.
Use one codec per document family; pass default_registry() to share the
process-wide one.
"""

import logging
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel

from xsdkit.binding import decoder, encoder
from xsdkit.config.settings import CodecSettings
from xsdkit.core.namespaces import PrefixRegistry


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class XmlCodec:
    """
    Document codec for bound pydantic models.

    Args:
        registry: Registry to use, a fresh one when None
        settings: Optional settings; seeds the registry and sets the indent
    """

    def __init__(
        self,
        registry: Optional[PrefixRegistry] = None,
        settings: Optional[CodecSettings] = None,
    ):
        self.registry = registry if registry is not None else PrefixRegistry()
        self.settings = settings if settings is not None else CodecSettings()
        self.settings.seed(self.registry)

    def unmarshal(self, data: Any, model_cls: Type[ModelT]) -> ModelT:
        """
        Parse an XML document (str or bytes) into `model_cls`.

        Raises:
            XmlBindingError: If the document is malformed or does not fit
        """
        document = decoder.unmarshal(data, model_cls, self.registry)
        logger.debug("unmarshalled %s, registry %s", model_cls.__name__, self.registry.snapshot())
        return document

    def marshal(self, instance: BaseModel, indent: Optional[str] = None) -> str:
        """Write `instance` as XML; indent defaults to the settings' indent."""
        if indent is None:
            indent = self.settings.indent
        return encoder.marshal(instance, self.registry, indent)

    @staticmethod
    def unmarshal_json(data: Any, model_cls: Type[ModelT]) -> ModelT:
        """JSON form of the document; raises pydantic.ValidationError."""
        return model_cls.model_validate_json(data)

    @staticmethod
    def marshal_json(instance: BaseModel, indent: Optional[int] = 2) -> str:
        return instance.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
