"""
CodecSettings: registry seed and output options from the environment.

Variables (prefix XSDKIT_ by default):
- XSDKIT_DEFAULT_NAMESPACE    default namespace URI
- XSDKIT_PREFIXES             "p=uri;q=uri" prefix bindings
- XSDKIT_ATTRIBUTE_DEFAULTS   "name=value;..." values for empty attributes
- XSDKIT_INDENT               indent of marshalled XML (empty: one line)
"""

from typing import Annotated, Any, Dict, Final

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from xsdkit.core.namespaces import PrefixRegistry
from xsdkit.exceptions import ConfigurationError


ENV_PREFIX: Final[str] = "XSDKIT_"
ENTRY_SEPARATOR: Final[str] = ";"


def parse_pairs(text: str, what: str) -> Dict[str, str]:
    """
    Parse "key=value;key=value" into a dict.

    Raises:
        ConfigurationError: On an entry without '=' or with an empty key
    """
    pairs: Dict[str, str] = {}
    for entry in text.split(ENTRY_SEPARATOR):
        entry = entry.strip()
        if not entry:
            continue
        key, sep, value = entry.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigurationError(f"malformed {what} entry: {entry!r}")
        pairs[key] = value.strip()
    return pairs


class CodecSettings(BaseSettings):
    """Registry seed and output options"""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, frozen=True, extra="ignore")

    default_namespace: str = ""
    # NoDecode: pair lists are "p=uri;q=uri" text, not JSON
    prefixes: Annotated[Dict[str, str], NoDecode] = Field(default_factory=dict)  # prefix -> uri
    attribute_defaults: Annotated[Dict[str, str], NoDecode] = Field(default_factory=dict)
    indent: str = ""

    @field_validator("prefixes", mode="before")
    @classmethod
    def parse_prefixes(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_pairs(value, "prefix")
        return value

    @field_validator("attribute_defaults", mode="before")
    @classmethod
    def parse_attribute_defaults(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_pairs(value, "attribute default")
        return value

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> "CodecSettings":
        """
        Read settings from the environment.

        Raises:
            ConfigurationError: If a variable is malformed
        """
        try:
            return cls(_env_prefix=prefix)
        except ValidationError as e:
            raise ConfigurationError(f"invalid {prefix}* settings: {e}") from e

    def seed(self, registry: PrefixRegistry) -> None:
        """Write the configured bindings and defaults into `registry`."""
        if self.default_namespace:
            registry.set_default_namespace(self.default_namespace)
        for prefix, uri in self.prefixes.items():
            registry.register_prefix(prefix, uri)
        for name, value in self.attribute_defaults.items():
            registry.set_attribute_default(name, value)
