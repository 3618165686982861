"""
PrefixRegistry: Namespace URI <-> Prefix Side-Table

Holds what the XML attribute codec needs to turn namespaced attribute names
into `prefix:local` form and back:
- uri -> prefix and prefix -> uri bindings
- the default namespace (unprefixed xmlns)
- default values for attributes left empty

Entries are never removed, later writes overwrite earlier ones. Every
instance is guarded by a lock so one registry may be shared by several
parse workers. Documents with conflicting prefix conventions should use
separate registries; default_registry() is the process-wide one.
"""

import logging
import threading
from typing import Dict, Optional


logger = logging.getLogger(__name__)


class PrefixRegistry:
    """
    Prefix bindings, default namespace and attribute defaults.

    Populated by explicit registration (or configuration) and as a side
    effect of unmarshalling namespace declarations.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._uri_to_prefix: Dict[str, str] = {}
        self._prefix_to_uri: Dict[str, str] = {}
        self._attribute_defaults: Dict[str, str] = {}
        self._default_namespace = ""

    # -------------------------------------------------------------------------
    # writes
    # -------------------------------------------------------------------------

    def register_prefix(self, prefix: str, uri: str) -> None:
        """Bind `prefix` to `uri` in both directions."""
        with self._lock:
            self._prefix_to_uri[prefix] = uri
            self._uri_to_prefix[uri] = prefix
        logger.debug("registered prefix %r for %r", prefix, uri)

    def set_default_namespace(self, uri: str) -> None:
        with self._lock:
            self._default_namespace = uri
        logger.debug("default namespace set to %r", uri)

    def set_attribute_default(self, local_name: str, value: str) -> None:
        with self._lock:
            self._attribute_defaults[local_name] = value

    # -------------------------------------------------------------------------
    # lookups
    # -------------------------------------------------------------------------

    @property
    def default_namespace(self) -> str:
        with self._lock:
            return self._default_namespace

    def lookup_prefix(self, uri: str) -> Optional[str]:
        """Prefix bound to `uri`, or None."""
        with self._lock:
            return self._uri_to_prefix.get(uri)

    def lookup_uri(self, prefix: str) -> Optional[str]:
        """URI bound to `prefix`, or None."""
        with self._lock:
            return self._prefix_to_uri.get(prefix)

    def lookup_attribute_default(self, local_name: str) -> Optional[str]:
        with self._lock:
            return self._attribute_defaults.get(local_name)

    def snapshot(self) -> Dict[str, object]:
        """
        Copy of the registry state for diagnostics.

        Returns:
            dict with keys prefixes (prefix -> uri), uris (uri -> prefix),
            attribute_defaults and default_namespace
        """
        with self._lock:
            return {
                "prefixes": dict(self._prefix_to_uri),
                "uris": dict(self._uri_to_prefix),
                "attribute_defaults": dict(self._attribute_defaults),
                "default_namespace": self._default_namespace,
            }


_DEFAULT_REGISTRY = PrefixRegistry()


def default_registry() -> PrefixRegistry:
    """Process-wide registry; registrations accumulate and are never reset."""
    return _DEFAULT_REGISTRY
