"""
Tests for PrefixRegistry

Checks:
1. Registration and lookup in both directions
2. Last write wins, nothing is removed
3. Concurrent writers do not lose updates
4. The process-wide registry is a singleton
"""

import threading

from xsdkit.core.namespaces import PrefixRegistry, default_registry


class TestPrefixRegistry:
    """Lookups and overwrites"""

    def test_empty_lookups(self) -> None:
        registry = PrefixRegistry()
        assert registry.lookup_prefix("http://example.org") is None
        assert registry.lookup_uri("x") is None
        assert registry.lookup_attribute_default("lang") is None
        assert registry.default_namespace == ""

    def test_register_prefix_both_directions(self) -> None:
        registry = PrefixRegistry()
        registry.register_prefix("x", "http://example.org")
        assert registry.lookup_prefix("http://example.org") == "x"
        assert registry.lookup_uri("x") == "http://example.org"

    def test_last_write_wins(self) -> None:
        registry = PrefixRegistry()
        registry.register_prefix("x", "http://example.org")
        registry.register_prefix("y", "http://example.org")
        assert registry.lookup_prefix("http://example.org") == "y"
        # the earlier prefix binding is not removed
        assert registry.lookup_uri("x") == "http://example.org"

    def test_default_namespace_and_attribute_defaults(self) -> None:
        registry = PrefixRegistry()
        registry.set_default_namespace("http://a.org")
        registry.set_default_namespace("http://b.org")
        registry.set_attribute_default("lang", "en")
        assert registry.default_namespace == "http://b.org"
        assert registry.lookup_attribute_default("lang") == "en"

    def test_snapshot_is_a_copy(self) -> None:
        registry = PrefixRegistry()
        registry.register_prefix("x", "http://example.org")
        snapshot = registry.snapshot()
        snapshot["prefixes"]["y"] = "http://other.org"
        assert snapshot["uris"] == {"http://example.org": "x"}
        assert registry.lookup_uri("y") is None

    def test_instances_are_independent(self) -> None:
        first, second = PrefixRegistry(), PrefixRegistry()
        first.register_prefix("x", "http://example.org")
        assert second.lookup_prefix("http://example.org") is None


class TestConcurrency:
    """Shared registry across threads"""

    def test_concurrent_registrations(self) -> None:
        registry = PrefixRegistry()

        def worker(n: int) -> None:
            for i in range(200):
                registry.register_prefix(f"p{n}_{i}", f"http://example.org/{n}/{i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        snapshot = registry.snapshot()
        assert len(snapshot["prefixes"]) == 8 * 200
        assert len(snapshot["uris"]) == 8 * 200


class TestDefaultRegistry:
    def test_singleton(self) -> None:
        assert default_registry() is default_registry()
