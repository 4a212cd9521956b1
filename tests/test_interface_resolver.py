"""
Tests for the per-compilation interface resolver cache.
"""
import pytest

from edge_nat.core.exceptions import GatewayNotFoundError, UnknownNetworkError
from edge_nat.services.interface_resolver import InterfaceResolverCache

from gateway_data import EDGE_ID, NETWORK_ID, NETWORK_INTERFACE, OTHER_NETWORK_ID


class TestInterfaceResolverCache:
    """Interface resolution and memoization."""

    def test_resolves_interface(self, directory):
        resolver = InterfaceResolverCache(directory, EDGE_ID)
        assert resolver.resolve(NETWORK_ID) == NETWORK_INTERFACE

    def test_repeated_resolves_hit_the_cache(self, counting_directory):
        resolver = InterfaceResolverCache(counting_directory, EDGE_ID)
        for _ in range(5):
            resolver.resolve(NETWORK_ID)

        gateway = counting_directory.get_gateway.return_value
        gateway.interface_by_network_id.assert_called_once_with(NETWORK_ID)
        counting_directory.get_gateway.assert_called_once_with(EDGE_ID)
        assert len(resolver) == 1
        assert NETWORK_ID in resolver

    def test_distinct_networks_are_looked_up_separately(self, counting_directory):
        resolver = InterfaceResolverCache(counting_directory, EDGE_ID)
        resolver.resolve(NETWORK_ID)
        resolver.resolve(OTHER_NETWORK_ID)
        resolver.resolve(NETWORK_ID)

        gateway = counting_directory.get_gateway.return_value
        assert gateway.interface_by_network_id.call_count == 2
        assert len(resolver) == 2

    def test_gateway_is_not_looked_up_until_needed(self, counting_directory):
        InterfaceResolverCache(counting_directory, EDGE_ID)
        counting_directory.get_gateway.assert_not_called()

    def test_returned_descriptors_are_independent_copies(self, directory):
        resolver = InterfaceResolverCache(directory, EDGE_ID)
        first = resolver.resolve(NETWORK_ID)
        first["name"] = "changed"

        assert resolver.resolve(NETWORK_ID) == NETWORK_INTERFACE

    def test_unknown_network(self, directory):
        resolver = InterfaceResolverCache(directory, EDGE_ID)
        with pytest.raises(UnknownNetworkError) as exc_info:
            resolver.resolve("no-such-network", index=3)

        assert exc_info.value.gateway_id == EDGE_ID
        assert exc_info.value.network_id == "no-such-network"
        assert exc_info.value.index == 3
        assert "no-such-network" not in resolver

    def test_unknown_gateway(self, directory):
        resolver = InterfaceResolverCache(directory, "no-such-edge")
        with pytest.raises(GatewayNotFoundError):
            resolver.resolve(NETWORK_ID)
