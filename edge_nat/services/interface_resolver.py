"""
Per-compilation cache of gateway interface lookups.
"""
import logging
from typing import Dict, Optional

from edge_nat.core.exceptions import UnknownNetworkError
from edge_nat.schemas.nat import InterfaceDescriptor
from edge_nat.services.gateway_directory import GatewayDirectory, GatewayHandle

logger = logging.getLogger(__name__)


class InterfaceResolverCache:
    """
    Resolves network ids to a gateway's interface descriptors.

    The gateway is looked up on first use and each distinct network id costs
    exactly one directory call. An instance is scoped to one gateway and one
    compilation; build a new one per compilation.
    """

    def __init__(self, directory: GatewayDirectory, gateway_id: str):
        """
        Initialize the resolver cache.

        Args:
            directory: Gateway directory collaborator
            gateway_id: Identity of the edge gateway the rules belong to
        """
        self.directory = directory
        self.gateway_id = gateway_id
        self._gateway: Optional[GatewayHandle] = None
        self._interfaces: Dict[str, InterfaceDescriptor] = {}

    @property
    def gateway(self) -> GatewayHandle:
        if self._gateway is None:
            self._gateway = self.directory.get_gateway(self.gateway_id)
        return self._gateway

    def resolve(self, network_id: str, index: Optional[int] = None) -> InterfaceDescriptor:
        """
        Get the gateway's interface descriptor for a network.

        Args:
            network_id: Network the rule binds to
            index: Position of the requesting rule, used in error reports

        Returns:
            Interface descriptor (a fresh copy per call)

        Raises:
            UnknownNetworkError: If the gateway has no interface on the network
        """
        interface = self._interfaces.get(network_id)
        if interface is None:
            logger.debug(f"Looking up interface for network {network_id} on gateway {self.gateway_id}")
            interface = self.gateway.interface_by_network_id(network_id)
            if interface is None:
                raise UnknownNetworkError(self.gateway_id, network_id, index=index)
            self._interfaces[network_id] = interface
        return dict(interface)

    def __len__(self) -> int:
        return len(self._interfaces)

    def __contains__(self, network_id: str) -> bool:
        return network_id in self._interfaces
