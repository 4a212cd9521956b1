"""
Gateway directory: maps a gateway identity and network id to the gateway's
interface on that network.

The compiler only depends on the narrow GatewayDirectory/GatewayHandle
contract. StaticGatewayDirectory is the in-process implementation used by the
HTTP service and tests; a provider-backed directory plugs in the same way.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, Union

from edge_nat.core.exceptions import GatewayNotFoundError
from edge_nat.schemas.nat import InterfaceDescriptor

logger = logging.getLogger(__name__)


class GatewayHandle(Protocol):
    """A resolved edge gateway."""

    def interface_by_network_id(self, network_id: str) -> Optional[InterfaceDescriptor]:
        """Return the gateway's interface on the network, or None if it has none."""
        ...


class GatewayDirectory(Protocol):
    """Looks up edge gateways by identity."""

    def get_gateway(self, gateway_id: str) -> GatewayHandle:
        """Return the gateway handle, raising GatewayNotFoundError if unknown."""
        ...


class StaticGateway:
    """Gateway handle backed by an in-memory network id -> interface mapping."""

    def __init__(self, gateway_id: str, interfaces: Mapping[str, InterfaceDescriptor]):
        self.gateway_id = gateway_id
        self._interfaces = {str(k): dict(v) for k, v in interfaces.items()}

    def interface_by_network_id(self, network_id: str) -> Optional[InterfaceDescriptor]:
        interface = self._interfaces.get(network_id)
        if interface is None:
            return None
        return dict(interface)


class StaticGatewayDirectory:
    """
    Gateway directory backed by a mapping of the form:

        {
            "<gateway id>": {
                "<network id>": {"type": "...", "name": "...", "href": "..."}
            }
        }
    """

    def __init__(self, gateways: Mapping[str, Mapping[str, InterfaceDescriptor]]):
        self._gateways: Dict[str, StaticGateway] = {
            str(gateway_id): StaticGateway(str(gateway_id), interfaces)
            for gateway_id, interfaces in gateways.items()
        }

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "StaticGatewayDirectory":
        """
        Load a directory from a JSON file.

        Args:
            path: Path to the JSON document

        Returns:
            StaticGatewayDirectory instance

        Raises:
            ValueError: If the file is not a JSON object of gateways
        """
        path = Path(path)
        try:
            data: Any = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Gateway directory file {path} is not valid JSON: {e}")

        if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
            raise ValueError(f"Gateway directory file {path} must map gateway ids to network objects")

        for gateway_id, networks in data.items():
            for network_id, interface in networks.items():
                if not isinstance(interface, dict):
                    raise ValueError(
                        f"Gateway directory file {path}: interface for network {network_id} "
                        f"on gateway {gateway_id} must be a JSON object"
                    )

        logger.info(f"Loaded gateway directory from {path} ({len(data)} gateways)")
        return cls(data)

    def get_gateway(self, gateway_id: str) -> StaticGateway:
        gateway = self._gateways.get(gateway_id)
        if gateway is None:
            raise GatewayNotFoundError(gateway_id)
        return gateway

    def gateway_ids(self):
        """List the gateway identities this directory knows about."""
        return sorted(self._gateways)
