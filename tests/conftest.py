"""
Pytest configuration and fixtures.
"""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from edge_nat.core.config import IdRange
from edge_nat.core.directory import get_gateway_directory
from edge_nat.main import app
from edge_nat.services.gateway_directory import StaticGatewayDirectory

from gateway_data import (
    BASE_NAT_ID,
    EDGE_ID,
    NETWORK_ID,
    NETWORK_INTERFACE,
    OTHER_NETWORK_ID,
    OTHER_NETWORK_INTERFACE,
)


@pytest.fixture
def nat_id_range() -> IdRange:
    """NAT id range matching the provider defaults."""
    return IdRange(minimum=BASE_NAT_ID, maximum=131072)


@pytest.fixture
def directory() -> StaticGatewayDirectory:
    """Directory with one edge gateway attached to two networks."""
    return StaticGatewayDirectory({
        EDGE_ID: {
            NETWORK_ID: NETWORK_INTERFACE,
            OTHER_NETWORK_ID: OTHER_NETWORK_INTERFACE,
        }
    })


@pytest.fixture
def counting_directory():
    """
    Mock directory whose gateway answers every network lookup with
    NETWORK_INTERFACE, so tests can count calls.
    """
    gateway = MagicMock()
    gateway.interface_by_network_id.return_value = dict(NETWORK_INTERFACE)
    mock_directory = MagicMock()
    mock_directory.get_gateway.return_value = gateway
    return mock_directory


@pytest.fixture(scope="function")
def client(directory):
    """
    Create a test client with the gateway directory dependency overridden.
    """
    app.dependency_overrides[get_gateway_directory] = lambda: directory

    yield TestClient(app)

    # Clean up: clear dependency overrides after test
    app.dependency_overrides.clear()
