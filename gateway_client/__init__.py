"""Election gateway client package."""

from gateway_client.base import BaseClient, set_gateway_config
from gateway_client.election import ElectionClient
from gateway_client.errors import (
    GatewayApplicationError,
    GatewayError,
    GatewayHTTPError,
    NetworkUnavailable,
)

__all__ = [
    # Base
    "BaseClient",
    "set_gateway_config",
    # Clients
    "ElectionClient",
    # Errors
    "GatewayError",
    "NetworkUnavailable",
    "GatewayHTTPError",
    "GatewayApplicationError",
]
