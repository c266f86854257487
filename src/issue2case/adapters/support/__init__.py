"""
Support Adapters - SupportCasePort implementations.

The live or mock gateway is chosen once, at construction.
"""

from ...core.ports.config_provider import SupportConfig
from ...core.ports.support_case import SupportCasePort
from .live import LiveSupportCaseGateway
from .mock import MockSupportCaseGateway


def create_support_gateway(config: SupportConfig) -> SupportCasePort:
    """Build the gateway selected by ``config.mock_mode``."""
    if config.mock_mode:
        return MockSupportCaseGateway()
    return LiveSupportCaseGateway(config)


__all__ = [
    "LiveSupportCaseGateway",
    "MockSupportCaseGateway",
    "create_support_gateway",
]
