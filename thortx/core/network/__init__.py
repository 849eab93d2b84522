from .models import NetworkConfig, NetworkMode
from .coordinator import (
    InvalidationListener,
    NetworkCoordinator,
    get_network_coordinator,
)

__all__ = [
    "NetworkConfig",
    "NetworkMode",
    "InvalidationListener",
    "NetworkCoordinator",
    "get_network_coordinator",
]
