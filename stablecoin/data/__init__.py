"""Network settings, contract ABIs, network config and chain access."""

from stablecoin.data.client_factory import create_client
from stablecoin.data.config import NetworkConfig, load_config

__all__ = ["NetworkConfig", "create_client", "load_config"]
