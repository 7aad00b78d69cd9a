"""Factory for creating a ChainClient for a named network."""

from __future__ import annotations

import logging
import os

from web3 import Web3

from stablecoin.data.chain_client import ChainClient
from stablecoin.data.constants import FORK_DEPLOYER, FORK_URL_MARKER, NETWORKS

logger = logging.getLogger(__name__)


def is_fork(rpc_url: str) -> bool:
    return FORK_URL_MARKER in rpc_url


def resolve_rpc_url(network: str, rpc_url: str | None = None) -> str:
    """RPC URL from the argument, the network's env var, or its default."""
    settings = NETWORKS.get(network)
    if settings is None:
        raise ValueError(f"Unknown network: {network} (expected one of {', '.join(NETWORKS)})")
    resolved = rpc_url
    if not resolved and settings.rpc_env:
        resolved = os.environ.get(settings.rpc_env)
    resolved = resolved or settings.rpc_url
    if not resolved:
        raise ValueError(f"No RPC URL for {network}; set {settings.rpc_env} or pass --rpc-url")
    return resolved


def create_client(
    network: str,
    rpc_url: str | None = None,
    private_key: str | None = None,
) -> ChainClient:
    """Create a client for *network*.

    Parameters
    ----------
    network : str
        Key of :data:`~stablecoin.data.constants.NETWORKS`.
    rpc_url : str | None
        JSON-RPC URL. Falls back to the network's RPC env var, then to
        its default URL.
    private_key : str | None
        Signer key. Falls back to the network's private key env var.
        Not needed on a Tenderly fork, where the unlocked deployer sends.
    """
    url = resolve_rpc_url(network, rpc_url)
    w3 = Web3(Web3.HTTPProvider(url))

    if is_fork(url):
        logger.info("Fork RPC detected; sending from unlocked deployer %s", FORK_DEPLOYER)
        return ChainClient(w3, sender=FORK_DEPLOYER)

    settings = NETWORKS[network]
    key = private_key or os.environ.get(settings.private_key_env)
    if not key:
        raise ValueError(f"No private key for {network}; set {settings.private_key_env}")
    account = w3.eth.account.from_key(key)
    return ChainClient(w3, account=account)
