"""Network config file (``.mainnet.json`` / ``.testnet.json``) access."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from stablecoin.data.constants import AUSD, CONFIG_DIR_ENV
from stablecoin.protocol.collateral_pool import CollateralPool

logger = logging.getLogger(__name__)


def config_file_name(network: str) -> str:
    return ".mainnet.json" if network == "mainnet" else ".testnet.json"


def resolve_config_path(network: str, config_dir: str | os.PathLike | None = None) -> Path:
    """Config file path: explicit dir, then ``$STABLECOIN_CONFIG_DIR``, then cwd."""
    directory = config_dir or os.environ.get(CONFIG_DIR_ENV) or os.getcwd()
    return Path(directory) / config_file_name(network)


class NetworkConfig:
    """Deployed addresses and collateral pool parameters of one network.

    Wraps the raw JSON document; mutations made through
    :meth:`set_pool_field` are persisted with :meth:`save`.
    """

    def __init__(self, data: dict[str, Any], path: Path | None = None) -> None:
        self._data = data
        self.path = path

    @property
    def data(self) -> dict[str, Any]:
        return self._data

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get(self, dotted: str) -> Any:
        node: Any = self._data
        for part in dotted.split("."):
            if not isinstance(node, dict) or part not in node:
                raise KeyError(f"{dotted} not found in network config")
            node = node[part]
        return node

    def address_of(self, dotted: str) -> str:
        """Address of a deployed contract, e.g. ``"Oracle.BandPriceOracle"``.

        Entries may be a bare address string or an object with an
        ``address`` key.
        """
        node = self.get(dotted)
        if isinstance(node, dict):
            if "address" not in node:
                raise KeyError(f"{dotted}.address not found in network config")
            node = node["address"]
        if not isinstance(node, str):
            raise KeyError(f"{dotted} is not an address")
        return node

    @property
    def op_multisig(self) -> str:
        return self.address_of("OpMultiSig")

    @property
    def timelock(self) -> str:
        return self.address_of("Timelock")

    @property
    def stablecoin(self) -> str:
        return self.address_of(f"AlpacaStablecoin.{AUSD}")

    @property
    def collateral_pools(self) -> list[CollateralPool]:
        entries = self.get("CollateralPoolConfig").get("collateralPools", [])
        return [CollateralPool.from_config(entry) for entry in entries]

    def _pool_index(self, name: str) -> int:
        entries = self.get("CollateralPoolConfig").get("collateralPools", [])
        for idx, entry in enumerate(entries):
            if entry.get("collateralPoolId") == name:
                return idx
        raise KeyError(f"Not found pool {name}")

    def collateral_pool(self, name: str) -> CollateralPool:
        idx = self._pool_index(name)
        return CollateralPool.from_config(self._data["CollateralPoolConfig"]["collateralPools"][idx])

    def ib_token_price_feed(self, name: str) -> dict[str, Any]:
        for feed in self._data.get("PriceFeed", {}).get("IbTokenPriceFeed", []):
            if feed.get("name") == name:
                return feed
        raise KeyError(f"unable to map {name} to any IbTokenPriceFeed")

    @property
    def ib_token_adapters(self) -> list[dict[str, Any]]:
        return list(self._data.get("IbTokenAdapters", []))

    # ------------------------------------------------------------------
    # Write back
    # ------------------------------------------------------------------

    def set_pool_field(self, name: str, key: str, value: Any) -> None:
        """Update one camelCase field of a collateral pool entry in memory."""
        idx = self._pool_index(name)
        entry = self._data["CollateralPoolConfig"]["collateralPools"][idx]
        if key not in entry:
            raise KeyError(f"collateral pool {name} has no field {key}")
        entry[key] = value

    def save(self, path: str | os.PathLike | None = None) -> Path:
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("no path to save the network config to")
        logger.info(">> Update %s File", target.name)
        target.write_text(json.dumps(self._data, indent=2))
        return target


def load_config(network: str, config_dir: str | os.PathLike | None = None) -> NetworkConfig:
    """Load the network config for *network* (``mainnet`` or a test network)."""
    path = resolve_config_path(network, config_dir)
    if not path.is_file():
        raise FileNotFoundError(f"network config not found: {path}")
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid network config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"invalid network config {path}: top level must be an object")
    logger.debug("Loaded network config from %s", path)
    return NetworkConfig(data, path=path)
