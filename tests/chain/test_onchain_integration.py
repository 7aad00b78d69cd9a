"""Live read-only checks against a BSC endpoint — require BSC_TESTNET_RPC and a network config."""

from __future__ import annotations

import os

import pytest

pytestmark = pytest.mark.onchain

RPC_URL = os.environ.get("BSC_TESTNET_RPC", "")
CONFIG_DIR = os.environ.get("STABLECOIN_CONFIG_DIR", "")

if not RPC_URL or not CONFIG_DIR:
    pytest.skip("BSC_TESTNET_RPC or STABLECOIN_CONFIG_DIR not set", allow_module_level=True)

from web3 import Web3  # noqa: E402

from stablecoin.data.chain_client import ChainClient  # noqa: E402
from stablecoin.data.config import load_config  # noqa: E402
from stablecoin.ops.validate import validate_collateral_pools  # noqa: E402


@pytest.fixture(scope="module")
def client() -> ChainClient:
    return ChainClient(Web3(Web3.HTTPProvider(RPC_URL)))


@pytest.fixture(scope="module")
def config():
    return load_config("testnet", CONFIG_DIR)


def test_is_connected(client: ChainClient) -> None:
    assert client.is_connected is True


def test_chain_id(client: ChainClient) -> None:
    assert client.chain_id == 97


def test_validate_collateral_pools_reports_every_pool(client, config) -> None:
    report = validate_collateral_pools(client, config)
    assert set(report.problems) == {p.collateral_pool_id for p in config.collateral_pools}
