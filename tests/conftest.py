"""Shared fixtures: a small network config and a mocked web3 connection."""

from __future__ import annotations

import copy
import json
from unittest.mock import MagicMock

import pytest

from stablecoin.data.chain_client import ChainClient
from stablecoin.data.config import NetworkConfig


def addr(n: int) -> str:
    """Deterministic lowercase test address."""
    return "0x" + f"{n:02x}" * 20


DEPLOYER = addr(0xD0)

NETWORK_CONFIG = {
    "OpMultiSig": addr(0x01),
    "Timelock": addr(0x02),
    "AccessControlConfig": {"address": addr(0x03), "deployedBlock": 1},
    "AlpacaStablecoin": {"AUSD": {"address": addr(0x04), "deployedBlock": 1}},
    "BookKeeper": {"address": addr(0x05), "deployedBlock": 1},
    "CollateralPoolConfig": {
        "address": addr(0x06),
        "deployedBlock": 1,
        "collateralPools": [
            {
                "collateralPoolId": "ibBUSD",
                "debtCeiling": "30000000" + "0" * 45,
                "debtFloor": "100" + "0" * 45,
                "priceFeed": addr(0x20),
                "liquidationRatio": "1111111111111111111111111111",
                "stabilityFeeRate": "1000000000315522921573372069",
                "adapter": addr(0x21),
                "closeFactorBps": 5000,
                "liquidatorIncentiveBps": 10250,
                "treasuryFeesBps": 5000,
                "strategy": addr(0x22),
            },
            {
                "collateralPoolId": "ibWBNB",
                "debtCeiling": "0",
                "debtFloor": "100" + "0" * 45,
                "priceFeed": addr(0x30),
                "liquidationRatio": "1333333333333333333333333333",
                "stabilityFeeRate": "1000000000000000000000000000",
                "adapter": addr(0x31),
                "closeFactorBps": 5000,
                "liquidatorIncentiveBps": 10500,
                "treasuryFeesBps": 5000,
                "strategy": addr(0x22),
            },
        ],
    },
    "FlashMintModule": {"address": addr(0x07), "deployedBlock": 1},
    "StabilityFeeCollector": {"address": addr(0x08), "deployedBlock": 1},
    "StableSwapModule": {"address": addr(0x09), "deployedBlock": 1},
    "StablecoinAdapters": {"AUSD": {"address": addr(0x0A), "deployedBlock": 1}},
    "Oracle": {
        "ChainLinkOracle": {"address": addr(0x0B), "deployedBlock": 1},
        "BandPriceOracle": {"address": addr(0x0C), "deployedBlock": 1},
        "VaultPriceOracle": {"address": addr(0x0D), "deployedBlock": 1},
    },
    "PriceFeed": {
        "IbTokenPriceFeed": [
            {"name": "ibBUSD-USD", "address": addr(0x0E), "deployedBlock": 1},
        ],
    },
    "Strategies": {"FixedSpreadLiquidationStrategy": {"address": addr(0x22), "deployedBlock": 1}},
    "FlashLiquidator": {"PCSFlashLiquidator": {"address": addr(0x0F), "deployedBlock": 1}},
    "IbTokenAdapters": [
        {
            "address": addr(0x21),
            "deployedBlock": 1,
            "collateralToken": addr(0x40),
            "rewardToken": addr(0x41),
            "treasuryFeeBps": "500",
            "treasuryAccount": addr(0x42),
        },
    ],
}


@pytest.fixture
def config_data() -> dict:
    return copy.deepcopy(NETWORK_CONFIG)


@pytest.fixture
def config_dir(tmp_path, config_data):
    (tmp_path / ".testnet.json").write_text(json.dumps(config_data))
    return tmp_path


@pytest.fixture
def config(config_dir) -> NetworkConfig:
    path = config_dir / ".testnet.json"
    return NetworkConfig(json.loads(path.read_text()), path=path)


@pytest.fixture
def w3() -> MagicMock:
    mock = MagicMock()
    mock.eth.chain_id = 97
    mock.eth.get_transaction_count.return_value = 7
    mock.eth.send_raw_transaction.return_value = b"\xaa" * 32
    mock.eth.wait_for_transaction_receipt.return_value = {"status": 1}
    return mock


@pytest.fixture
def account() -> MagicMock:
    acct = MagicMock()
    acct.address = DEPLOYER
    acct.sign_transaction.return_value = MagicMock(raw_transaction=b"signed")
    return acct


@pytest.fixture
def client(w3, account) -> ChainClient:
    return ChainClient(w3, account=account)
