"""Tests for create_client network resolution."""

from __future__ import annotations

import pytest

from stablecoin.data.client_factory import create_client, is_fork, resolve_rpc_url
from stablecoin.data.constants import FORK_DEPLOYER

FORK_URL = "https://rpc.tenderly.co/fork/1234-abcd"
# Hardhat's first default account key
HARDHAT_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"


class TestResolveRpcUrl:
    def test_argument_wins(self, monkeypatch) -> None:
        monkeypatch.setenv("BSC_TESTNET_RPC", "http://env")
        assert resolve_rpc_url("testnet", "http://arg") == "http://arg"

    def test_env_var(self, monkeypatch) -> None:
        monkeypatch.setenv("BSC_TESTNET_RPC", "http://env")
        assert resolve_rpc_url("testnet") == "http://env"

    def test_network_default(self, monkeypatch) -> None:
        monkeypatch.delenv("BSC_TESTNET_RPC", raising=False)
        assert resolve_rpc_url("testnet") == "https://data-seed-prebsc-1-s1.binance.org:8545"

    def test_mainnet_requires_url(self, monkeypatch) -> None:
        monkeypatch.delenv("BSC_MAINNET_RPC", raising=False)
        with pytest.raises(ValueError, match="No RPC URL"):
            resolve_rpc_url("mainnet")

    def test_unknown_network(self) -> None:
        with pytest.raises(ValueError, match="Unknown network"):
            resolve_rpc_url("kovan")


class TestCreateClient:
    def test_fork_uses_unlocked_deployer(self) -> None:
        assert is_fork(FORK_URL)
        client = create_client("mainnet", rpc_url=FORK_URL)
        assert client.address.lower() == FORK_DEPLOYER.lower()

    def test_signing_account_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("LOCAL_PRIVATE_KEY_1", HARDHAT_KEY)
        client = create_client("hardhat")
        assert client.address == "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

    def test_missing_private_key(self, monkeypatch) -> None:
        monkeypatch.delenv("LOCAL_PRIVATE_KEY_1", raising=False)
        with pytest.raises(ValueError, match="No private key"):
            create_client("hardhat")
