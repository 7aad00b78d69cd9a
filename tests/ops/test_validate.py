"""Tests for network config validation against on-chain values."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from stablecoin.data.chain_client import ChainClient
from stablecoin.ops.validate import (
    ValidationReport,
    validate_all,
    validate_collateral_pools,
    validate_ib_token_adapters,
)


def _struct(entry: dict) -> tuple:
    """On-chain CollateralPool struct for a config entry."""
    return (
        0,  # totalDebtShare
        10**27,  # debtAccumulatedRate
        0,  # priceWithSafetyMargin
        int(entry["debtCeiling"]),
        int(entry["debtFloor"]),
        entry["priceFeed"].upper().replace("0X", "0x"),
        int(entry["liquidationRatio"]),
        int(entry["stabilityFeeRate"]),
        0,  # lastAccumulationTime
        entry["adapter"],
        entry["closeFactorBps"],
        entry["liquidatorIncentiveBps"],
        entry["treasuryFeesBps"],
        entry["strategy"],
    )


@pytest.fixture
def mock_client() -> MagicMock:
    client = MagicMock(spec=ChainClient)
    client.call.side_effect = lambda fn: fn.call()
    return client


@pytest.fixture
def pool_config(mock_client: MagicMock, config_data: dict) -> MagicMock:
    contract = mock_client.contract.return_value
    entries = {e["collateralPoolId"]: e for e in config_data["CollateralPoolConfig"]["collateralPools"]}

    def collateral_pools(pool_id: bytes) -> MagicMock:
        fn = MagicMock()
        fn.call.return_value = _struct(entries[pool_id.rstrip(b"\x00").decode()])
        return fn

    contract.functions.collateralPools.side_effect = collateral_pools
    return contract


class TestValidationReport:
    def test_ok(self) -> None:
        assert ValidationReport({"a": [], "b": []}).ok
        assert not ValidationReport({"a": ["x mis-config"]}).ok

    def test_merge(self) -> None:
        merged = ValidationReport({"a": []}).merge(ValidationReport({"b": ["bad"]}))
        assert merged.problems == {"a": [], "b": ["bad"]}
        assert not merged.ok


class TestValidateCollateralPools:
    def test_matching_pools(self, mock_client, config, pool_config, caplog) -> None:
        with caplog.at_level("INFO"):
            report = validate_collateral_pools(mock_client, config)
        assert report.ok
        assert set(report.problems) == {"ibBUSD", "ibWBNB"}
        assert "> ✅ done validated ibBUSD, no problem found" in caplog.text

    def test_mismatch_reported(self, mock_client, config, pool_config, caplog) -> None:
        config.set_pool_field("ibWBNB", "debtFloor", "1")
        with caplog.at_level("INFO"):
            report = validate_collateral_pools(mock_client, config)
        assert report.problems["ibWBNB"] == ["debtFloor mis-config"]
        assert report.problems["ibBUSD"] == []
        assert "> ❌ some problem found in ibWBNB, please double check" in caplog.text

    def test_rpc_failure_is_per_pool(self, mock_client, config, pool_config) -> None:
        original = pool_config.functions.collateralPools.side_effect

        def flaky(pool_id: bytes) -> MagicMock:
            if pool_id.startswith(b"ibBUSD"):
                raise ConnectionError("timeout")
            return original(pool_id)

        pool_config.functions.collateralPools.side_effect = flaky
        report = validate_collateral_pools(mock_client, config)
        assert report.problems["ibBUSD"] == ["rpc error: timeout"]
        assert report.problems["ibWBNB"] == []


class TestValidateIbTokenAdapters:
    @pytest.fixture
    def adapter(self, mock_client: MagicMock, config_data: dict) -> MagicMock:
        contract = mock_client.contract.return_value
        entry = config_data["IbTokenAdapters"][0]
        contract.functions.collateralToken.return_value.call.return_value = entry["collateralToken"]
        contract.functions.rewardToken.return_value.call.return_value = entry["rewardToken"]
        contract.functions.treasuryFeeBps.return_value.call.return_value = 500
        contract.functions.treasuryAccount.return_value.call.return_value = entry["treasuryAccount"]
        return contract

    def test_matching_adapter(self, mock_client, config, adapter) -> None:
        report = validate_ib_token_adapters(mock_client, config)
        assert report.ok

    def test_wrong_treasury_fee(self, mock_client, config, adapter) -> None:
        adapter.functions.treasuryFeeBps.return_value.call.return_value = 1000
        report = validate_ib_token_adapters(mock_client, config)
        (problems,) = report.problems.values()
        assert problems == ["treasuryFeeBps mis-config"]

    def test_validate_all(self, mock_client, config, adapter, pool_config) -> None:
        report = validate_all(mock_client, config)
        assert len(report.problems) == 3
        assert report.ok
