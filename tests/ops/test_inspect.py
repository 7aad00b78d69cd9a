"""Tests for reading live parameters into the offline models."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from stablecoin.data.chain_client import ChainClient
from stablecoin.ops.inspect import preview_stability_fee, read_flash_mint_module
from stablecoin.protocol.units import RAY, SECONDS_PER_YEAR, WAD, almost_equal

ONE_PERCENT_RATE = 1000000000315522921573372069


@pytest.fixture
def mock_client() -> MagicMock:
    client = MagicMock(spec=ChainClient)
    client.call.side_effect = lambda fn: fn.call()
    return client


def test_read_flash_mint_module(mock_client, config) -> None:
    contract = mock_client.contract.return_value
    contract.functions.stablecoin.return_value.call.return_value = "0x" + "04" * 20
    contract.functions.max.return_value.call.return_value = 10 * WAD
    contract.functions.feeRate.return_value.call.return_value = WAD // 10

    module = read_flash_mint_module(mock_client, config)

    mock_client.contract.assert_called_once_with("FlashMintModule", "0x" + "07" * 20)
    assert module.max_flash_loan("0x" + "04" * 20) == 10 * WAD
    assert module.flash_fee("0x" + "04" * 20, 10 * WAD) == WAD


def test_preview_stability_fee(mock_client, config) -> None:
    contract = mock_client.contract.return_value
    contract.functions.getStabilityFeeRate.return_value.call.return_value = ONE_PERCENT_RATE
    contract.functions.getDebtAccumulatedRate.return_value.call.return_value = RAY
    contract.functions.getLastAccumulationTime.return_value.call.return_value = 1_000
    contract.functions.globalStabilityFeeRate.return_value.call.return_value = 0

    preview = preview_stability_fee(mock_client, config, "ibBUSD", now=1_000 + SECONDS_PER_YEAR)

    assert almost_equal(10**25, preview.delta)
    assert preview.annual_rate == pytest.approx(0.01, rel=1e-6)


def test_preview_unknown_pool(mock_client, config) -> None:
    with pytest.raises(KeyError, match="Not found pool"):
        preview_stability_fee(mock_client, config, "ibETH", now=0)
