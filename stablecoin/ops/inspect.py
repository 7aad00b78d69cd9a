"""Read live protocol parameters into the offline models."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from stablecoin.data.chain_client import ChainClient
from stablecoin.data.config import NetworkConfig
from stablecoin.protocol.flash_mint import FlashMintModule
from stablecoin.protocol.stability_fee import annual_rate, debt_accumulated_rate_delta
from stablecoin.protocol.units import format_bytes32_string

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StabilityFeePreview:
    """What ``StabilityFeeCollector.collect(pool)`` would accrue at ``now``."""

    collateral_pool_id: str
    stability_fee_rate: int  # [ray], per second
    global_stability_fee_rate: int  # [ray], per second
    debt_accumulated_rate: int  # [ray]
    last_accumulation_time: int
    now: int
    delta: int  # [ray]

    @property
    def annual_rate(self) -> float:
        return annual_rate(self.stability_fee_rate + self.global_stability_fee_rate)


def read_flash_mint_module(client: ChainClient, config: NetworkConfig) -> FlashMintModule:
    module = client.contract("FlashMintModule", config.address_of("FlashMintModule"))
    return FlashMintModule(
        stablecoin=client.call(module.functions.stablecoin()),
        max=client.call(module.functions.max()),
        fee_rate=client.call(module.functions.feeRate()),
    )


def preview_stability_fee(
    client: ChainClient,
    config: NetworkConfig,
    pool_name: str,
    now: int | None = None,
) -> StabilityFeePreview:
    config.collateral_pool(pool_name)
    pool_id = format_bytes32_string(pool_name)
    pool_config = client.contract("CollateralPoolConfig", config.address_of("CollateralPoolConfig"))
    collector = client.contract("StabilityFeeCollector", config.address_of("StabilityFeeCollector"))

    rate = client.call(pool_config.functions.getStabilityFeeRate(pool_id))
    accumulated = client.call(pool_config.functions.getDebtAccumulatedRate(pool_id))
    last = client.call(pool_config.functions.getLastAccumulationTime(pool_id))
    global_rate = client.call(collector.functions.globalStabilityFeeRate())

    now = int(time.time()) if now is None else now
    delta = debt_accumulated_rate_delta(accumulated, rate, last, now, global_rate)
    logger.info(">> %s debtAccumulatedRate delta at %d: %d", pool_name, now, delta)
    return StabilityFeePreview(
        collateral_pool_id=pool_name,
        stability_fee_rate=rate,
        global_stability_fee_rate=global_rate,
        debt_accumulated_rate=accumulated,
        last_accumulation_time=last,
        now=now,
        delta=delta,
    )
