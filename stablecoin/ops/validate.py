"""Compare on-chain collateral pools and ib-token adapters with the network config."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from stablecoin.data.chain_client import ChainClient
from stablecoin.data.config import NetworkConfig
from stablecoin.data.contracts import COLLATERAL_POOL_STRUCT_FIELDS
from stablecoin.protocol.collateral_pool import CollateralPool, compare_pools

logger = logging.getLogger(__name__)

_ADAPTER_FIELDS = ("collateralToken", "rewardToken", "treasuryFeeBps", "treasuryAccount")


@dataclass
class ValidationReport:
    """Problems found per validated entry (pool id or adapter address)."""

    problems: dict[str, list[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not any(self.problems.values())

    def merge(self, other: "ValidationReport") -> "ValidationReport":
        return ValidationReport(problems={**self.problems, **other.problems})


def _log_result(entry_id: str, problems: list[str]) -> None:
    if problems:
        logger.warning("> ❌ some problem found in %s, please double check", entry_id)
        for problem in problems:
            logger.warning("    %s", problem)
    else:
        logger.info("> ✅ done validated %s, no problem found", entry_id)


def _same(expected, actual) -> bool:
    if isinstance(actual, str):
        return str(expected).lower() == actual.lower()
    return int(expected) == int(actual)


def read_collateral_pool(client: ChainClient, config: NetworkConfig, expected: CollateralPool) -> CollateralPool:
    """Read the on-chain parameters of the pool with *expected*'s id."""
    pool_config = client.contract("CollateralPoolConfig", config.address_of("CollateralPoolConfig"))
    raw = client.call(pool_config.functions.collateralPools(expected.pool_id_bytes))
    values = dict(zip(COLLATERAL_POOL_STRUCT_FIELDS, raw))
    return CollateralPool(
        collateral_pool_id=expected.collateral_pool_id,
        debt_ceiling=values["debtCeiling"],
        debt_floor=values["debtFloor"],
        price_feed=values["priceFeed"],
        liquidation_ratio=values["liquidationRatio"],
        stability_fee_rate=values["stabilityFeeRate"],
        adapter=values["adapter"],
        close_factor_bps=values["closeFactorBps"],
        liquidator_incentive_bps=values["liquidatorIncentiveBps"],
        treasury_fees_bps=values["treasuryFeesBps"],
        strategy=values["strategy"],
    )


def validate_collateral_pools(client: ChainClient, config: NetworkConfig) -> ValidationReport:
    logger.info("=== validate collateralPool config ===")
    report = ValidationReport()
    for expected in config.collateral_pools:
        pool_id = expected.collateral_pool_id
        try:
            problems = compare_pools(expected, read_collateral_pool(client, config, expected))
        except Exception as exc:
            logger.warning("RPC call failed for collateral pool %s", pool_id, exc_info=True)
            problems = [f"rpc error: {exc}"]
        _log_result(pool_id, problems)
        report.problems[pool_id] = problems
    return report


def validate_ib_token_adapters(client: ChainClient, config: NetworkConfig) -> ValidationReport:
    logger.info("=== validate ibTokenAdapter config ===")
    report = ValidationReport()
    for entry in config.ib_token_adapters:
        address = entry.get("address", "")
        problems: list[str] = []
        try:
            adapter = client.contract("IbTokenAdapter", address)
            for name in _ADAPTER_FIELDS:
                if name not in entry:
                    problems.append(f"{name} missing from config")
                    continue
                actual = client.call(getattr(adapter.functions, name)())
                if not _same(entry[name], actual):
                    problems.append(f"{name} mis-config")
        except Exception as exc:
            logger.warning("RPC call failed for ibTokenAdapter %s", address, exc_info=True)
            problems.append(f"rpc error: {exc}")
        _log_result(address, problems)
        report.problems[address] = problems
    return report


def validate_all(client: ChainClient, config: NetworkConfig) -> ValidationReport:
    return validate_ib_token_adapters(client, config).merge(
        validate_collateral_pools(client, config)
    )
