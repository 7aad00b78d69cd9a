"""Collateral pool risk parameters held by CollateralPoolConfig."""

from dataclasses import dataclass, fields
from typing import Any

from stablecoin.protocol.units import RAY, format_bytes32_string, parse_units

INIT_COLLATERAL_POOL_SIGNATURE = (
    "initCollateralPool(bytes32,uint256,uint256,address,uint256,uint256,"
    "address,uint256,uint256,uint256,address)"
)
INIT_COLLATERAL_POOL_TYPES = [
    "bytes32",
    "uint256",
    "uint256",
    "address",
    "uint256",
    "uint256",
    "address",
    "uint256",
    "uint256",
    "uint256",
    "address",
]

# dataclass field -> key used in the network config JSON and validation messages
_CONFIG_KEYS = {
    "collateral_pool_id": "collateralPoolId",
    "debt_ceiling": "debtCeiling",
    "debt_floor": "debtFloor",
    "price_feed": "priceFeed",
    "liquidation_ratio": "liquidationRatio",
    "stability_fee_rate": "stabilityFeeRate",
    "adapter": "adapter",
    "close_factor_bps": "closeFactorBps",
    "liquidator_incentive_bps": "liquidatorIncentiveBps",
    "treasury_fees_bps": "treasuryFeesBps",
    "strategy": "strategy",
}


@dataclass(frozen=True)
class CollateralPool:
    """Parameters of one collateral pool."""

    collateral_pool_id: str
    debt_ceiling: int  # [rad]
    debt_floor: int  # [rad]
    price_feed: str
    liquidation_ratio: int  # [ray], 1 / collateral factor
    stability_fee_rate: int  # [ray], per second
    adapter: str
    close_factor_bps: int
    liquidator_incentive_bps: int  # 10250 = 2.5% incentive
    treasury_fees_bps: int
    strategy: str

    @classmethod
    def from_config(cls, entry: dict[str, Any]) -> "CollateralPool":
        """Parse a ``CollateralPoolConfig.collateralPools`` entry of the network config."""
        missing = [key for key in _CONFIG_KEYS.values() if key not in entry]
        if missing:
            raise ValueError(f"collateral pool entry missing keys: {', '.join(missing)}")
        return cls(
            collateral_pool_id=str(entry["collateralPoolId"]),
            debt_ceiling=int(entry["debtCeiling"]),
            debt_floor=int(entry["debtFloor"]),
            price_feed=entry["priceFeed"],
            liquidation_ratio=int(entry["liquidationRatio"]),
            stability_fee_rate=int(entry["stabilityFeeRate"]),
            adapter=entry["adapter"],
            close_factor_bps=int(entry["closeFactorBps"]),
            liquidator_incentive_bps=int(entry["liquidatorIncentiveBps"]),
            treasury_fees_bps=int(entry["treasuryFeesBps"]),
            strategy=entry["strategy"],
        )

    def to_config(self) -> dict[str, Any]:
        """Inverse of :meth:`from_config`; big numbers are kept as strings."""
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in ("debt_ceiling", "debt_floor", "liquidation_ratio", "stability_fee_rate"):
                value = str(value)
            out[_CONFIG_KEYS[f.name]] = value
        return out

    @property
    def pool_id_bytes(self) -> bytes:
        return format_bytes32_string(self.collateral_pool_id)

    def init_args(self) -> list[Any]:
        """Positional arguments for ``CollateralPoolConfig.initCollateralPool``."""
        return [
            self.pool_id_bytes,
            self.debt_ceiling,
            self.debt_floor,
            self.price_feed,
            self.liquidation_ratio,
            self.stability_fee_rate,
            self.adapter,
            self.close_factor_bps,
            self.liquidator_incentive_bps,
            self.treasury_fees_bps,
            self.strategy,
        ]


def liquidation_ratio_from_collateral_factor(collateral_factor: str | float) -> int:
    """Liquidation ratio (ray) for a collateral factor: ``0.90 -> 1.111... ray``."""
    factor = parse_units(collateral_factor, 27)
    if factor == 0:
        raise ValueError("collateral factor must be positive")
    return RAY * RAY // factor


def compare_pools(expected: CollateralPool, actual: CollateralPool) -> list[str]:
    """List ``"<field> mis-config"`` for every parameter that differs.

    Addresses are compared case-insensitively; the pool id is not compared.
    """
    problems = []
    for f in fields(CollateralPool):
        if f.name == "collateral_pool_id":
            continue
        want, got = getattr(expected, f.name), getattr(actual, f.name)
        if isinstance(want, str) and isinstance(got, str):
            same = want.lower() == got.lower()
        else:
            same = want == got
        if not same:
            problems.append(f"{_CONFIG_KEYS[f.name]} mis-config")
    return problems
