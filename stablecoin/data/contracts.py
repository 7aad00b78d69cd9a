"""Minimal ABIs for the protocol contracts the toolkit calls."""

from typing import Any


def _function(
    name: str,
    inputs: list[tuple[str, str]],
    outputs: list[tuple[str, str]] | None = None,
    mutability: str = "nonpayable",
) -> dict[str, Any]:
    return {
        "inputs": [{"name": n, "type": t} for n, t in inputs],
        "name": name,
        "outputs": [{"name": n, "type": t} for n, t in (outputs or [])],
        "stateMutability": mutability,
        "type": "function",
    }


def _view(name: str, inputs: list[tuple[str, str]], outputs: list[tuple[str, str]]) -> dict[str, Any]:
    return _function(name, inputs, outputs, mutability="view")


def _role_getter(role: str) -> dict[str, Any]:
    return _view(role, [], [("", "bytes32")])


_ACCESS_CONTROL = [
    _function("grantRole", [("role", "bytes32"), ("account", "address")]),
    _function("revokeRole", [("role", "bytes32"), ("account", "address")]),
    _view("hasRole", [("role", "bytes32"), ("account", "address")], [("", "bool")]),
]

# ---------------------------------------------------------------------------
# Access control and stablecoin
# ---------------------------------------------------------------------------

ACCESS_CONTROL_CONFIG_ABI = _ACCESS_CONTROL + [
    _role_getter("OWNER_ROLE"),
    _role_getter("GOV_ROLE"),
    _role_getter("PRICE_ORACLE_ROLE"),
    _role_getter("ADAPTER_ROLE"),
    _role_getter("LIQUIDATION_ENGINE_ROLE"),
    _role_getter("STABILITY_FEE_COLLECTOR_ROLE"),
    _role_getter("SHOW_STOPPER_ROLE"),
    _role_getter("POSITION_MANAGER_ROLE"),
    _role_getter("MINTABLE_ROLE"),
    _role_getter("BOOK_KEEPER_ROLE"),
    _role_getter("COLLATERAL_MANAGER_ROLE"),
]

ALPACA_STABLECOIN_ABI = _ACCESS_CONTROL + [_role_getter("MINTER_ROLE")]

AUTH_TOKEN_ADAPTER_ABI = _ACCESS_CONTROL + [_role_getter("WHITELISTED")]

# ---------------------------------------------------------------------------
# Core
# ---------------------------------------------------------------------------

BOOK_KEEPER_ABI = [
    _function("setTotalDebtCeiling", [("_totalDebtCeiling", "uint256")]),
    _view("totalDebtCeiling", [], [("", "uint256")]),
]

# Field order of the CollateralPool struct returned by collateralPools(bytes32)
COLLATERAL_POOL_STRUCT_FIELDS = [
    "totalDebtShare",
    "debtAccumulatedRate",
    "priceWithSafetyMargin",
    "debtCeiling",
    "debtFloor",
    "priceFeed",
    "liquidationRatio",
    "stabilityFeeRate",
    "lastAccumulationTime",
    "adapter",
    "closeFactorBps",
    "liquidatorIncentiveBps",
    "treasuryFeesBps",
    "strategy",
]

_COLLATERAL_POOL_STRUCT_TYPES = {
    "priceFeed": "address",
    "adapter": "address",
    "strategy": "address",
}

COLLATERAL_POOL_CONFIG_ABI = [
    _function(
        "initCollateralPool",
        [
            ("_collateralPoolId", "bytes32"),
            ("_debtCeiling", "uint256"),
            ("_debtFloor", "uint256"),
            ("_priceFeed", "address"),
            ("_liquidationRatio", "uint256"),
            ("_stabilityFeeRate", "uint256"),
            ("_adapter", "address"),
            ("_closeFactorBps", "uint256"),
            ("_liquidatorIncentiveBps", "uint256"),
            ("_treasuryFeesBps", "uint256"),
            ("_strategy", "address"),
        ],
    ),
    _function("setDebtCeiling", [("_collateralPoolId", "bytes32"), ("_debtCeiling", "uint256")]),
    _function("setDebtFloor", [("_collateralPoolId", "bytes32"), ("_debtFloor", "uint256")]),
    _function(
        "setLiquidationRatio", [("_collateralPoolId", "bytes32"), ("_data", "uint256")]
    ),
    _view(
        "collateralPools",
        [("", "bytes32")],
        [(f, _COLLATERAL_POOL_STRUCT_TYPES.get(f, "uint256")) for f in COLLATERAL_POOL_STRUCT_FIELDS],
    ),
    _view("getStabilityFeeRate", [("_collateralPoolId", "bytes32")], [("", "uint256")]),
    _view("getDebtAccumulatedRate", [("_collateralPoolId", "bytes32")], [("", "uint256")]),
    _view("getLastAccumulationTime", [("_collateralPoolId", "bytes32")], [("", "uint256")]),
]

STABILITY_FEE_COLLECTOR_ABI = [
    _view("globalStabilityFeeRate", [], [("", "uint256")]),
    _function("setGlobalStabilityFeeRate", [("_globalStabilityFeeRate", "uint256")]),
]

FLASH_MINT_MODULE_ABI = [
    _view("max", [], [("", "uint256")]),
    _view("feeRate", [], [("", "uint256")]),
    _view("stablecoin", [], [("", "address")]),
    _function("setMax", [("_data", "uint256")]),
    _function("setFeeRate", [("_data", "uint256")]),
]

STABLE_SWAP_MODULE_ABI = [
    _function("setFeeIn", [("_feeIn", "uint256")]),
    _function("setFeeOut", [("_feeOut", "uint256")]),
]

# ---------------------------------------------------------------------------
# Oracles and price feeds
# ---------------------------------------------------------------------------

BAND_PRICE_ORACLE_ABI = [
    _function("setTokenSymbol", [("_token", "address"), ("_tokenSymbol", "string")]),
]

VAULT_PRICE_ORACLE_ABI = [
    _function("setVault", [("_vault", "address"), ("_isOk", "bool")]),
]

STATIC_PRICE_FEED_ABI = [
    _function("setPrice", [("_price", "uint256")]),
]

STRICT_ALPACA_ORACLE_PRICE_FEED_ABI = [
    _function(
        "setPrimary", [("_alpacaOracle", "address"), ("_token0", "address"), ("_token1", "address")]
    ),
    _function(
        "setSecondary", [("_alpacaOracle", "address"), ("_token0", "address"), ("_token1", "address")]
    ),
]

IB_TOKEN_PRICE_FEED_ABI = [
    _function("setIbInBasePriceFeed", [("_ibInBasePriceFeed", "address")]),
    _function("setTimeDelay", [("_second", "uint256")]),
]

IB_TOKEN_ADAPTER_ABI = [
    _view("collateralToken", [], [("", "address")]),
    _view("rewardToken", [], [("", "address")]),
    _view("treasuryFeeBps", [], [("", "uint256")]),
    _view("treasuryAccount", [], [("", "address")]),
]

# ---------------------------------------------------------------------------
# Liquidation
# ---------------------------------------------------------------------------

FIXED_SPREAD_LIQUIDATION_STRATEGY_ABI = [
    _function("setFlashLendingEnabled", [("_flashLendingEnabled", "uint256")]),
]

PCS_FLASH_LIQUIDATOR_ABI = [
    _function("whitelist", [("_toBeWhitelisted", "address")]),
    _function("setBUSDAddress", [("_busd", "address")]),
]

# ---------------------------------------------------------------------------
# Governance
# ---------------------------------------------------------------------------

TIMELOCK_ABI = [
    _view("admin", [], [("", "address")]),
    _view("delay", [], [("", "uint256")]),
    _function(
        "queueTransaction",
        [
            ("target", "address"),
            ("value", "uint256"),
            ("signature", "string"),
            ("data", "bytes"),
            ("eta", "uint256"),
        ],
        [("", "bytes32")],
    ),
    _function(
        "executeTransaction",
        [
            ("target", "address"),
            ("value", "uint256"),
            ("signature", "string"),
            ("data", "bytes"),
            ("eta", "uint256"),
        ],
        [("", "bytes")],
        mutability="payable",
    ),
]

ABIS: dict[str, list[dict[str, Any]]] = {
    "AccessControlConfig": ACCESS_CONTROL_CONFIG_ABI,
    "AlpacaStablecoin": ALPACA_STABLECOIN_ABI,
    "AuthTokenAdapter": AUTH_TOKEN_ADAPTER_ABI,
    "BookKeeper": BOOK_KEEPER_ABI,
    "CollateralPoolConfig": COLLATERAL_POOL_CONFIG_ABI,
    "StabilityFeeCollector": STABILITY_FEE_COLLECTOR_ABI,
    "FlashMintModule": FLASH_MINT_MODULE_ABI,
    "StableSwapModule": STABLE_SWAP_MODULE_ABI,
    "BandPriceOracle": BAND_PRICE_ORACLE_ABI,
    "VaultPriceOracle": VAULT_PRICE_ORACLE_ABI,
    "StaticPriceFeed": STATIC_PRICE_FEED_ABI,
    "StrictAlpacaOraclePriceFeed": STRICT_ALPACA_ORACLE_PRICE_FEED_ABI,
    "IbTokenPriceFeed": IB_TOKEN_PRICE_FEED_ABI,
    "IbTokenAdapter": IB_TOKEN_ADAPTER_ABI,
    "FixedSpreadLiquidationStrategy": FIXED_SPREAD_LIQUIDATION_STRATEGY_ABI,
    "PCSFlashLiquidator": PCS_FLASH_LIQUIDATOR_ABI,
    "Timelock": TIMELOCK_ABI,
}
