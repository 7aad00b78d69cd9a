"""Registry of tagged parameter-setter tasks.

Each task is one governance or configuration call against a deployed
contract, run with values supplied on the command line (``name=value``)
and addresses taken from the network config.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from web3 import Web3

from stablecoin.data.chain_client import ChainClient
from stablecoin.data.config import NetworkConfig
from stablecoin.data.constants import AUSD, MINTER_ROLE, STABILITY_FEE_COLLECTOR_ROLE, WHITELISTED
from stablecoin.ops.timelock import queue_transaction, write_transactions
from stablecoin.protocol.collateral_pool import (
    INIT_COLLATERAL_POOL_SIGNATURE,
    INIT_COLLATERAL_POOL_TYPES,
    liquidation_ratio_from_collateral_factor,
)
from stablecoin.protocol.units import format_bytes32_string, parse_units

logger = logging.getLogger(__name__)

GWEI = 10**9
# Gas price used for per-pool debt ceiling updates
DEBT_CEILING_GAS_PRICE = 30 * GWEI
LIQUIDATION_RATIO_GAS_LIMIT = 1_000_000


# ---------------------------------------------------------------------------
# Parameter parsing
# ---------------------------------------------------------------------------

def parse_bool(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def parse_address(raw: str) -> str:
    if not Web3.is_address(raw):
        raise ValueError(f"not an address: {raw!r}")
    return Web3.to_checksum_address(raw)


def parse_list(raw: str) -> list[str]:
    items = [item.strip() for item in raw.split(",") if item.strip()]
    if not items:
        raise ValueError("empty list")
    return items


def wad(raw: str) -> int:
    return parse_units(raw, 18)


def rad(raw: str) -> int:
    return parse_units(raw, 45)


@dataclass(frozen=True)
class TaskParam:
    name: str
    parse: Callable[[str], Any] = str
    help: str = ""
    default: Any = None
    required: bool = True


@dataclass(frozen=True)
class ConfigTask:
    tag: str
    description: str
    params: tuple[TaskParam, ...]
    run: Callable[[ChainClient, NetworkConfig, dict[str, Any]], list[str]]


@dataclass
class TaskResult:
    tag: str
    tx_hashes: list[str] = field(default_factory=list)


TASKS: dict[str, ConfigTask] = {}


def register(tag: str, description: str, *params: TaskParam):
    """Decorator adding a task function to :data:`TASKS` under *tag*."""

    def decorator(fn: Callable[[ChainClient, NetworkConfig, dict[str, Any]], list[str]]):
        if tag in TASKS:
            raise ValueError(f"duplicate task tag: {tag}")
        TASKS[tag] = ConfigTask(tag=tag, description=description, params=tuple(params), run=fn)
        return fn

    return decorator


def get_task(tag: str) -> ConfigTask:
    try:
        return TASKS[tag]
    except KeyError:
        raise KeyError(f"Unknown task tag: {tag}") from None


def resolve_params(task: ConfigTask, raw: dict[str, str]) -> dict[str, Any]:
    """Parse raw ``name=value`` strings into typed task parameters."""
    known = {p.name for p in task.params}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"{task.tag}: unknown parameter(s): {', '.join(unknown)}")

    resolved: dict[str, Any] = {}
    for param in task.params:
        if param.name in raw:
            try:
                resolved[param.name] = param.parse(raw[param.name])
            except ValueError as exc:
                raise ValueError(f"{task.tag}: invalid {param.name}: {exc}") from exc
        elif param.default is not None or not param.required:
            resolved[param.name] = param.default
        else:
            raise ValueError(f"{task.tag}: missing parameter {param.name}")
    return resolved


def run_task(
    tag: str,
    client: ChainClient,
    config: NetworkConfig,
    raw_params: dict[str, str] | None = None,
) -> TaskResult:
    task = get_task(tag)
    params = resolve_params(task, raw_params or {})
    logger.info(">> %s %s", tag, ", ".join(f"{k}={v}" for k, v in params.items() if v is not None))
    tx_hashes = task.run(client, config, params)
    logger.info("✅ Done")
    return TaskResult(tag=tag, tx_hashes=tx_hashes)


# ---------------------------------------------------------------------------
# Access control
# ---------------------------------------------------------------------------

@register(
    "GrantStabilityFeeCollectorRole",
    "Grant STABILITY_FEE_COLLECTOR_ROLE to the configured StabilityFeeCollector",
)
def grant_stability_fee_collector_role(client, config, params):
    acc = client.contract("AccessControlConfig", config.address_of("AccessControlConfig"))
    role = client.call(getattr(acc.functions, STABILITY_FEE_COLLECTOR_ROLE)())
    collector = config.address_of("StabilityFeeCollector")
    logger.info(">> grant STABILITY_FEE_COLLECTOR_ROLE to %s", collector)
    return [client.transact(acc.functions.grantRole(role, collector))]


@register(
    "GrantMinterRole",
    "Grant MINTER_ROLE on the stablecoin",
    TaskParam("minter", parse_address, "account receiving the role"),
    TaskParam("stablecoin", parse_address, "stablecoin address (default: AUSD)", required=False),
)
def grant_minter_role(client, config, params):
    stablecoin = client.contract("AlpacaStablecoin", params["stablecoin"] or config.stablecoin)
    role = client.call(getattr(stablecoin.functions, MINTER_ROLE)())
    return [client.transact(stablecoin.functions.grantRole(role, params["minter"]))]


@register(
    "AuthTokenAdapterWhitelist",
    "Whitelist an account on an AuthTokenAdapter",
    TaskParam("adapter", parse_address, "AuthTokenAdapter address"),
    TaskParam("account", parse_address, "account to whitelist"),
)
def auth_token_adapter_whitelist(client, config, params):
    adapter = client.contract("AuthTokenAdapter", params["adapter"])
    role = client.call(getattr(adapter.functions, WHITELISTED)())
    return [client.transact(adapter.functions.grantRole(role, params["account"]))]


# ---------------------------------------------------------------------------
# Oracles and price feeds
# ---------------------------------------------------------------------------

@register(
    "SetTokenSymbol",
    "Map a token to its Band symbol on the BandPriceOracle",
    TaskParam("token", parse_address),
    TaskParam("symbol", str, "e.g. BUSD"),
)
def set_token_symbol(client, config, params):
    oracle = client.contract("BandPriceOracle", config.address_of("Oracle.BandPriceOracle"))
    return [client.transact(oracle.functions.setTokenSymbol(params["token"], params["symbol"]))]


@register(
    "SetVault",
    "Allow or disallow a vault on the VaultPriceOracle",
    TaskParam("vault", parse_address),
    TaskParam("ok", parse_bool, "true to allow", default=True),
)
def set_vault(client, config, params):
    oracle = client.contract("VaultPriceOracle", config.address_of("Oracle.VaultPriceOracle"))
    return [client.transact(oracle.functions.setVault(params["vault"], params["ok"]))]


@register(
    "SetPriceStatic",
    "Set the price of a StaticPriceFeed",
    TaskParam("feed", parse_address, "StaticPriceFeed address"),
    TaskParam("price", wad, "price in units, e.g. 1.0"),
)
def set_price_static(client, config, params):
    feed = client.contract("StaticPriceFeed", params["feed"])
    return [client.transact(feed.functions.setPrice(params["price"]))]


def _set_strict_source(client, config, params, fn_name: str) -> list[str]:
    feed = client.contract("StrictAlpacaOraclePriceFeed", params["feed"])
    oracle = params["oracle"] or config.address_of("Oracle.ChainLinkOracle")
    fn = getattr(feed.functions, fn_name)
    return [client.transact(fn(oracle, params["token0"], params["token1"]))]


_STRICT_SOURCE_PARAMS = (
    TaskParam("feed", parse_address, "StrictAlpacaOraclePriceFeed address"),
    TaskParam("token0", parse_address),
    TaskParam("token1", parse_address),
    TaskParam("oracle", parse_address, "price oracle (default: ChainLinkOracle)", required=False),
)


@register(
    "SetPrimary",
    "Set the primary source of a StrictAlpacaOraclePriceFeed",
    *_STRICT_SOURCE_PARAMS,
)
def set_primary(client, config, params):
    return _set_strict_source(client, config, params, "setPrimary")


@register(
    "SetSecondary",
    "Set the secondary source of a StrictAlpacaOraclePriceFeed",
    *_STRICT_SOURCE_PARAMS,
)
def set_secondary(client, config, params):
    return _set_strict_source(client, config, params, "setSecondary")


@register(
    "SetIbInBasePriceFeed",
    "Set the ib-in-base price feed of a named IbTokenPriceFeed",
    TaskParam("feed", str, "IbTokenPriceFeed name, e.g. ibBUSD-USD"),
    TaskParam("price_feed", parse_address, "new ibInBase price feed"),
)
def set_ib_in_base_price_feed(client, config, params):
    entry = config.ib_token_price_feed(params["feed"])
    feed = client.contract("IbTokenPriceFeed", entry["address"])
    logger.info(">> %s set ibInBasePriceFeed: %s", params["feed"], params["price_feed"])
    return [client.transact(feed.functions.setIbInBasePriceFeed(params["price_feed"]))]


@register(
    "SetTimeDelay",
    "Set the time delay of a named IbTokenPriceFeed",
    TaskParam("feed", str, "IbTokenPriceFeed name, e.g. ibBUSD-USD"),
    TaskParam("delay", int, "seconds", default=900),
)
def set_time_delay(client, config, params):
    entry = config.ib_token_price_feed(params["feed"])
    feed = client.contract("IbTokenPriceFeed", entry["address"])
    logger.info(">> %s ibTokenPriceFeed set time delay: %s", params["feed"], params["delay"])
    return [client.transact(feed.functions.setTimeDelay(params["delay"]))]


# ---------------------------------------------------------------------------
# Liquidation
# ---------------------------------------------------------------------------

@register(
    "PCSFlashLiquidatorWhitelist",
    "Whitelist an account on the PCSFlashLiquidator",
    TaskParam("account", parse_address, "default: AUSD stablecoin adapter", required=False),
)
def pcs_flash_liquidator_whitelist(client, config, params):
    liquidator = client.contract(
        "PCSFlashLiquidator", config.address_of("FlashLiquidator.PCSFlashLiquidator")
    )
    account = params["account"] or config.address_of(f"StablecoinAdapters.{AUSD}")
    return [client.transact(liquidator.functions.whitelist(account))]


@register(
    "PCSFlashLiquidatorSetBUSDAddress",
    "Set the BUSD address used by the PCSFlashLiquidator",
    TaskParam("busd", parse_address),
)
def pcs_flash_liquidator_set_busd_address(client, config, params):
    liquidator = client.contract(
        "PCSFlashLiquidator", config.address_of("FlashLiquidator.PCSFlashLiquidator")
    )
    return [client.transact(liquidator.functions.setBUSDAddress(params["busd"]))]


@register(
    "SetFlashLendingEnabled",
    "Enable or disable flash lending on the FixedSpreadLiquidationStrategy",
    TaskParam("enabled", int, "1 to enable, 0 to disable", default=1),
)
def set_flash_lending_enabled(client, config, params):
    if params["enabled"] not in (0, 1):
        raise ValueError("enabled must be 0 or 1")
    strategy = client.contract(
        "FixedSpreadLiquidationStrategy",
        config.address_of("Strategies.FixedSpreadLiquidationStrategy"),
    )
    return [client.transact(strategy.functions.setFlashLendingEnabled(params["enabled"]))]


# ---------------------------------------------------------------------------
# Debt limits and collateral pools
# ---------------------------------------------------------------------------

@register(
    "SetTotalDebtCeiling",
    "Set the BookKeeper total debt ceiling",
    TaskParam("amount", rad, "AUSD, e.g. 30000000"),
)
def set_total_debt_ceiling(client, config, params):
    book_keeper = client.contract("BookKeeper", config.address_of("BookKeeper"))
    logger.info(">> set TOTAL_DEBT_CEILING to %s", params["amount"])
    return [client.transact(book_keeper.functions.setTotalDebtCeiling(params["amount"]))]


def _collateral_pool_config(client, config):
    return client.contract("CollateralPoolConfig", config.address_of("CollateralPoolConfig"))


@register(
    "AddCollateralPool",
    "Initialise a collateral pool from its network config entry",
    TaskParam("pool", str, "collateral pool id, e.g. ibBUSD"),
)
def add_collateral_pool(client, config, params):
    pool = config.collateral_pool(params["pool"])
    pool_config = _collateral_pool_config(client, config)
    logger.info(">> initCollateralPool %s", pool.collateral_pool_id)
    return [client.transact(pool_config.functions.initCollateralPool(*pool.init_args()))]


@register(
    "SetDebtCeiling",
    "Set the debt ceiling of collateral pools and update the network config file",
    TaskParam("pools", parse_list, "comma separated pool ids"),
    TaskParam("amount", rad, "AUSD"),
)
def set_debt_ceiling(client, config, params):
    pool_config = _collateral_pool_config(client, config)
    # every pool must exist before the first transaction goes out
    for name in params["pools"]:
        config.collateral_pool(name)

    hashes = []
    for name in params["pools"]:
        tx_hash = client.transact(
            pool_config.functions.setDebtCeiling(format_bytes32_string(name), params["amount"]),
            gas_price=DEBT_CEILING_GAS_PRICE,
        )
        logger.info("name : %s tx hash: %s", name, tx_hash)
        config.set_pool_field(name, "debtCeiling", str(params["amount"]))
        hashes.append(tx_hash)
    config.save()
    return hashes


@register(
    "SetDebtFloor",
    "Set the debt floor of a collateral pool",
    TaskParam("pool", str),
    TaskParam("amount", rad, "AUSD"),
)
def set_debt_floor(client, config, params):
    pool = config.collateral_pool(params["pool"])
    pool_config = _collateral_pool_config(client, config)
    return [
        client.transact(pool_config.functions.setDebtFloor(pool.pool_id_bytes, params["amount"]))
    ]


@register(
    "SetLiquidationRatio",
    "Set the liquidation ratio of a collateral pool from its collateral factor",
    TaskParam("pool", str),
    TaskParam("collateral_factor", str, "e.g. 0.90"),
)
def set_liquidation_ratio(client, config, params):
    ratio = liquidation_ratio_from_collateral_factor(params["collateral_factor"])
    pool_config = _collateral_pool_config(client, config)
    logger.info(">> setLiquidationRatio to %s", ratio)
    return [
        client.transact(
            pool_config.functions.setLiquidationRatio(
                format_bytes32_string(params["pool"]), ratio
            ),
            gas_limit=LIQUIDATION_RATIO_GAS_LIMIT,
        )
    ]


@register(
    "TimelockAddCollateralPools",
    "Queue initCollateralPool calls in the Timelock and record them",
    TaskParam("pools", parse_list, "comma separated pool ids"),
    TaskParam("eta", int, "unix timestamp the calls become executable"),
    TaskParam("output_dir", str, "where the queued transactions are written", required=False),
)
def timelock_add_collateral_pools(client, config, params):
    target = config.address_of("CollateralPoolConfig")
    queued = []
    for name in params["pools"]:
        pool = config.collateral_pool(name)
        queued.append(
            queue_transaction(
                client,
                config,
                info=f"add collateral pool #{pool.collateral_pool_id}",
                target=target,
                value="0",
                signature=INIT_COLLATERAL_POOL_SIGNATURE,
                param_types=INIT_COLLATERAL_POOL_TYPES,
                params=pool.init_args(),
                eta=str(params["eta"]),
            )
        )
    write_transactions("add-collateral-pool", queued, params["output_dir"])
    return [tx.queued_at for tx in queued if tx.queued_at]


# ---------------------------------------------------------------------------
# Stable swap
# ---------------------------------------------------------------------------

@register(
    "SetFeeIn",
    "Set the StableSwapModule fee on swaps into the stablecoin",
    TaskParam("fee", wad, "fraction, e.g. 0.001"),
)
def set_fee_in(client, config, params):
    module = client.contract("StableSwapModule", config.address_of("StableSwapModule"))
    return [client.transact(module.functions.setFeeIn(params["fee"]))]


@register(
    "SetFeeOut",
    "Set the StableSwapModule fee on swaps out of the stablecoin",
    TaskParam("fee", wad, "fraction, e.g. 0.001"),
)
def set_fee_out(client, config, params):
    module = client.contract("StableSwapModule", config.address_of("StableSwapModule"))
    return [client.transact(module.functions.setFeeOut(params["fee"]))]
