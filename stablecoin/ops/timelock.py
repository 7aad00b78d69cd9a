"""Queue and execute Timelock transactions and record them to disk."""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Sequence

from eth_abi import encode

from stablecoin.data.chain_client import ChainClient
from stablecoin.data.config import NetworkConfig
from stablecoin.protocol.units import format_bytes32_string

logger = logging.getLogger(__name__)

DEFAULT_RESULTS_DIR = "timelock-results"

# dataclass field -> key in the recorded JSON
_JSON_KEYS = {
    "chain_id": "chainId",
    "info": "info",
    "queued_at": "queuedAt",
    "executed_at": "executedAt",
    "execution_transaction": "executionTransaction",
    "target": "target",
    "value": "value",
    "signature": "signature",
    "param_types": "paramTypes",
    "params": "params",
    "eta": "eta",
    "proposal_data": "proposalData",
}


@dataclass(frozen=True)
class TimelockTransaction:
    """A transaction queued in the Timelock.

    ``queued_at`` holds the queue transaction hash when the deployer is
    the Timelock admin; it is empty when the queue call was prepared as
    an OpMultiSig proposal, whose calldata is kept in ``proposal_data``.
    """

    chain_id: int
    info: str
    queued_at: str
    executed_at: str
    execution_transaction: str
    target: str
    value: str
    signature: str
    param_types: list[str]
    params: list[Any]
    eta: str
    proposal_data: str = ""

    def to_dict(self) -> dict[str, Any]:
        out = {_JSON_KEYS[k]: v for k, v in asdict(self).items()}
        out["params"] = [_jsonable(p) for p in self.params]
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimelockTransaction":
        if not isinstance(data, dict):
            raise ValueError(f"timelock transaction record must be an object, got {data!r}")
        missing = [
            key for name, key in _JSON_KEYS.items() if name != "proposal_data" and key not in data
        ]
        if missing:
            raise ValueError(f"timelock transaction record missing keys: {', '.join(missing)}")
        kwargs = {field: data[key] for field, key in _JSON_KEYS.items() if key in data}
        return cls(**kwargs)


def _jsonable(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def _coerce(abi_type: str, value: Any) -> Any:
    if abi_type == "bytes32" and isinstance(value, str):
        if value.startswith("0x") and len(value) == 66:
            return bytes.fromhex(value[2:])
        return format_bytes32_string(value)
    if abi_type.startswith(("uint", "int")) and isinstance(value, str):
        return int(value)
    return value


def encode_params(param_types: Sequence[str], params: Sequence[Any]) -> bytes:
    """ABI-encode Timelock call data (``defaultAbiCoder.encode`` equivalent)."""
    if len(param_types) != len(params):
        raise ValueError(f"expected {len(param_types)} params, got {len(params)}")
    return encode(list(param_types), [_coerce(t, p) for t, p in zip(param_types, params)])


def _execution_call(
    target: str, value: str, signature: str, param_types: Sequence[str], params: Sequence[Any], eta: str
) -> str:
    types = ", ".join(f"'{t}'" for t in param_types)
    values = ", ".join(repr(_jsonable(p)) for p in params)
    return (
        f"timelock.executeTransaction('{target}', '{value}', '{signature}', "
        f"encode([{types}], [{values}]), '{eta}')"
    )


def queue_transaction(
    client: ChainClient,
    config: NetworkConfig,
    info: str,
    target: str,
    value: str,
    signature: str,
    param_types: Sequence[str],
    params: Sequence[Any],
    eta: str,
    gas_price: int | None = None,
) -> TimelockTransaction:
    """Queue a call in the Timelock, directly or through the OpMultiSig."""
    logger.info("------------------")
    logger.info(">> Queue tx for: %s", info)

    timelock = client.contract("Timelock", config.timelock)
    admin = client.call(timelock.functions.admin())
    args = [target, int(value), signature, encode_params(param_types, params), int(eta)]

    queued_at = ""
    proposal_data = ""
    if admin.lower() == client.address.lower():
        queued_at = client.transact(timelock.functions.queueTransaction(*args), gas_price=gas_price)
    elif admin.lower() == config.op_multisig.lower():
        proposal_data = timelock.encode_abi("queueTransaction", args=args)
        logger.info(
            ">> Propose to OpMultiSig %s: to=%s value=0 data=%s",
            config.op_multisig,
            config.timelock,
            proposal_data,
        )
    else:
        raise RuntimeError("Timelock's admin is not deployer or OpMultiSig")

    logger.info(">> Done.")
    return TimelockTransaction(
        chain_id=client.chain_id,
        info=info,
        queued_at=queued_at,
        executed_at="",
        execution_transaction=_execution_call(target, value, signature, param_types, params, eta),
        target=target,
        value=str(value),
        signature=signature,
        param_types=list(param_types),
        params=list(params),
        eta=str(eta),
        proposal_data=proposal_data,
    )


def execute_transaction(
    client: ChainClient,
    config: NetworkConfig,
    tx: TimelockTransaction,
    gas_price: int | None = None,
) -> TimelockTransaction:
    """Execute a queued transaction once its eta has passed."""
    logger.info(">> Execute tx for: %s", tx.info)
    timelock = client.contract("Timelock", config.timelock)
    tx_hash = client.transact(
        timelock.functions.executeTransaction(
            tx.target,
            int(tx.value),
            tx.signature,
            encode_params(tx.param_types, tx.params),
            int(tx.eta),
        ),
        gas_price=gas_price,
        value=int(tx.value),
    )
    logger.info(">> Done.")
    return replace(tx, executed_at=tx_hash)


def write_transactions(
    name: str,
    txs: Sequence[TimelockTransaction],
    directory: str | os.PathLike | None = None,
) -> Path:
    """Write *txs* to ``<directory>/<unix ts>_<name>.json``."""
    out_dir = Path(directory or DEFAULT_RESULTS_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{int(time.time())}_{name}.json"
    path.write_text(json.dumps([tx.to_dict() for tx in txs], indent=2))
    logger.info(">> Write %d timelock transaction(s) to %s", len(txs), path)
    return path


def read_transactions(path: str | os.PathLike) -> list[TimelockTransaction]:
    data = json.loads(Path(path).read_text())
    if not isinstance(data, list):
        raise ValueError(f"{path} does not hold a list of timelock transactions")
    return [TimelockTransaction.from_dict(entry) for entry in data]
