"""``stablecoin-ops`` command line."""

from __future__ import annotations

import argparse
import logging
import sys

from stablecoin.data.client_factory import create_client
from stablecoin.data.config import load_config
from stablecoin.data.constants import DEFAULT_NETWORK, NETWORKS
from stablecoin.ops.inspect import preview_stability_fee
from stablecoin.ops.tasks import TASKS, run_task
from stablecoin.ops.timelock import execute_transaction, read_transactions, write_transactions
from stablecoin.ops.validate import validate_all
from stablecoin.protocol.calculators import create_calculator, cut_from_percent
from stablecoin.protocol.stability_fee import accumulated_rate, annual_rate, per_second_rate
from stablecoin.protocol.units import RAY, parse_units

logger = logging.getLogger(__name__)


def _parse_assignment(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected name=value, got {raw!r}")
    return name.strip(), value.strip()


def _add_network_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--network",
        choices=sorted(NETWORKS),
        default=DEFAULT_NETWORK,
        help=f"target network (default: {DEFAULT_NETWORK})",
    )
    parser.add_argument("--rpc-url", help="JSON-RPC URL (default: from the network's env var)")
    parser.add_argument(
        "--config-dir", help="directory holding .mainnet.json / .testnet.json"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stablecoin-ops",
        description="Configure and inspect a deployed AUSD stablecoin protocol",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (default: INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="list registered task tags")

    run = sub.add_parser("run", help="run a tagged setter task")
    run.add_argument("tag", help="task tag, see `list`")
    run.add_argument(
        "-p",
        "--param",
        action="append",
        default=[],
        type=_parse_assignment,
        metavar="NAME=VALUE",
        help="task parameter (repeatable)",
    )
    _add_network_args(run)

    validate = sub.add_parser("validate", help="compare on-chain parameters with the network config")
    _add_network_args(validate)

    execute = sub.add_parser("execute", help="execute timelock transactions recorded in a file")
    execute.add_argument("file", help="JSON file written by TimelockAddCollateralPools")
    execute.add_argument(
        "--output-dir", help="where the executed records are written (default: timelock-results)"
    )
    _add_network_args(execute)

    fee_preview = sub.add_parser("fee-preview", help="preview stability fee accrual for a pool")
    fee_preview.add_argument("pool", help="collateral pool id, e.g. ibBUSD")
    _add_network_args(fee_preview)

    price = sub.add_parser("price", help="offline auction price decay calculation")
    price.add_argument("kind", choices=["linear", "exponential", "stairstep"])
    price.add_argument("--top", required=True, help="starting price in units, e.g. 50")
    price.add_argument("--elapsed", type=int, required=True, help="seconds since auction start")
    price.add_argument("--tau", type=int, default=0, help="linear: seconds to reach zero")
    price.add_argument(
        "--cut-percent", default="0", help="exponential/stairstep: decrease per step in percent"
    )
    price.add_argument("--step", type=int, default=1, help="stairstep: seconds per step")

    fee = sub.add_parser("fee", help="offline stability fee rate conversion")
    group = fee.add_mutually_exclusive_group(required=True)
    group.add_argument("--annual", help="annual rate as a fraction, e.g. 0.01")
    group.add_argument("--rate", type=int, help="per-second rate in ray")
    fee.add_argument("--seconds", type=int, default=0, help="also show accrual over this many seconds")

    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _cmd_list(args: argparse.Namespace) -> int:
    for tag in sorted(TASKS):
        task = TASKS[tag]
        params = " ".join(
            f"{p.name}=" if p.required and p.default is None else f"[{p.name}=]" for p in task.params
        )
        print(f"{tag:36s} {task.description}")
        if params:
            print(f"{'':36s}   {params}")
    return 0


def _connect(args: argparse.Namespace):
    config = load_config(args.network, args.config_dir)
    client = create_client(args.network, rpc_url=args.rpc_url)
    return client, config


def _cmd_run(args: argparse.Namespace) -> int:
    client, config = _connect(args)
    result = run_task(args.tag, client, config, dict(args.param))
    for tx_hash in result.tx_hashes:
        print(tx_hash)
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    client, config = _connect(args)
    report = validate_all(client, config)
    return 0 if report.ok else 1


def _cmd_execute(args: argparse.Namespace) -> int:
    client, config = _connect(args)
    records = read_transactions(args.file)
    done = []
    try:
        for tx in records:
            if tx.executed_at:
                logger.info(">> Skip %s, already executed in %s", tx.info, tx.executed_at)
                done.append(tx)
                continue
            done.append(execute_transaction(client, config, tx))
    finally:
        # records not reached keep an empty executed_at so the file can be re-run
        write_transactions("execute", done + records[len(done):], args.output_dir)
    return 0


def _cmd_fee_preview(args: argparse.Namespace) -> int:
    client, config = _connect(args)
    preview = preview_stability_fee(client, config, args.pool)
    print(f"stabilityFeeRate        {preview.stability_fee_rate}")
    print(f"globalStabilityFeeRate  {preview.global_stability_fee_rate}")
    print(f"annual rate             {preview.annual_rate:.6%}")
    print(f"debtAccumulatedRate     {preview.debt_accumulated_rate}")
    print(f"pending delta           {preview.delta}")
    return 0


def _cmd_price(args: argparse.Namespace) -> int:
    top = parse_units(args.top, 18)
    if args.kind == "linear":
        calculator = create_calculator("linear", tau=args.tau)
    elif args.kind == "exponential":
        calculator = create_calculator("exponential", cut=cut_from_percent(args.cut_percent))
    else:
        calculator = create_calculator(
            "stairstep", cut=cut_from_percent(args.cut_percent), step=args.step
        )
    print(calculator.price(top, args.elapsed))
    return 0


def _cmd_fee(args: argparse.Namespace) -> int:
    rate = per_second_rate(args.annual) if args.annual is not None else args.rate
    print(f"per-second rate  {rate}")
    print(f"annual rate      {annual_rate(rate):.6%}")
    if args.seconds:
        print(f"accumulated      {accumulated_rate(RAY, rate, 0, args.seconds)}")
    return 0


_COMMANDS = {
    "list": _cmd_list,
    "run": _cmd_run,
    "validate": _cmd_validate,
    "execute": _cmd_execute,
    "fee-preview": _cmd_fee_preview,
    "price": _cmd_price,
    "fee": _cmd_fee,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return _COMMANDS[args.command](args)
    except (ValueError, KeyError, RuntimeError, FileNotFoundError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
