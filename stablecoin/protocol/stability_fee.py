"""Stability fee accrual, as performed by StabilityFeeCollector.collect.

Each collateral pool carries a per-second stability fee rate (ray).  On
collect the pool's debt accumulated rate is compounded by
``(global + pool_rate) ** elapsed`` and the increase is handed to the
BookKeeper, which mints it to the stability fee recipient.
"""

from decimal import Decimal, localcontext

import numpy as np
import pandas as pd

from stablecoin.protocol.units import RAY, SECONDS_PER_YEAR, rmul, rpow


def accumulated_rate(
    previous_rate: int,
    stability_fee_rate: int,
    last_accumulation_time: int,
    now: int,
    global_stability_fee_rate: int = 0,
) -> int:
    """New debt accumulated rate (ray) after compounding since the last collect."""
    if now < last_accumulation_time:
        raise ValueError("StabilityFeeCollector/invalid-now")
    elapsed = now - last_accumulation_time
    growth = rpow(global_stability_fee_rate + stability_fee_rate, elapsed, RAY)
    return rmul(growth, previous_rate)


def debt_accumulated_rate_delta(
    previous_rate: int,
    stability_fee_rate: int,
    last_accumulation_time: int,
    now: int,
    global_stability_fee_rate: int = 0,
) -> int:
    """Rate increase passed to ``BookKeeper.accrueStabilityFee``.

    Negative when the combined rate is below one ray (negative interest).
    """
    new_rate = accumulated_rate(
        previous_rate,
        stability_fee_rate,
        last_accumulation_time,
        now,
        global_stability_fee_rate,
    )
    return new_rate - previous_rate


def per_second_rate(annual_rate: float | str) -> int:
    """Per-second ray rate that compounds to ``1 + annual_rate`` over a year.

    ``per_second_rate("0.01")`` is ``1000000000315522921573372069``.
    """
    with localcontext() as ctx:
        ctx.prec = 60
        growth = Decimal(1) + Decimal(str(annual_rate))
        if growth <= 0:
            raise ValueError(f"annual rate must be above -100%, got {annual_rate}")
        per_second = (growth.ln() / SECONDS_PER_YEAR).exp()
        return int(per_second * RAY)


def annual_rate(stability_fee_rate: int) -> float:
    """Annualized rate implied by a per-second ray rate (e.g. 0.01 = 1%)."""
    return rpow(stability_fee_rate, SECONDS_PER_YEAR, RAY) / RAY - 1.0


def accrual_schedule(
    stability_fee_rate: int,
    seconds: int,
    n_points: int = 100,
    global_stability_fee_rate: int = 0,
) -> pd.DataFrame:
    """Debt accumulated rate growth from one ray over ``seconds``.

    Returns:
        DataFrame with columns: elapsed, debt_accumulated_rate
    """
    elapsed = np.unique(np.linspace(0, seconds, n_points).astype(np.int64))
    rates = [
        accumulated_rate(RAY, stability_fee_rate, 0, int(t), global_stability_fee_rate) / RAY
        for t in elapsed
    ]
    return pd.DataFrame({"elapsed": elapsed, "debt_accumulated_rate": rates})
