"""Metric cards and fixed-point formatters for the dashboard."""

import streamlit as st

from stablecoin.protocol.stability_fee import annual_rate
from stablecoin.protocol.units import ray_to_float, wad_to_float


def format_ray(value: int, places: int = 6) -> str:
    """Ray value as a decimal, e.g. ``10**27 -> "1.000000"``."""
    return f"{ray_to_float(value):.{places}f}"


def format_apy(stability_fee_rate: int) -> str:
    """Annual rate implied by a per-second ray rate, e.g. ``"1.0000%"``."""
    return f"{annual_rate(stability_fee_rate):.4%}"


def format_ausd(amount: int) -> str:
    """Wad stablecoin amount, e.g. ``"1,234.5000 AUSD"``."""
    return f"{wad_to_float(amount):,.4f} AUSD"


def kpi_row(metrics: list[tuple[str, str, str | None]]) -> None:
    """Display a row of KPI cards.

    Args:
        metrics: List of (label, value, delta) tuples.
    """
    cols = st.columns(len(metrics))
    for col, (label, value, delta) in zip(cols, metrics):
        with col:
            st.metric(label=label, value=value, delta=delta)


def stability_fee_row(stability_fee_rate: int, final_rate: int) -> None:
    """Per-second rate, its APY and the debt accumulated rate it reaches (both ray)."""
    kpi_row(
        [
            ("Per-second Rate (ray)", str(stability_fee_rate), None),
            ("APY", format_apy(stability_fee_rate), None),
            ("Rate after Horizon", format_ray(final_rate), None),
        ]
    )
