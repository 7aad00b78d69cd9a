"""Auction Price Decay page: the three calculators side by side."""

import pandas as pd
import streamlit as st

from stablecoin.dashboard.components.charts import price_decay_chart
from stablecoin.dashboard.components.sidebar import SidebarParams
from stablecoin.protocol.calculators import (
    ExponentialDecrease,
    LinearDecrease,
    StairstepExponentialDecrease,
    cut_from_percent,
)
from stablecoin.protocol.units import parse_units, wad_to_float


def render_price_decay(params: SidebarParams) -> None:
    """Render the auction price decay page."""
    st.header("Auction Price Decay")

    top = parse_units(f"{params.top_price:.18f}", 18)
    cut = cut_from_percent(f"{params.cut_percent:.6f}")
    calculators = [
        LinearDecrease(tau=params.tau),
        ExponentialDecrease(cut=cut),
        StairstepExponentialDecrease(cut=cut, step=params.step),
    ]

    curves = {c.name: c.price_curve(top, params.duration) for c in calculators}
    st.plotly_chart(price_decay_chart(curves), use_container_width=True)

    st.divider()
    st.subheader("Price at Checkpoints")

    checkpoints = sorted({0, params.duration // 4, params.duration // 2, params.duration})
    rows = []
    for t in checkpoints:
        row = {"Elapsed (s)": t}
        for c in calculators:
            row[c.name] = f"{wad_to_float(c.price(top, t)):.6f}"
        rows.append(row)
    st.table(pd.DataFrame(rows))
