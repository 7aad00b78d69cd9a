"""Stability Fee page: per-second rate and debt accumulated rate growth."""

import streamlit as st

from stablecoin.dashboard.components.charts import accrual_chart
from stablecoin.dashboard.components.metrics_cards import stability_fee_row
from stablecoin.dashboard.components.sidebar import SidebarParams
from stablecoin.protocol.stability_fee import accrual_schedule, accumulated_rate, per_second_rate
from stablecoin.protocol.units import RAY


def render_stability_fee(params: SidebarParams) -> None:
    """Render the stability fee page."""
    st.header("Stability Fee")

    rate = per_second_rate(f"{params.annual_rate:.8f}")
    seconds = params.horizon_days * 86_400
    df = accrual_schedule(rate, seconds)

    stability_fee_row(rate, accumulated_rate(RAY, rate, 0, seconds))

    st.plotly_chart(accrual_chart(df), use_container_width=True)
    st.caption(
        "stabilityFeeRate is compounded per second by StabilityFeeCollector.collect; "
        "a debt of 1 AUSD grows to the accumulated rate."
    )
