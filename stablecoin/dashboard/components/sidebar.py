"""Sidebar parameter controls."""

from dataclasses import dataclass

import streamlit as st


@dataclass
class SidebarParams:
    """User-controlled parameters from the sidebar."""

    top_price: float
    duration: int
    tau: int
    cut_percent: float
    step: int
    annual_rate: float
    horizon_days: int
    flash_max: float
    flash_fee_rate: float


def render_sidebar() -> SidebarParams:
    """Render sidebar controls and return selected parameters."""
    st.sidebar.header("Auction")

    top = st.sidebar.number_input(
        "Starting Price (top)",
        min_value=0.0,
        value=50.0,
        step=1.0,
    )

    duration = st.sidebar.slider(
        "Auction Window (s)",
        min_value=10,
        max_value=3_600,
        value=600,
        step=10,
    )

    tau = st.sidebar.slider(
        "Linear: tau (s)",
        min_value=1,
        max_value=3_600,
        value=600,
        step=10,
    )

    cut_percent = st.sidebar.number_input(
        "Exponential: decrease per step (%)",
        min_value=0.0,
        max_value=100.0,
        value=1.0,
        step=0.1,
        format="%.4f",
    )

    step = st.sidebar.number_input(
        "Stairstep: step length (s)",
        min_value=1,
        value=60,
        step=1,
    )

    st.sidebar.header("Stability Fee")

    annual = st.sidebar.slider(
        "Annual Rate (%)",
        min_value=0.0,
        max_value=50.0,
        value=1.0,
        step=0.1,
    ) / 100.0

    horizon = st.sidebar.slider(
        "Horizon (days)",
        min_value=1,
        max_value=1_825,
        value=365,
    )

    st.sidebar.header("Flash Mint")

    flash_max = st.sidebar.number_input(
        "Max Loan (AUSD)",
        min_value=0.0,
        value=1_000_000.0,
        step=10_000.0,
        format="%.0f",
    )

    flash_fee = st.sidebar.number_input(
        "Fee Rate (%)",
        min_value=0.0,
        max_value=100.0,
        value=0.05,
        step=0.01,
        format="%.4f",
    ) / 100.0

    return SidebarParams(
        top_price=top,
        duration=int(duration),
        tau=int(tau),
        cut_percent=cut_percent,
        step=int(step),
        annual_rate=annual,
        horizon_days=int(horizon),
        flash_max=flash_max,
        flash_fee_rate=flash_fee,
    )
