"""Flash Mint page."""

import streamlit as st

from stablecoin.dashboard.components.charts import flash_fee_chart
from stablecoin.dashboard.components.metrics_cards import format_ausd
from stablecoin.dashboard.components.sidebar import SidebarParams
from stablecoin.protocol.flash_mint import FlashMintModule
from stablecoin.protocol.units import parse_units, wad_to_float

# Placeholder token address for the offline model
_AUSD_PLACEHOLDER = "0x0000000000000000000000000000000000000001"


def render_flash_mint(params: SidebarParams) -> None:
    st.header("Flash Mint")

    module = FlashMintModule(
        stablecoin=_AUSD_PLACEHOLDER,
        max=parse_units(f"{params.flash_max:.0f}", 18),
        fee_rate=parse_units(f"{params.flash_fee_rate:.18f}", 18),
    )

    st.plotly_chart(
        flash_fee_chart(module.fee_schedule(), max_loan=wad_to_float(module.max)),
        use_container_width=True,
    )

    amount = st.number_input("Loan Amount (AUSD)", min_value=0.0, value=100_000.0, step=1_000.0)
    try:
        settlement = module.plan_flash_loan(_AUSD_PLACEHOLDER, parse_units(f"{amount:.0f}", 18))
    except ValueError as exc:
        st.error(str(exc))
        return
    c1, c2 = st.columns(2)
    with c1:
        st.metric("Fee", format_ausd(settlement.fee))
    with c2:
        st.metric("Repayment", format_ausd(settlement.repayment))
