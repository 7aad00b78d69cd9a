"""AUSD Stablecoin Dashboard — Main Streamlit entry point."""

import streamlit as st

from stablecoin.dashboard.components.sidebar import render_sidebar
from stablecoin.dashboard.tabs.flash_mint import render_flash_mint
from stablecoin.dashboard.tabs.price_decay import render_price_decay
from stablecoin.dashboard.tabs.stability_fee import render_stability_fee


def main() -> None:
    st.set_page_config(
        page_title="AUSD Stablecoin Dashboard",
        page_icon="📊",
        layout="wide",
    )

    st.title("AUSD Stablecoin Dashboard")
    st.caption("Liquidation auction pricing, stability fees and flash mint terms")

    params = render_sidebar()

    tab1, tab2, tab3 = st.tabs(
        [
            "Auction Price Decay",
            "Stability Fee",
            "Flash Mint",
        ]
    )

    with tab1:
        render_price_decay(params)

    with tab2:
        render_stability_fee(params)

    with tab3:
        render_flash_mint(params)


if __name__ == "__main__":
    main()
