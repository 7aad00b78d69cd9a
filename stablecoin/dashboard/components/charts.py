"""Reusable Plotly chart components."""

import pandas as pd
import plotly.graph_objects as go

from stablecoin.protocol.units import WAD

_CURVE_COLORS = {
    "LinearDecrease": "#3b82f6",
    "ExponentialDecrease": "#ef4444",
    "StairstepExponentialDecrease": "#f59e0b",
}


def price_decay_chart(
    curves: dict[str, pd.DataFrame],
    title: str = "Auction Price Decay",
    unit: int = WAD,
) -> go.Figure:
    """Overlay auction price curves.

    Args:
        curves: Calculator name -> DataFrame with columns: elapsed, price.
        title: Chart title.
        unit: Fixed-point unit of ``price`` (wad by default).
    """
    fig = go.Figure()

    for name, df in curves.items():
        fig.add_trace(
            go.Scatter(
                x=df["elapsed"],
                y=[p / unit for p in df["price"]],
                name=name,
                line=dict(
                    color=_CURVE_COLORS.get(name, "#a855f7"),
                    width=2,
                    shape="hv" if name.startswith("Stairstep") else "linear",
                ),
                hovertemplate="Elapsed: %{x}s<br>Price: %{y:.4f}<extra></extra>",
            )
        )

    fig.update_layout(
        title=title,
        xaxis_title="Seconds since auction start",
        yaxis_title="Price",
        hovermode="x unified",
        template="plotly_dark",
        height=450,
    )

    return fig


def accrual_chart(
    df: pd.DataFrame,
    title: str = "Debt Accumulated Rate",
) -> go.Figure:
    """Debt accumulated rate growth from 1.0.

    Args:
        df: DataFrame with columns: elapsed, debt_accumulated_rate.
        title: Chart title.
    """
    days = df["elapsed"] / 86_400

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=days,
            y=df["debt_accumulated_rate"],
            name="Accumulated rate",
            line=dict(color="#22c55e", width=2),
            hovertemplate="Day %{x:.1f}<br>Rate: %{y:.6f}<extra></extra>",
        )
    )

    fig.update_layout(
        title=title,
        xaxis_title="Days",
        yaxis_title="Debt accumulated rate",
        template="plotly_dark",
        height=400,
    )

    return fig


def flash_fee_chart(df: pd.DataFrame, max_loan: float | None = None) -> go.Figure:
    """Flash mint fee against loan size.

    Args:
        df: DataFrame with columns: amount, fee (both in stablecoin units).
        max_loan: If provided, marks the module's ceiling.
    """
    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=df["amount"],
            y=df["fee"],
            name="Fee",
            marker_color="#3b82f6",
            hovertemplate="Loan: %{x:,.0f}<br>Fee: %{y:,.4f}<extra></extra>",
        )
    )

    if max_loan is not None:
        fig.add_vline(
            x=max_loan,
            line_dash="dash",
            line_color="#ef4444",
            annotation_text="Ceiling",
        )

    fig.update_layout(
        title="Flash Mint Fee",
        xaxis_title="Loan amount (AUSD)",
        yaxis_title="Fee (AUSD)",
        template="plotly_dark",
        height=400,
    )

    return fig
