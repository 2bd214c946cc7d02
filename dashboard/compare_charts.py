"""Plotly chart builders for multi-scenario comparison."""

import plotly.graph_objects as go

from propcalc.params import PropertyData

COLOURS = ["#2196F3", "#F44336", "#4CAF50", "#FF9800", "#9C27B0", "#00BCD4"]


def comparison_equity_chart(scenario_data: list[tuple[str, PropertyData]]) -> go.Figure:
    """Equity (solid) and total spent (dashed) per scenario."""
    fig = go.Figure()

    for i, (name, data) in enumerate(scenario_data):
        colour = COLOURS[i % len(COLOURS)]
        years = [p.year for p in data.projections]
        fig.add_trace(
            go.Scatter(
                x=years,
                y=[p.equity for p in data.projections],
                name=f"{name}: Equity",
                legendgroup=name,
                line=dict(color=colour, width=2.5),
                hovertemplate=f"{name} equity<br>%{{x}}<br>$%{{y:,.0f}}<extra></extra>",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=years,
                y=[p.spent for p in data.projections],
                name=f"{name}: Spent",
                legendgroup=name,
                line=dict(color=colour, width=2.5, dash="dash"),
                hovertemplate=f"{name} spent<br>%{{x}}<br>$%{{y:,.0f}}<extra></extra>",
            )
        )

    fig.update_layout(
        title="Equity and Spending by Scenario",
        xaxis_title="Year",
        yaxis_title="Amount ($)",
        yaxis_tickformat="$,.0f",
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        margin=dict(t=60, b=40),
    )
    return fig


def comparison_roi_chart(scenario_data: list[tuple[str, PropertyData]]) -> go.Figure:
    """One ROI line per scenario."""
    fig = go.Figure()

    for i, (name, data) in enumerate(scenario_data):
        fig.add_trace(
            go.Scatter(
                x=[p.year for p in data.projections],
                y=[p.roi for p in data.projections],
                name=name,
                line=dict(color=COLOURS[i % len(COLOURS)], width=2.5),
                hovertemplate=f"{name}<br>%{{x}}<br>ROI: %{{y:.2f}}%<extra></extra>",
            )
        )

    fig.add_hline(y=0, line_dash="dash", line_color="gray", opacity=0.5)
    fig.update_layout(
        title="ROI by Scenario",
        xaxis_title="Year",
        yaxis_title="ROI (%)",
        yaxis_ticksuffix="%",
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        margin=dict(t=60, b=40),
    )
    return fig
