"""Plotly chart builders for the property calculator dashboard."""

import plotly.graph_objects as go

from propcalc.params import Projection
from propcalc.sensitivity import METRICS, MatrixResult, SweepResult

_LEGEND = dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1)


def value_equity_chart(projections: list[Projection]) -> go.Figure:
    """Property value, loan balance and equity over the projection."""
    years = [p.year for p in projections]

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=years,
            y=[p.equity for p in projections],
            name="Equity",
            fill="tozeroy",
            line=dict(color="#4CAF50"),
            fillcolor="rgba(76,175,80,0.2)",
            hovertemplate="%{x}<br>Equity: $%{y:,.0f}<extra></extra>",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=years,
            y=[p.property_value for p in projections],
            name="Property Value",
            line=dict(color="#2196F3", dash="dot", width=2),
            hovertemplate="%{x}<br>Property: $%{y:,.0f}<extra></extra>",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=years,
            y=[p.loan_balance for p in projections],
            name="Loan Balance",
            line=dict(color="#F44336", width=2),
            hovertemplate="%{x}<br>Loan: $%{y:,.0f}<extra></extra>",
        )
    )
    fig.update_layout(
        title="Property Value, Loan & Equity",
        xaxis_title="Year",
        yaxis_title="Value ($)",
        yaxis_tickformat="$,.0f",
        xaxis=dict(dtick=1),
        hovermode="x unified",
        legend=_LEGEND,
        margin=dict(t=80, b=40),
    )
    return fig


def cash_flow_chart(projections: list[Projection]) -> go.Figure:
    """Rental income, interest and tax refund per year with net cash flow on top."""
    years = [p.year for p in projections]

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=years,
            y=[p.rental_income for p in projections],
            name="Rental Income",
            marker_color="#4CAF50",
            hovertemplate="%{x}<br>Rent: $%{y:,.0f}<extra></extra>",
        )
    )
    fig.add_trace(
        go.Bar(
            x=years,
            y=[-p.annual_interest for p in projections],
            name="Interest",
            marker_color="#F44336",
            hovertemplate="%{x}<br>Interest: $%{y:,.0f}<extra></extra>",
        )
    )
    fig.add_trace(
        go.Bar(
            x=years,
            y=[p.tax_return for p in projections],
            name="Tax Return",
            marker_color="#9C27B0",
            hovertemplate="%{x}<br>Tax return: $%{y:,.0f}<extra></extra>",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=years,
            y=[p.net_cash_flow for p in projections],
            name="Net Cash Flow",
            mode="lines+markers",
            line=dict(color="#212121", width=2.5),
            hovertemplate="%{x}<br>Net: $%{y:,.0f}<extra></extra>",
        )
    )
    fig.add_hline(y=0, line_dash="dash", line_color="gray", opacity=0.5)
    fig.update_layout(
        barmode="relative",
        title="Annual Cash Flow",
        xaxis_title="Year",
        yaxis_title="Amount ($)",
        yaxis_tickformat="$,.0f",
        xaxis=dict(dtick=1),
        legend=_LEGEND,
        margin=dict(t=60, b=40),
    )
    return fig


def returns_chart(projections: list[Projection]) -> go.Figure:
    """Cumulative cash spent against returns, with ROI on a second axis."""
    years = [p.year for p in projections]

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=years,
            y=[p.spent for p in projections],
            name="Total Spent",
            line=dict(color="#F44336", width=2.5),
            hovertemplate="%{x}<br>Spent: $%{y:,.0f}<extra></extra>",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=years,
            y=[p.returns for p in projections],
            name="Returns",
            line=dict(color="#4CAF50", width=2.5),
            hovertemplate="%{x}<br>Returns: $%{y:,.0f}<extra></extra>",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=years,
            y=[p.roi for p in projections],
            name="ROI",
            yaxis="y2",
            line=dict(color="#FF9800", dash="dash", width=2),
            hovertemplate="%{x}<br>ROI: %{y:.2f}%<extra></extra>",
        )
    )
    fig.update_layout(
        title="Spent vs Returns",
        xaxis_title="Year",
        yaxis_title="Cumulative ($)",
        yaxis_tickformat="$,.0f",
        yaxis2=dict(title="ROI (%)", overlaying="y", side="right", ticksuffix="%"),
        xaxis=dict(dtick=1),
        hovermode="x unified",
        legend=_LEGEND,
        margin=dict(t=60, b=40),
    )
    return fig


def sensitivity_chart(results: list[SweepResult], param_name: str, is_pct: bool) -> go.Figure:
    """Final-year equity and ROI across a one-parameter sweep."""
    x_values = [r.param_value for r in results]
    x_label = f"{param_name} (%)" if is_pct else param_name
    x_fmt = ".2f" if is_pct else ",.0f"

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=x_values,
            y=[r.final_equity for r in results],
            name="Final Equity",
            line=dict(color="#4CAF50", width=2.5),
            hovertemplate=f"{param_name}: %{{x:{x_fmt}}}<br>Equity: $%{{y:,.0f}}<extra></extra>",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=x_values,
            y=[r.final_roi for r in results],
            name="Final ROI",
            yaxis="y2",
            line=dict(color="#FF9800", width=2.5, dash="dash"),
            hovertemplate=f"{param_name}: %{{x:{x_fmt}}}<br>ROI: %{{y:.2f}}%<extra></extra>",
        )
    )
    fig.update_layout(
        title=f"Sensitivity: {param_name}",
        xaxis_title=x_label,
        yaxis_title="Equity ($)",
        yaxis_tickformat="$,.0f",
        yaxis2=dict(title="ROI (%)", overlaying="y", side="right", ticksuffix="%"),
        hovermode="x unified",
        legend=_LEGEND,
        margin=dict(t=60, b=40),
    )
    return fig


def matrix_heatmap(result: MatrixResult, row_name: str, col_name: str) -> go.Figure:
    """Heatmap of a final-year metric over a two-parameter grid."""
    is_roi = result.metric == "roi"
    text_fmt = "%{z:.2f}%" if is_roi else "$%{z:,.0f}"

    fig = go.Figure(
        go.Heatmap(
            z=result.values,
            x=[str(v) for v in result.col_values],
            y=[str(v) for v in result.row_values],
            colorscale="RdYlGn",
            texttemplate=text_fmt,
            hovertemplate=(
                f"{row_name}: %{{y}}<br>{col_name}: %{{x}}<br>"
                f"{METRICS[result.metric]}: {text_fmt}<extra></extra>"
            ),
        )
    )
    fig.update_layout(
        title=f"What-if: {METRICS[result.metric]}",
        xaxis_title=col_name,
        yaxis_title=row_name,
        margin=dict(t=60, b=40),
    )
    return fig
