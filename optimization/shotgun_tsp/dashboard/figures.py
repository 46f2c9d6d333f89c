"""
Plotly figure factories -- solver analytics theme.

Every function returns a ``go.Figure`` styled with the brand palette.
Cream background (#FAF7F2), horizontal grid only, left-aligned bold titles.
"""

from __future__ import annotations

import statistics

import numpy as np
import plotly.graph_objects as go

from shotgun_tsp.config import DASHBOARD_TRACES
from shotgun_tsp.models import BestSolution

# -- Brand palette
_NAVY    = "#00263A"
_GOLD    = "#D4A843"
_GREEN   = "#4A7C59"
_CRIMSON = "#C8102E"
_SKY     = "#5B9BD5"
_SLATE   = "#6B7B8D"
_EARTH   = "#8B6914"
_TEAL    = "#2D8E8E"
_CREAM   = "#FAF7F2"
_LGREY   = "#E5E5E5"
_DTXT    = "#2D2D2D"

# ordered colour sequence for multi-series charts
_PALETTE = [_NAVY, _GOLD, _GREEN, _CRIMSON, _SKY, _EARTH, _SLATE, _TEAL]

# Base layout
_LAYOUT = dict(
    font=dict(family="Segoe UI, Helvetica Neue, Arial", size=13, color=_DTXT),
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor=_CREAM,
    margin=dict(l=60, r=30, t=50, b=50),
    hoverlabel=dict(bgcolor="white", font_size=12, bordercolor=_NAVY),
    legend=dict(
        orientation="h", yanchor="bottom", y=1.02,
        xanchor="left", x=0,
        bgcolor="rgba(0,0,0,0)", font=dict(size=11, color=_SLATE),
    ),
    bargap=0.25,
)


def _apply(fig: go.Figure, *, show_grid: bool = True) -> go.Figure:
    """Apply branding to any figure."""
    fig.update_layout(**_LAYOUT)
    y_grid = _LGREY if show_grid else "rgba(0,0,0,0)"
    fig.update_xaxes(
        showgrid=False, linecolor=_NAVY, linewidth=1.5,
        ticks="outside", tickcolor=_NAVY,
        zeroline=False,
        tickfont=dict(color=_SLATE, size=11),
        title_font=dict(color=_NAVY, size=12, family="Segoe UI"),
    )
    fig.update_yaxes(
        showgrid=show_grid, gridcolor=y_grid, gridwidth=0.5,
        linecolor=_NAVY, linewidth=0,
        ticks="", zeroline=False,
        tickfont=dict(color=_SLATE, size=11),
        title_font=dict(color=_NAVY, size=12, family="Segoe UI"),
    )
    return fig


# -- 0. KPI numbers


def compute_summary_stats(solution: BestSolution) -> dict:
    lengths = [r.length for r in solution.runs] or [solution.length]
    moves = [r.iterations for r in solution.runs] or [0]
    return {
        "best_length": solution.length,
        "best_run": solution.run_index,
        "cities": solution.num_nodes,
        "restarts": solution.num_runs,
        "converged": solution.converged_runs,
        "mean_length": statistics.fmean(lengths),
        "worst_length": max(lengths),
        "mean_moves": statistics.fmean(moves),
        "elapsed_s": solution.metadata.get("elapsed_s", 0.0),
    }


# -- 1. Final length per restart


def run_length_histogram(solution: BestSolution) -> go.Figure:
    lengths = [r.length for r in solution.runs]
    fig = go.Figure(go.Histogram(
        x=lengths,
        marker_color=_NAVY,
        opacity=0.85,
        hovertemplate="length %{x}<br>%{y} runs<extra></extra>",
    ))
    fig.add_vline(
        x=solution.length, line_color=_CRIMSON, line_dash="dash",
        annotation_text="best", annotation_font_color=_CRIMSON,
    )
    fig.update_layout(
        title="<b>Local optima reached</b>",
        xaxis_title="Final tour length",
        yaxis_title="Restarts",
    )
    return _apply(fig)


# -- 2. Convergence traces


def convergence_traces(solution: BestSolution, top: int = DASHBOARD_TRACES) -> go.Figure:
    """Length after every accepted move, for the *top* best restarts."""
    fig = go.Figure()
    ranked = sorted(solution.runs, key=lambda r: (r.length, r.run_index))[:top]
    for i, run in enumerate(ranked):
        fig.add_trace(go.Scatter(
            x=list(range(len(run.history))),
            y=run.history,
            mode="lines",
            name=f"run {run.run_index}",
            line=dict(color=_PALETTE[i % len(_PALETTE)], width=2 if i == 0 else 1.2),
        ))
    fig.update_layout(
        title="<b>Convergence of the best restarts</b>",
        xaxis_title="Accepted 2-opt moves",
        yaxis_title="Tour length",
    )
    return _apply(fig)


# -- 3. Start vs finish


def start_vs_final(solution: BestSolution) -> go.Figure:
    runs = [r for r in solution.runs if r.history]
    fig = go.Figure(go.Scatter(
        x=[r.history[0] for r in runs],
        y=[r.length for r in runs],
        mode="markers",
        marker=dict(
            size=9,
            color=[_GREEN if r.converged else _GOLD for r in runs],
            line=dict(width=1, color=_NAVY),
        ),
        text=[f"run {r.run_index} -- {r.state.value}, {r.iterations} moves" for r in runs],
        hovertemplate="%{text}<br>start %{x}<br>final %{y}<extra></extra>",
    ))
    fig.update_layout(
        title="<b>Random start vs local optimum</b>",
        xaxis_title="Start tour length",
        yaxis_title="Final tour length",
    )
    return _apply(fig)


# -- 4. Cost matrix with the best tour


def tour_heatmap(distances: np.ndarray, tour: tuple[int, ...]) -> go.Figure:
    """Cost matrix heatmap; the best tour's edges are marked on top."""
    n = len(tour)
    fig = go.Figure(go.Heatmap(
        z=distances,
        colorscale=[[0, _CREAM], [0.5, _SKY], [1, _NAVY]],
        colorbar=dict(title="cost"),
        hovertemplate="%{y} -> %{x}: %{z}<extra></extra>",
    ))
    if n > 1:
        src = list(tour)
        dst = [tour[(k + 1) % n] for k in range(n)]
        fig.add_trace(go.Scatter(
            x=dst, y=src, mode="markers",
            marker=dict(symbol="x", size=10, color=_CRIMSON),
            name="tour edge",
            hovertemplate="edge %{y} -> %{x}<extra></extra>",
        ))
    fig.update_layout(
        title="<b>Cost matrix and best tour</b>",
        xaxis_title="to",
        yaxis_title="from",
        yaxis_autorange="reversed",
    )
    return _apply(fig, show_grid=False)


# -- 5. Strategy comparison


def strategy_comparison(solver_data: dict) -> go.Figure:
    names = list(solver_data)
    sols = [solver_data[n]["solution"] for n in names]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[n.upper() for n in names],
        y=[s.length for s in sols],
        name="best length",
        marker_color=_NAVY,
    ))
    fig.add_trace(go.Bar(
        x=[n.upper() for n in names],
        y=[s.metadata.get("elapsed_s", 0.0) for s in sols],
        name="elapsed (s)",
        marker_color=_GOLD,
        yaxis="y2",
    ))
    fig.update_layout(
        title="<b>Strategy comparison</b>",
        barmode="group",
        yaxis_title="Best tour length",
        yaxis2=dict(title="Seconds", overlaying="y", side="right", showgrid=False),
    )
    return _apply(fig)
