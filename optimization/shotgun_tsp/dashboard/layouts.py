"""
Solver dashboard layout.

One page: header with a solver selector, a KPI ribbon, then a 2 x 2 grid
of chart cards and a full-width strategy comparison when more than one
solver's results are loaded.
"""

from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from shotgun_tsp.dashboard import figures as figs

_NAVY  = "#00263A"
_GOLD  = "#D4A843"
_CREAM = "#FAF7F2"
_SLATE = "#6B7B8D"


def kpi_cards(stats: dict) -> list:
    items = [
        ("Best length", f"{stats['best_length']:g}", f"run {stats['best_run']}"),
        ("Cities", f"{stats['cities']:,}", ""),
        ("Restarts", f"{stats['restarts']:,}", f"{stats['converged']} converged"),
        ("Mean length", f"{stats['mean_length']:.6g}", f"worst {stats['worst_length']:g}"),
        ("Mean moves", f"{stats['mean_moves']:.1f}", f"{stats['elapsed_s']:.2f}s total"),
    ]
    return [
        dbc.Col(
            dbc.Card(
                dbc.CardBody([
                    html.Div(label, style={"color": _SLATE, "fontSize": "0.8rem"}),
                    html.H4(value, style={"color": _NAVY, "margin": 0}),
                    html.Small(sub, style={"color": _GOLD}),
                ]),
                style={"background": _CREAM, "border": "none"},
            ),
        )
        for label, value, sub in items
    ]


def _card(graph_id: str) -> dbc.Col:
    return dbc.Col(
        dbc.Card(dbc.CardBody(dcc.Graph(id=graph_id, config={"displaylogo": False}))),
        md=6,
        className="mb-3",
    )


def build_layout(solver_data: dict, default_solver: str) -> html.Div:
    data = solver_data[default_solver]
    stats = data["stats"]

    children = [
        dbc.Row(
            [
                dbc.Col(html.H2("Shotgun 2-opt TSP", style={"color": _NAVY}), md=8),
                dbc.Col(
                    dcc.Dropdown(
                        id="solver-selector",
                        options=[{"label": n.upper(), "value": n} for n in solver_data],
                        value=default_solver,
                        clearable=False,
                    ),
                    md=4,
                ),
            ],
            className="my-3 align-items-center",
        ),
        html.Div(data.get("source", ""), id="instance-source", style={"color": _SLATE}),
        dbc.Row(kpi_cards(stats), id="kpi-ribbon", className="my-3"),
        dbc.Row([_card("fig-histogram"), _card("fig-convergence")]),
        dbc.Row([_card("fig-start-final"), _card("fig-heatmap")]),
    ]
    if len(solver_data) > 1:
        children.append(
            dbc.Row(dbc.Col(dbc.Card(dbc.CardBody(dcc.Graph(
                id="fig-strategy",
                figure=figs.strategy_comparison(solver_data),
            ))))),
        )
    return dbc.Container(children, fluid=True)
