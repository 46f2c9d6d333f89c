"""
Solver dashboard -- Dash callbacks.

Switching the solver selector refreshes the KPI ribbon and every chart.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dash import Input, Output

from shotgun_tsp.dashboard import figures as figs
from shotgun_tsp.dashboard.layouts import kpi_cards

if TYPE_CHECKING:
    from dash import Dash


def solver_view(solver_data: dict, solver_name: str | None) -> tuple:
    """KPI cards, source label and the four chart figures for one solver."""
    data = solver_data.get(solver_name) or next(iter(solver_data.values()))
    sol = data["solution"]
    return (
        kpi_cards(data["stats"]),
        data.get("source", ""),
        figs.run_length_histogram(sol),
        figs.convergence_traces(sol),
        figs.start_vs_final(sol),
        figs.tour_heatmap(data["distances"], sol.tour),
    )


def register(app: Dash, solver_data: dict) -> None:
    """Bind every callback to the app."""

    @app.callback(
        [
            Output("kpi-ribbon", "children"),
            Output("instance-source", "children"),
            Output("fig-histogram", "figure"),
            Output("fig-convergence", "figure"),
            Output("fig-start-final", "figure"),
            Output("fig-heatmap", "figure"),
        ],
        Input("solver-selector", "value"),
    )
    def _switch_solver(solver_name):
        return solver_view(solver_data, solver_name)
