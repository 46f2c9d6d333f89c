"""
Dash application factory.

Supports single-solver and multi-solver modes.  When ``solver_data``
contains more than one key, the dashboard adds a cross-strategy
comparison chart.
"""

from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import Dash

from shotgun_tsp.config import DASHBOARD_PORT
from shotgun_tsp.dashboard import figures as figs
from shotgun_tsp.dashboard.callbacks import register
from shotgun_tsp.dashboard.layouts import build_layout


def create_app(solver_data: dict) -> Dash:
    """Build the Dash app without starting a server.

    Parameters
    ----------
    solver_data : dict
        Mapping of solver name -> dict with keys:
        solution, distances, source.
    """
    for data in solver_data.values():
        data["stats"] = figs.compute_summary_stats(data["solution"])

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        title="Shotgun TSP",
        update_title="Updating...",
        suppress_callback_exceptions=True,
    )

    solver_names = list(solver_data.keys())
    app.layout = build_layout(solver_data, solver_names[0])
    register(app, solver_data)
    return app


def run_dashboard(
    solver_data: dict,
    *,
    port: int = DASHBOARD_PORT,
    debug: bool = False,
) -> None:
    """Build and launch the solver dashboard."""
    app = create_app(solver_data)
    label = " / ".join(s.upper() for s in solver_data)
    print(f"\n  Solver Dashboard ({label}) -> http://localhost:{port}\n")
    app.run(debug=debug, port=port)
