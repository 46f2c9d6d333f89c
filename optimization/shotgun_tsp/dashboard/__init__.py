"""Plotly Dash dashboard for cached solver results."""
