"""Shotgun 2-opt hill climbing for the Traveling Salesman Problem."""

__version__ = "1.0.0"
