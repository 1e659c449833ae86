"""Simulation engine for the riskystrats territory-control game."""

__version__ = "0.1.0"
