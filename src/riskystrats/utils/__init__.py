"""Utility functions for the riskystrats engine."""

from riskystrats.utils.geometry import (
    Point,
    distance,
    int_distance,
    orientation,
    segments_intersect,
)
from riskystrats.utils.rng import generate_seed, loss_multiplier, make_rng

__all__ = [
    "Point",
    "distance",
    "generate_seed",
    "int_distance",
    "loss_multiplier",
    "make_rng",
    "orientation",
    "segments_intersect",
]
