"""Enumerations used across the riskystrats domain."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Team(IntEnum):
    """Owners of nodes and armies; player slots are numbered from 1."""

    NEUTRAL = 0
    RED = 1
    BLUE = 2
    GREEN = 3
    YELLOW = 4
    ORANGE = 5
    PURPLE = 6


class Building(StrEnum):
    """Structures that can stand on a node."""

    NONE = "none"
    FACTORY = "factory"
    POWER_PLANT = "power_plant"
    FORT = "fort"
    ARTILLERY = "artillery"
