from riskystrats.schemas.snapshot import (
    ArmySnapshot,
    GameSnapshot,
    MapSnapshot,
    NodeSnapshot,
    restore_game,
    snapshot_game,
)

__all__ = [
    "ArmySnapshot",
    "GameSnapshot",
    "MapSnapshot",
    "NodeSnapshot",
    "restore_game",
    "snapshot_game",
]
