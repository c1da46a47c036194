"""Data models for fantasy football squads and scoring."""

from .player import ATTRIBUTE_NAMES, Player, Position
from .formation import (
    FORMATIONS,
    STARTING_XI_SIZE,
    Formation,
    PositionCounts,
    get_formation,
)
from .match import MatchStats
from .squad import (
    MAX_BENCH_SIZE,
    MAX_ROSTER_SIZE,
    MAX_SQUAD_SIZE_NO_FORMATION,
    STARTING_BUDGET,
    SquadState,
)
from .gameweek import GameweekResult, ManagerHistory, PlayerScore

__all__ = [
    # Player
    "ATTRIBUTE_NAMES",
    "Player",
    "Position",
    # Formation
    "FORMATIONS",
    "STARTING_XI_SIZE",
    "Formation",
    "PositionCounts",
    "get_formation",
    # Match
    "MatchStats",
    # Squad
    "MAX_BENCH_SIZE",
    "MAX_ROSTER_SIZE",
    "MAX_SQUAD_SIZE_NO_FORMATION",
    "STARTING_BUDGET",
    "SquadState",
    # Gameweek
    "GameweekResult",
    "ManagerHistory",
    "PlayerScore",
]
