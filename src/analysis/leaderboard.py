"""Manager leaderboard ranking."""

from dataclasses import dataclass
from typing import Iterable

from ..models.gameweek import ManagerHistory


DEFAULT_LEADERBOARD_SIZE = 50


@dataclass
class ManagerStanding:
    """A manager's season totals as stored by the persistence layer."""

    manager_id: str
    team_name: str
    total_points: int
    last_gameweek_points: int = 0


@dataclass
class RankedStanding:
    """A standing with its position on the leaderboard."""

    rank: int
    manager_id: str
    team_name: str
    total_points: int
    last_gameweek_points: int


def standing_from_history(
    manager_id: str,
    team_name: str,
    history: ManagerHistory,
) -> ManagerStanding:
    """Build a standing from a manager's gameweek history."""
    return ManagerStanding(
        manager_id=manager_id,
        team_name=team_name,
        total_points=history.total_points,
        last_gameweek_points=history.last_gameweek_points,
    )


def rank_managers(
    standings: Iterable[ManagerStanding],
    limit: int = DEFAULT_LEADERBOARD_SIZE,
) -> list[RankedStanding]:
    """
    Rank managers by total points, highest first.

    Ranks are sequential; managers level on points keep their input order.

    Args:
        standings: Standings to rank.
        limit: Maximum number of entries returned.

    Returns:
        Ranked standings, at most `limit` long.
    """
    ordered = sorted(standings, key=lambda s: s.total_points, reverse=True)
    ranked = []
    for rank, standing in enumerate(ordered[:limit], start=1):
        ranked.append(
            RankedStanding(
                rank=rank,
                manager_id=standing.manager_id,
                team_name=standing.team_name or f"Team {rank}",
                total_points=standing.total_points,
                last_gameweek_points=standing.last_gameweek_points,
            )
        )
    return ranked
