"""Fantasy points calculator based on standard fantasy football scoring rules."""

from dataclasses import asdict, dataclass

from ..models.match import MatchStats
from ..models.player import Player, Position


# Scoring constants
POINTS_MINUTES_UP_TO_60 = 1
POINTS_MINUTES_60_PLUS = 2
CLEAN_SHEET_MIN_MINUTES = 60

GOAL_POINTS = {
    Position.GK: 6,
    Position.DEF: 6,
    Position.MID: 5,
    Position.ATT: 4,
}
POINTS_ASSIST = 3

CLEAN_SHEET_POINTS = {
    Position.GK: 4,
    Position.DEF: 4,
    Position.MID: 1,
    Position.ATT: 0,
}

SAVES_PER_POINT = 3
POINTS_PENALTY_SAVE = 5
POINTS_PER_2_CONCEDED = -1

POINTS_YELLOW_CARD = -1
POINTS_RED_CARD = -3
POINTS_OWN_GOAL = -2

# Positions penalised for goals conceded
CONCEDING_POSITIONS = frozenset({Position.GK, Position.DEF})


@dataclass(frozen=True)
class PointsBreakdown:
    """
    Itemized fantasy points for one player in one gameweek.

    The total may be negative.
    """

    minutes: int = 0
    goals: int = 0
    assists: int = 0
    clean_sheet: int = 0
    saves: int = 0
    penalties_saved: int = 0
    cards: int = 0
    own_goals: int = 0
    conceded: int = 0

    @property
    def total(self) -> int:
        """Sum of all components."""
        return sum(asdict(self).values())

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "breakdown": {
                "minutes": self.minutes,
                "goals": self.goals,
                "assists": self.assists,
                "cleanSheet": self.clean_sheet,
                "saves": self.saves,
                "penaltiesSaved": self.penalties_saved,
                "cards": self.cards,
                "ownGoals": self.own_goals,
                "conceded": self.conceded,
            },
        }


def calculate_minutes_points(minutes_played: int) -> int:
    """Appearance points: 0 unused, 1 for under an hour, 2 for 60+."""
    if minutes_played <= 0:
        return 0
    if minutes_played >= CLEAN_SHEET_MIN_MINUTES:
        return POINTS_MINUTES_60_PLUS
    return POINTS_MINUTES_UP_TO_60


def calculate_conceded_points(goals_conceded: int, position: Position) -> int:
    """-1 per two goals conceded for goalkeepers and defenders."""
    if position not in CONCEDING_POSITIONS or goals_conceded < 2:
        return 0
    return (goals_conceded // 2) * POINTS_PER_2_CONCEDED


def calculate_points(stats: MatchStats, position: Position) -> PointsBreakdown:
    """
    Calculate fantasy points with full breakdown.

    A player who did not play scores nothing, whatever else the stats say.
    Stats are otherwise trusted as given: clean_sheet and goals_conceded
    are scored independently and are not cross-checked.

    Args:
        stats: Player's match statistics.
        position: Player's position.

    Returns:
        PointsBreakdown with every component and the total.
    """
    if not stats.played:
        return PointsBreakdown()

    clean_sheet = 0
    if stats.clean_sheet and stats.minutes_played >= CLEAN_SHEET_MIN_MINUTES:
        clean_sheet = CLEAN_SHEET_POINTS[position]

    saves = 0
    penalties_saved = 0
    if position == Position.GK:
        saves = stats.saves // SAVES_PER_POINT
        penalties_saved = stats.penalties_saved * POINTS_PENALTY_SAVE

    return PointsBreakdown(
        minutes=calculate_minutes_points(stats.minutes_played),
        goals=stats.goals * GOAL_POINTS[position],
        assists=stats.assists * POINTS_ASSIST,
        clean_sheet=clean_sheet,
        saves=saves,
        penalties_saved=penalties_saved,
        cards=stats.yellow_cards * POINTS_YELLOW_CARD + stats.red_cards * POINTS_RED_CARD,
        own_goals=stats.own_goals * POINTS_OWN_GOAL,
        conceded=calculate_conceded_points(stats.goals_conceded, position),
    )


def calculate_player_points(player: Player, stats: MatchStats) -> PointsBreakdown:
    """Convenience function to calculate points using a Player object."""
    return calculate_points(stats, player.position)
