"""Team chemistry: pairwise cohesion score from shared club, nationality and position."""

import math
from dataclasses import dataclass
from enum import Enum
from itertools import combinations
from typing import Protocol, Sequence


POINTS_SAME_CLUB = 5
POINTS_SAME_NATIONALITY = 3
POINTS_SAME_POSITION = 1
MAX_PAIR_POINTS = POINTS_SAME_CLUB + POINTS_SAME_NATIONALITY + POINTS_SAME_POSITION


class ChemistryMember(Protocol):
    club: str
    nationality: str
    position: object


class ChemistryGrade(Enum):
    """Chemistry grade bands, best first."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    POOR = "Poor"

    @property
    def color(self) -> str:
        """Display colour for the grade."""
        return GRADE_COLORS[self]

    @property
    def threshold(self) -> float:
        """Minimum percentage needed for the grade."""
        return GRADE_THRESHOLDS[self]

    @classmethod
    def for_percentage(cls, percentage: float) -> "ChemistryGrade":
        for grade in cls:
            if percentage >= grade.threshold:
                return grade
        return cls.POOR


GRADE_COLORS = {
    ChemistryGrade.EXCELLENT: "#22c55e",
    ChemistryGrade.GOOD: "#3b82f6",
    ChemistryGrade.AVERAGE: "#f59e0b",
    ChemistryGrade.POOR: "#ef4444",
}

GRADE_THRESHOLDS = {
    ChemistryGrade.EXCELLENT: 75.0,
    ChemistryGrade.GOOD: 50.0,
    ChemistryGrade.AVERAGE: 25.0,
    ChemistryGrade.POOR: 0.0,
}


@dataclass(frozen=True)
class ChemistryResult:
    """
    Chemistry summary for a squad.

    Attributes:
        total_chemistry: Sum of pair points.
        max_possible_chemistry: Pair count times the best pair score.
        percentage: total / max as a whole-number percentage.
        grade: Grade band from the unrounded percentage.
    """

    total_chemistry: int
    max_possible_chemistry: int
    percentage: int
    grade: ChemistryGrade

    @property
    def color(self) -> str:
        return self.grade.color


def pair_chemistry(first: ChemistryMember, second: ChemistryMember) -> int:
    """Points for one pair of players; up to MAX_PAIR_POINTS."""
    points = 0
    if first.club == second.club:
        points += POINTS_SAME_CLUB
    if first.nationality == second.nationality:
        points += POINTS_SAME_NATIONALITY
    if first.position == second.position:
        points += POINTS_SAME_POSITION
    return points


def compute_chemistry(players: Sequence[ChemistryMember]) -> ChemistryResult:
    """
    Score every unordered pair of players in a squad.

    Squads of fewer than two players score 0% and grade Poor.
    """
    if len(players) < 2:
        return ChemistryResult(
            total_chemistry=0,
            max_possible_chemistry=0,
            percentage=0,
            grade=ChemistryGrade.POOR,
        )

    total = sum(pair_chemistry(a, b) for a, b in combinations(players, 2))
    pair_count = len(players) * (len(players) - 1) // 2
    max_possible = pair_count * MAX_PAIR_POINTS
    ratio = 100 * total / max_possible

    return ChemistryResult(
        total_chemistry=total,
        max_possible_chemistry=max_possible,
        percentage=math.floor(ratio + 0.5),
        grade=ChemistryGrade.for_percentage(ratio),
    )
