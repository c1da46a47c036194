"""Gameweek result and manager history models."""

from dataclasses import dataclass, field

from .match import MatchStats


@dataclass
class PlayerScore:
    """Points and the statistics that produced them."""

    points: int
    stats: MatchStats

    def to_dict(self) -> dict:
        return {"points": self.points, "stats": self.stats.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> "PlayerScore":
        return cls(points=int(data["points"]), stats=MatchStats.from_dict(data["stats"]))


@dataclass
class GameweekResult:
    """
    Outcome of one gameweek for one manager.

    Attributes:
        gameweek: Gameweek number (1-based).
        total_points: Points that count, starting squad only.
        squad_points: Sum of starting squad points.
        bench_points: Sum of bench points, informational.
        player_stats: Score for every squad and bench player by id.
        date: ISO-8601 timestamp of the simulation.
    """

    gameweek: int
    total_points: int
    squad_points: int
    bench_points: int
    player_stats: dict[str, PlayerScore] = field(default_factory=dict)
    date: str = ""

    def to_dict(self) -> dict:
        """Serialize to the record appended to a manager's history."""
        return {
            "gameweek": self.gameweek,
            "totalPoints": self.total_points,
            "squadPoints": self.squad_points,
            "benchPoints": self.bench_points,
            "playerStats": {pid: s.to_dict() for pid, s in self.player_stats.items()},
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameweekResult":
        return cls(
            gameweek=int(data["gameweek"]),
            total_points=int(data["totalPoints"]),
            squad_points=int(data["squadPoints"]),
            bench_points=int(data["benchPoints"]),
            player_stats={
                pid: PlayerScore.from_dict(s)
                for pid, s in data.get("playerStats", {}).items()
            },
            date=data.get("date", ""),
        )


@dataclass
class ManagerHistory:
    """Append-only list of a manager's gameweek results, ordered by gameweek."""

    results: list[GameweekResult] = field(default_factory=list)

    def append(self, result: GameweekResult) -> None:
        """
        Record a new gameweek result.

        Raises:
            ValueError: If the gameweek does not come after the last one.
        """
        if self.results and result.gameweek <= self.results[-1].gameweek:
            raise ValueError(
                f"Gameweek {result.gameweek} must come after "
                f"gameweek {self.results[-1].gameweek}"
            )
        self.results.append(result)

    @property
    def total_points(self) -> int:
        """Running total across all recorded gameweeks."""
        return sum(r.total_points for r in self.results)

    @property
    def last_gameweek_points(self) -> int:
        if not self.results:
            return 0
        return self.results[-1].total_points

    def __len__(self) -> int:
        return len(self.results)
