"""Per-manager squad state: starting squad, bench, budget and formation."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from .formation import STARTING_XI_SIZE, Formation
from .player import Player, Position


# Game constants
STARTING_BUDGET = 1_000_000_000
MAX_BENCH_SIZE = 4
MAX_SQUAD_SIZE_NO_FORMATION = 15
MAX_ROSTER_SIZE = 15


@dataclass
class SquadState:
    """
    A manager's squad at a point in time.

    The budget is conserved: the budget the manager started with always
    equals the current budget plus the price of every held player.

    Attributes:
        budget: Unspent money in the smallest currency unit.
        squad: Starting XI candidates, in selection order.
        bench: Reserve players, in selection order.
        selected_formation: Formation gating future squad additions.
    """

    budget: int = STARTING_BUDGET
    squad: list[Player] = field(default_factory=list)
    bench: list[Player] = field(default_factory=list)
    selected_formation: Optional[Formation] = None

    @classmethod
    def new(cls, budget: int = STARTING_BUDGET) -> "SquadState":
        """Create the empty state a manager gets at registration."""
        return cls(budget=budget)

    @property
    def players(self) -> list[Player]:
        """All held players, squad first."""
        return [*self.squad, *self.bench]

    @property
    def player_ids(self) -> set[str]:
        return {p.id for p in self.players}

    @property
    def roster_size(self) -> int:
        return len(self.squad) + len(self.bench)

    @property
    def total_value(self) -> int:
        """Combined price of squad and bench."""
        return sum(p.price for p in self.players)

    @property
    def initial_budget(self) -> int:
        """Budget before any acquisitions."""
        return self.budget + self.total_value

    @property
    def is_starting_xi_complete(self) -> bool:
        return len(self.squad) == STARTING_XI_SIZE

    def get_squad_player(self, player_id: str) -> Optional[Player]:
        """Get a squad player by ID."""
        return next((p for p in self.squad if p.id == player_id), None)

    def get_bench_player(self, player_id: str) -> Optional[Player]:
        """Get a bench player by ID."""
        return next((p for p in self.bench if p.id == player_id), None)

    def contains(self, player_id: str) -> bool:
        """Check if a player is held in either the squad or the bench."""
        return (
            self.get_squad_player(player_id) is not None
            or self.get_bench_player(player_id) is not None
        )

    def position_counts(self, include_bench: bool = False) -> dict[Position, int]:
        """Count held players per position, with every position present."""
        players = self.players if include_bench else self.squad
        counts = Counter(p.position for p in players)
        return {position: counts.get(position, 0) for position in Position}

    def to_dict(self) -> dict:
        """Serialize to the shape a persistence layer stores per user."""
        return {
            "budget": self.budget,
            "squad": [p.to_dict() for p in self.squad],
            "bench": [p.to_dict() for p in self.bench],
            "selectedFormation": (
                self.selected_formation.to_dict() if self.selected_formation else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SquadState":
        formation = data.get("selectedFormation")
        return cls(
            budget=int(data.get("budget", STARTING_BUDGET)),
            squad=[Player.from_dict(p) for p in data.get("squad", [])],
            bench=[Player.from_dict(p) for p in data.get("bench", [])],
            selected_formation=Formation.from_dict(formation) if formation else None,
        )
