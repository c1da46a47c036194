"""Recommender module for budget-optimised squad suggestions."""

from dataclasses import dataclass
from typing import Iterable, Optional

from ..models.formation import Formation, get_formation
from ..models.player import Player, Position
from ..models.squad import STARTING_BUDGET


DEFAULT_FORMATION_ID = "4-4-2"

# Positions are filled in this order
FILL_ORDER = (Position.GK, Position.DEF, Position.MID, Position.ATT)


@dataclass
class SquadSuggestion:
    """
    A suggested starting squad.

    Attributes:
        players: Selected players, grouped by position in FILL_ORDER.
        remaining_budget: Budget left after buying them.
        formation: Formation the squad was built for.
    """

    players: list[Player]
    remaining_budget: int
    formation: Formation

    @property
    def is_complete(self) -> bool:
        """Check if every formation slot was filled."""
        return len(self.players) == self.formation.positions.total


def value_ratio(player: Player) -> float:
    """
    Calculate the value metric: rating per million.

    Args:
        player: The player to rate.

    Returns:
        Rating per million of price. Free players rank first.
    """
    if player.price <= 0:
        return float("inf")
    return player.rating / (player.price / 1_000_000)


def build_budget_squad(
    players: Iterable[Player],
    formation: Optional[Formation] = None,
    budget: int = STARTING_BUDGET,
) -> SquadSuggestion:
    """
    Greedily pick the best-value starting squad for a formation.

    Positions are filled goalkeeper first. For each slot the best-value
    player still affordable is taken; a slot stays empty when nobody fits
    the remaining budget.

    Args:
        players: Player pool to choose from.
        formation: Target formation. Defaults to 4-4-2.
        budget: Money available.

    Returns:
        SquadSuggestion with the chosen players and leftover budget.
    """
    formation = formation or get_formation(DEFAULT_FORMATION_ID)
    by_value = sorted(players, key=value_ratio, reverse=True)

    selected: list[Player] = []
    selected_ids: set[str] = set()
    remaining = budget

    for position in FILL_ORDER:
        for _ in range(formation.slots_for(position)):
            pick = next(
                (
                    p
                    for p in by_value
                    if p.position == position
                    and p.id not in selected_ids
                    and p.price <= remaining
                ),
                None,
            )
            if pick is None:
                break
            selected.append(pick)
            selected_ids.add(pick.id)
            remaining -= pick.price

    return SquadSuggestion(players=selected, remaining_budget=remaining, formation=formation)
