"""Formation data model and preset formations."""

from dataclasses import dataclass

from .player import Position


STARTING_XI_SIZE = 11


@dataclass(frozen=True)
class PositionCounts:
    """Required number of starters for each of the four positions."""

    gk: int
    defenders: int
    midfielders: int
    attackers: int

    def __post_init__(self) -> None:
        for position in Position:
            if self.get(position) < 0:
                raise ValueError(f"{position.value} count cannot be negative")

    def get(self, position: Position) -> int:
        """Return the required count for a position."""
        if position == Position.GK:
            return self.gk
        if position == Position.DEF:
            return self.defenders
        if position == Position.MID:
            return self.midfielders
        if position == Position.ATT:
            return self.attackers
        raise ValueError(f"Unknown position: {position!r}")

    @property
    def total(self) -> int:
        """Sum of all four counts."""
        return self.gk + self.defenders + self.midfielders + self.attackers

    def to_dict(self) -> dict[str, int]:
        return {position.value: self.get(position) for position in Position}

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> "PositionCounts":
        return cls(
            gk=int(data["GK"]),
            defenders=int(data["DEF"]),
            midfielders=int(data["MID"]),
            attackers=int(data["ATT"]),
        )


@dataclass(frozen=True)
class Formation:
    """
    A named distribution of the eleven starting slots.

    Attributes:
        id: Identifier such as "4-3-3".
        name: Display name.
        positions: Required starters per position (sums to 11).
        description: Short tactical description.
        style: Playing style label.
    """

    id: str
    name: str
    positions: PositionCounts
    description: str = ""
    style: str = ""

    def __post_init__(self) -> None:
        if self.positions.total != STARTING_XI_SIZE:
            raise ValueError(
                f"Formation {self.id} has {self.positions.total} slots, "
                f"expected {STARTING_XI_SIZE}"
            )

    def slots_for(self, position: Position) -> int:
        """Return how many starters this formation allows at a position."""
        return self.positions.get(position)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "positions": self.positions.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Formation":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            positions=PositionCounts.from_dict(data["positions"]),
            description=data.get("description", ""),
            style=data.get("style", ""),
        )


FORMATIONS: dict[str, Formation] = {
    f.id: f
    for f in (
        Formation(
            id="4-3-3",
            name="4-3-3",
            positions=PositionCounts(gk=1, defenders=4, midfielders=3, attackers=3),
            description="Balanced formation with strong attacking width",
            style="Attacking",
        ),
        Formation(
            id="4-4-2",
            name="4-4-2",
            positions=PositionCounts(gk=1, defenders=4, midfielders=4, attackers=2),
            description="Classic formation with solid midfield control",
            style="Balanced",
        ),
        Formation(
            id="3-5-2",
            name="3-5-2",
            positions=PositionCounts(gk=1, defenders=3, midfielders=5, attackers=2),
            description="Midfield dominance with wing-back support",
            style="Possession",
        ),
        Formation(
            id="4-2-3-1",
            name="4-2-3-1",
            # Holding pair and attacking three both count as midfield
            positions=PositionCounts(gk=1, defenders=4, midfielders=5, attackers=1),
            description="Modern formation with creative attacking midfield",
            style="Modern",
        ),
        Formation(
            id="5-3-2",
            name="5-3-2",
            positions=PositionCounts(gk=1, defenders=5, midfielders=3, attackers=2),
            description="Defensive solidity with counter-attacking threat",
            style="Defensive",
        ),
    )
}


def get_formation(formation_id: str) -> Formation:
    """
    Look up a preset formation.

    Raises:
        KeyError: If no preset has this id.
    """
    try:
        return FORMATIONS[formation_id]
    except KeyError:
        raise KeyError(f"Unknown formation: {formation_id}") from None
