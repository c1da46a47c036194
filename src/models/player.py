"""Player data model for fantasy football."""

from dataclasses import dataclass
from enum import Enum


# Skill attributes carried on every player card
ATTRIBUTE_NAMES = ("pace", "shooting", "passing", "defending", "dribbling", "physical")

MAX_ATTRIBUTE = 99


class Position(Enum):
    """Player position category for scoring and formation slots."""

    GK = "GK"
    DEF = "DEF"
    MID = "MID"
    ATT = "ATT"

    @classmethod
    def from_value(cls, value: str) -> "Position":
        """
        Parse a position code case-insensitively.

        Raises:
            ValueError: If the code is not one of GK/DEF/MID/ATT.
        """
        try:
            return cls(value.strip().upper())
        except (AttributeError, ValueError):
            raise ValueError(f"Unknown position: {value!r}")


@dataclass(frozen=True)
class Player:
    """
    Represents a player in the catalog.

    Players are reference data: once loaded they never change, and two
    players are the same player when their ids match.

    Attributes:
        id: Unique identifier for the player.
        name: Player's full name.
        position: GK, DEF, MID or ATT.
        club: Club the player is registered with.
        nationality: Country the player represents.
        rating: Overall rating (0-99).
        price: Price in the smallest currency unit.
    """

    id: str
    name: str
    position: Position
    club: str
    nationality: str
    rating: int = 70
    price: int = 0
    pace: int = 70
    shooting: int = 70
    passing: int = 70
    defending: int = 70
    dribbling: int = 70
    physical: int = 70

    def __post_init__(self) -> None:
        """Validate player data after initialization."""
        if self.price < 0:
            raise ValueError("price cannot be negative")
        if not 0 <= self.rating <= MAX_ATTRIBUTE:
            raise ValueError(f"rating must be between 0 and {MAX_ATTRIBUTE}")
        for name in ATTRIBUTE_NAMES:
            value = getattr(self, name)
            if not 0 <= value <= MAX_ATTRIBUTE:
                raise ValueError(f"{name} must be between 0 and {MAX_ATTRIBUTE}")

    @property
    def attributes(self) -> dict[str, int]:
        """Return the six skill attributes keyed by name."""
        return {name: getattr(self, name) for name in ATTRIBUTE_NAMES}

    @property
    def is_goalkeeper(self) -> bool:
        """Check if player is a goalkeeper."""
        return self.position == Position.GK

    def to_dict(self) -> dict:
        """Serialize to the plain shape stored alongside a squad."""
        return {
            "id": self.id,
            "name": self.name,
            "position": self.position.value,
            "club": self.club,
            "nationality": self.nationality,
            "rating": self.rating,
            "price": self.price,
            **self.attributes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Player":
        """Build a player from its stored shape."""
        attributes = {name: int(data[name]) for name in ATTRIBUTE_NAMES if name in data}
        return cls(
            id=str(data["id"]),
            name=data["name"],
            position=Position.from_value(data["position"]),
            club=data.get("club") or data.get("team", ""),
            nationality=data.get("nationality", ""),
            rating=int(data.get("rating", 70)),
            price=int(data.get("price", data.get("cost", 0))),
            **attributes,
        )
