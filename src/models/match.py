"""Match statistics data model."""

from dataclasses import asdict, dataclass


# Count fields that must never be negative
COUNT_FIELDS = (
    "minutes_played",
    "goals",
    "assists",
    "saves",
    "penalties_saved",
    "yellow_cards",
    "red_cards",
    "own_goals",
    "goals_conceded",
)

# Stored boolean spellings accepted for cleanSheet
TRUE_VALUES = frozenset({"true", "1", "yes"})
FALSE_VALUES = frozenset({"false", "0", "no", ""})


def parse_flag(value: object) -> bool:
    """
    Parse a stored boolean flag.

    Raises:
        ValueError: If the value is not a recognisable boolean.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
    raise ValueError(f"Not a boolean flag: {value!r}")


@dataclass
class MatchStats:
    """
    Statistics for a single player in a single gameweek.

    All count fields default to 0 and clean_sheet defaults to False.
    """

    minutes_played: int = 0
    goals: int = 0
    assists: int = 0
    clean_sheet: bool = False
    saves: int = 0
    penalties_saved: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    own_goals: int = 0
    goals_conceded: int = 0

    def __post_init__(self) -> None:
        """Validate stats are non-negative."""
        for field_name in COUNT_FIELDS:
            if getattr(self, field_name) < 0:
                raise ValueError(f"{field_name} cannot be negative")

    @property
    def played(self) -> bool:
        """Check if the player got on the pitch."""
        return self.minutes_played > 0

    def to_dict(self) -> dict:
        """Serialize using the stored camelCase keys."""
        data = asdict(self)
        return {
            "minutesPlayed": data["minutes_played"],
            "goals": data["goals"],
            "assists": data["assists"],
            "cleanSheet": data["clean_sheet"],
            "saves": data["saves"],
            "penaltiesSaved": data["penalties_saved"],
            "yellowCards": data["yellow_cards"],
            "redCards": data["red_cards"],
            "ownGoals": data["own_goals"],
            "goalsConceded": data["goals_conceded"],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MatchStats":
        return cls(
            minutes_played=int(data.get("minutesPlayed", 0)),
            goals=int(data.get("goals", 0)),
            assists=int(data.get("assists", 0)),
            clean_sheet=parse_flag(data.get("cleanSheet", False)),
            saves=int(data.get("saves", 0)),
            penalties_saved=int(data.get("penaltiesSaved", 0)),
            yellow_cards=int(data.get("yellowCards", 0)),
            red_cards=int(data.get("redCards", 0)),
            own_goals=int(data.get("ownGoals", 0)),
            goals_conceded=int(data.get("goalsConceded", 0)),
        )
