"""Player catalog: loading, attribute generation and price balancing."""

import csv
import dataclasses
import logging
import math
import random
from pathlib import Path
from typing import Iterable, Optional

from ..models import ATTRIBUTE_NAMES, STARTING_XI_SIZE, Player, Position
from ..models.squad import STARTING_BUDGET
from .base import ParseError


logger = logging.getLogger(__name__)


# Path to the bundled player roster
PLAYERS_CSV_PATH = Path(__file__).parent.parent.parent / "data" / "players.csv"

# Attribute profile per position, as a fraction of overall rating
ATTRIBUTE_PROFILES: dict[Position, dict[str, float]] = {
    Position.GK: {
        "pace": 0.5, "shooting": 0.2, "passing": 0.7,
        "defending": 0.95, "dribbling": 0.4, "physical": 0.8,
    },
    Position.DEF: {
        "pace": 0.8, "shooting": 0.4, "passing": 0.7,
        "defending": 0.9, "dribbling": 0.6, "physical": 0.85,
    },
    Position.MID: {
        "pace": 0.75, "shooting": 0.7, "passing": 0.85,
        "defending": 0.6, "dribbling": 0.8, "physical": 0.7,
    },
    Position.ATT: {
        "pace": 0.9, "shooting": 0.85, "passing": 0.6,
        "defending": 0.3, "dribbling": 0.85, "physical": 0.75,
    },
}

# Lowest value each generated attribute may take
ATTRIBUTE_FLOORS = {
    "pace": 30,
    "shooting": 20,
    "passing": 30,
    "defending": 20,
    "dribbling": 30,
    "physical": 30,
}
ATTRIBUTE_CEILING = 99

# Rating-based cost
COST_PER_RATING_POINT = 100_000
COST_VARIANCE = 2_000_000
COST_ROUNDING = 100_000

# Budget balancing
POSITION_PRICE_MULTIPLIERS = {
    Position.GK: 0.7,
    Position.DEF: 0.8,
    Position.MID: 1.0,
    Position.ATT: 1.4,
}
REFERENCE_RATING = 80
PRICE_VARIANCE = 0.3
PRICE_ROUNDING = 5_000_000
MIN_PRICE = 20_000_000


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def generate_attributes(
    position: Position,
    rating: int,
    rng: Optional[random.Random] = None,
) -> dict[str, int]:
    """
    Generate the six skill attributes from an overall rating.

    Each attribute is the position's profile fraction of the rating plus a
    jitter of -5..+4, clamped to its floor and 99.

    Args:
        position: Player's position.
        rating: Overall rating.
        rng: Random generator for the jitter.

    Returns:
        Attribute values keyed by name.
    """
    rng = rng or random.Random()
    profile = ATTRIBUTE_PROFILES[position]
    attributes = {}
    for name in ATTRIBUTE_NAMES:
        value = _round_half_up(rating * profile[name] + rng.randint(-5, 4))
        attributes[name] = min(ATTRIBUTE_CEILING, max(ATTRIBUTE_FLOORS[name], value))
    return attributes


def calculate_cost(rating: int, rng: Optional[random.Random] = None) -> int:
    """Price a player from rating plus up to 2M of variance, rounded to 100k."""
    rng = rng or random.Random()
    raw = rating * COST_PER_RATING_POINT + rng.randrange(COST_VARIANCE)
    return _round_half_up(raw / COST_ROUNDING) * COST_ROUNDING


def balanced_price(
    position: Position,
    rating: int,
    budget: int = STARTING_BUDGET,
    rng: Optional[random.Random] = None,
) -> int:
    """
    Price a player so that a starting XI costs roughly the whole budget.

    The baseline is the budget per starter, scaled by position and by
    rating relative to 80, with up to 30% variance either way. Prices are
    rounded to 5M with a 20M floor.
    """
    rng = rng or random.Random()
    baseline = (
        budget / STARTING_XI_SIZE
        * POSITION_PRICE_MULTIPLIERS[position]
        * rating / REFERENCE_RATING
    )
    variance = baseline * PRICE_VARIANCE
    adjusted = baseline + rng.uniform(-variance, variance)
    return max(MIN_PRICE, _round_half_up(adjusted / PRICE_ROUNDING) * PRICE_ROUNDING)


def balance_prices(
    players: Iterable[Player],
    budget: int = STARTING_BUDGET,
    rng: Optional[random.Random] = None,
) -> list[Player]:
    """Reprice every player with balanced_price."""
    rng = rng or random.Random()
    return [
        dataclasses.replace(p, price=balanced_price(p.position, p.rating, budget, rng))
        for p in players
    ]


def load_players_from_csv(
    csv_path: Optional[Path] = None,
    rng: Optional[random.Random] = None,
) -> list[Player]:
    """
    Load players from a CSV file.

    Required columns: id, name, club, position, nationality, rating.
    Optional columns: price and the six attributes. Missing attributes are
    generated from the rating, a missing price from calculate_cost.

    Args:
        csv_path: Path to CSV file. Defaults to data/players.csv.
        rng: Random generator for generated values.

    Returns:
        List of Player objects, in file order.

    Raises:
        ParseError: If a row is missing a required column or has bad values.
    """
    path = csv_path or PLAYERS_CSV_PATH
    rng = rng or random.Random()
    players: list[Player] = []

    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            try:
                position = Position.from_value(row["position"])
                rating = int(row["rating"])
                generated = generate_attributes(position, rating, rng)
                attributes = {
                    name: int(row[name]) if row.get(name) else generated[name]
                    for name in ATTRIBUTE_NAMES
                }
                price = int(row["price"]) if row.get("price") else calculate_cost(rating, rng)
                players.append(
                    Player(
                        id=row["id"].strip(),
                        name=row["name"].strip(),
                        position=position,
                        club=row["club"].strip(),
                        nationality=row["nationality"].strip(),
                        rating=rating,
                        price=price,
                        **attributes,
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                raise ParseError(f"{path}:{line_no}: invalid player row ({e})") from e

    logger.debug("Loaded %d players from %s", len(players), path)
    return players


def create_sample_players(
    rng: Optional[random.Random] = None,
    budget: int = STARTING_BUDGET,
) -> list[Player]:
    """
    Create the bundled player catalog with budget-balanced prices.

    Returns:
        List of sample Player objects across the league's clubs.
    """
    rng = rng or random.Random()
    return balance_prices(load_players_from_csv(rng=rng), budget=budget, rng=rng)


def get_players_by_position(
    players: Iterable[Player], position: Optional[Position] = None
) -> list[Player]:
    """Filter players by position; no position returns everyone."""
    if position is None:
        return list(players)
    return [p for p in players if p.position == position]


def get_player_by_id(players: Iterable[Player], player_id: str) -> Optional[Player]:
    return next((p for p in players if p.id == player_id), None)


def search_players(players: Iterable[Player], query: str) -> list[Player]:
    """Case-insensitive substring search over name, club and position."""
    needle = query.lower()
    return [
        p
        for p in players
        if needle in p.name.lower()
        or needle in p.club.lower()
        or needle in p.position.value.lower()
    ]
