"""Gameweek simulation: synthetic match stats scored for whole squads."""

import logging
import random
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional

from ..models.gameweek import GameweekResult, PlayerScore
from ..models.match import MatchStats
from ..models.player import Player, Position
from ..models.squad import SquadState
from .calculator import calculate_points


logger = logging.getLogger(__name__)


# Stat generator probabilities
FULL_MATCH_MINUTES = 90
FULL_MATCH_CHANCE = 0.9
GOAL_CHANCE = {
    Position.ATT: 0.4,
    Position.MID: 0.2,
    Position.DEF: 0.05,
    Position.GK: 0.0,
}
ASSIST_CHANCE = 0.2
CLEAN_SHEET_CHANCE = 0.3
MAX_SAVES = 5
PENALTY_SAVE_CHANCE = 0.05
YELLOW_CARD_CHANCE = 0.15
RED_CARD_CHANCE = 0.02
OWN_GOAL_CHANCE = 0.01
MAX_GOALS_CONCEDED = 3

DEFAULT_MAX_WORKERS = 8


def generate_random_stats(
    position: Position,
    rng: Optional[random.Random] = None,
) -> MatchStats:
    """
    Generate position-weighted synthetic match statistics.

    Args:
        position: Player's position.
        rng: Random generator; pass a seeded one for reproducible output.

    Returns:
        MatchStats with every field inside its documented range.
    """
    rng = rng or random.Random()
    is_gk = position == Position.GK
    keeps_clean_sheets = position in (Position.GK, Position.DEF)

    if rng.random() < FULL_MATCH_CHANCE:
        minutes = FULL_MATCH_MINUTES
    else:
        minutes = rng.randrange(FULL_MATCH_MINUTES)

    goals = 0
    if rng.random() < GOAL_CHANCE[position]:
        # Attackers can grab a brace
        goals = rng.randint(1, 2) if position == Position.ATT else 1

    assists = 1 if rng.random() < ASSIST_CHANCE else 0
    clean_sheet = keeps_clean_sheets and rng.random() < CLEAN_SHEET_CHANCE

    saves = rng.randint(0, MAX_SAVES) if is_gk else 0
    penalties_saved = 1 if is_gk and rng.random() < PENALTY_SAVE_CHANCE else 0

    yellow_cards = 1 if rng.random() < YELLOW_CARD_CHANCE else 0
    red_cards = 1 if rng.random() < RED_CARD_CHANCE else 0
    own_goals = 1 if rng.random() < OWN_GOAL_CHANCE else 0
    goals_conceded = 0 if clean_sheet else rng.randint(1, MAX_GOALS_CONCEDED)

    return MatchStats(
        minutes_played=minutes,
        goals=goals,
        assists=assists,
        clean_sheet=clean_sheet,
        saves=saves,
        penalties_saved=penalties_saved,
        yellow_cards=yellow_cards,
        red_cards=red_cards,
        own_goals=own_goals,
        goals_conceded=goals_conceded,
    )


def score_player(player: Player, rng: Optional[random.Random] = None) -> PlayerScore:
    """Generate stats for a player and score them."""
    stats = generate_random_stats(player.position, rng)
    return PlayerScore(points=calculate_points(stats, player.position).total, stats=stats)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def simulate_gameweek(
    squad: Iterable[Player],
    bench: Iterable[Player],
    gameweek: int,
    rng: Optional[random.Random] = None,
    played_on: Optional[str] = None,
) -> GameweekResult:
    """
    Simulate one gameweek for a manager's squad and bench.

    Only the starting squad counts toward total_points. Bench players are
    scored and recorded but their points stay informational.

    Args:
        squad: Starting players.
        bench: Reserve players.
        gameweek: Gameweek number (1-based).
        rng: Random generator shared across all players of this run.
        played_on: Timestamp to stamp on the result. Defaults to now (UTC).

    Returns:
        GameweekResult with a score for every squad and bench player.

    Raises:
        ValueError: If gameweek is below 1.
    """
    if gameweek < 1:
        raise ValueError("gameweek must be at least 1")
    rng = rng or random.Random()

    player_stats: dict[str, PlayerScore] = {}
    squad_points = 0
    bench_points = 0

    for player in squad:
        score = score_player(player, rng)
        player_stats[player.id] = score
        squad_points += score.points

    for player in bench:
        score = score_player(player, rng)
        player_stats[player.id] = score
        bench_points += score.points

    logger.debug(
        "Gameweek %d simulated: %d players, squad %d pts, bench %d pts",
        gameweek,
        len(player_stats),
        squad_points,
        bench_points,
    )

    return GameweekResult(
        gameweek=gameweek,
        total_points=squad_points,
        squad_points=squad_points,
        bench_points=bench_points,
        player_stats=player_stats,
        date=played_on or _timestamp(),
    )


def simulate_player_pool(
    players: Iterable[Player],
    gameweek: int,
    rng: Optional[random.Random] = None,
) -> dict[str, PlayerScore]:
    """
    Score every player in a pool for one gameweek.

    Backs league-wide operations where each player gets one shared score
    regardless of which managers own them.
    """
    if gameweek < 1:
        raise ValueError("gameweek must be at least 1")
    rng = rng or random.Random()
    results = {player.id: score_player(player, rng) for player in players}
    logger.info("Scored %d players for gameweek %d", len(results), gameweek)
    return results


def manager_rng(seed: Optional[int], manager_id: str, gameweek: int) -> random.Random:
    """Build the generator for one manager's gameweek."""
    if seed is None:
        return random.Random()
    return random.Random(f"{seed}:{manager_id}:{gameweek}")


def simulate_gameweek_for_managers(
    states: Mapping[str, SquadState],
    gameweek: int,
    seed: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> dict[str, GameweekResult]:
    """
    Simulate a gameweek for many managers in parallel.

    Managers are independent, so each one runs on its own generator derived
    from (seed, manager_id, gameweek); a given seed reproduces the same
    results however the work is scheduled.

    Args:
        states: Squad state keyed by manager id. States are only read.
        gameweek: Gameweek number (1-based).
        seed: Base seed, or None for non-reproducible runs.
        max_workers: Thread pool size.

    Returns:
        GameweekResult keyed by manager id.
    """
    if gameweek < 1:
        raise ValueError("gameweek must be at least 1")
    if not states:
        return {}

    played_on = _timestamp()
    workers = max(1, min(max_workers or DEFAULT_MAX_WORKERS, len(states)))
    results: dict[str, GameweekResult] = {}

    with ThreadPoolExecutor(max_workers=workers) as executor:
        future_to_manager = {
            executor.submit(
                simulate_gameweek,
                list(state.squad),
                list(state.bench),
                gameweek,
                manager_rng(seed, manager_id, gameweek),
                played_on,
            ): manager_id
            for manager_id, state in states.items()
        }
        for future in as_completed(future_to_manager):
            results[future_to_manager[future]] = future.result()

    logger.info("Simulated gameweek %d for %d managers", gameweek, len(results))
    return {manager_id: results[manager_id] for manager_id in states}
