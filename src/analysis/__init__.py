"""Analysis modules for points scoring, simulation and squad validation."""

from .calculator import (
    PointsBreakdown,
    calculate_player_points,
    calculate_points,
)
from .chemistry import ChemistryGrade, ChemistryResult, compute_chemistry
from .leaderboard import ManagerStanding, RankedStanding, rank_managers
from .recommender import SquadSuggestion, build_budget_squad, value_ratio
from .simulator import (
    generate_random_stats,
    simulate_gameweek,
    simulate_gameweek_for_managers,
    simulate_player_pool,
)
from .validator import (
    SquadSession,
    SquadValidationError,
    ValidationResult,
    add_to_bench,
    add_to_squad,
    can_add_to_bench,
    can_add_to_squad,
    can_substitute,
    find_eligible_players,
    get_bench_slots_remaining,
    get_max_player_price,
    get_position_slots_remaining,
    remove_from_bench,
    remove_from_squad,
    set_formation,
    substitute,
    validate_squad,
)

__all__ = [
    # Calculator
    "PointsBreakdown",
    "calculate_player_points",
    "calculate_points",
    # Chemistry
    "ChemistryGrade",
    "ChemistryResult",
    "compute_chemistry",
    # Leaderboard
    "ManagerStanding",
    "RankedStanding",
    "rank_managers",
    # Recommender
    "SquadSuggestion",
    "build_budget_squad",
    "value_ratio",
    # Simulator
    "generate_random_stats",
    "simulate_gameweek",
    "simulate_gameweek_for_managers",
    "simulate_player_pool",
    # Validator
    "SquadSession",
    "SquadValidationError",
    "ValidationResult",
    "add_to_bench",
    "add_to_squad",
    "can_add_to_bench",
    "can_add_to_squad",
    "can_substitute",
    "find_eligible_players",
    "get_bench_slots_remaining",
    "get_max_player_price",
    "get_position_slots_remaining",
    "remove_from_bench",
    "remove_from_squad",
    "set_formation",
    "substitute",
    "validate_squad",
]
