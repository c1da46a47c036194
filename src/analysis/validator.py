"""Squad constraint validation and guarded squad mutations."""

import copy
import logging
import threading
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..models.formation import Formation
from ..models.player import Player, Position
from ..models.squad import (
    MAX_BENCH_SIZE,
    MAX_ROSTER_SIZE,
    MAX_SQUAD_SIZE_NO_FORMATION,
    SquadState,
)


logger = logging.getLogger(__name__)


# Error codes
FORMATION_SLOT_FULL = "FORMATION_SLOT_FULL"
SQUAD_FULL = "SQUAD_FULL"
BENCH_FULL = "BENCH_FULL"
ROSTER_FULL = "ROSTER_FULL"
INSUFFICIENT_BUDGET = "INSUFFICIENT_BUDGET"
DUPLICATE_PLAYER = "DUPLICATE_PLAYER"
PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
POSITION_MISMATCH = "POSITION_MISMATCH"
NEGATIVE_BUDGET = "NEGATIVE_BUDGET"


@dataclass
class SquadValidationError:
    """Represents a constraint violation for a squad operation."""

    code: str
    message: str


@dataclass
class ValidationResult:
    """
    Result of a validation check or guarded mutation.

    Attributes:
        is_valid: Whether the check passed (and the mutation was applied).
        errors: Constraint violations (empty if valid).
        warnings: Non-blocking issues.
    """

    is_valid: bool
    errors: list[SquadValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.is_valid

    @property
    def codes(self) -> list[str]:
        return [e.code for e in self.errors]


def _format_price(price: int) -> str:
    return f"{price / 1_000_000:,.1f}M"


def can_add_to_squad(state: SquadState, player: Player) -> ValidationResult:
    """
    Check if a player can join the starting squad.

    With a formation selected the player's position must have a free slot;
    without one the squad is capped at MAX_SQUAD_SIZE_NO_FORMATION.

    Args:
        state: The current squad state.
        player: The player to potentially add.

    Returns:
        ValidationResult indicating if the add is valid.
    """
    errors: list[SquadValidationError] = []

    if state.contains(player.id):
        errors.append(
            SquadValidationError(
                code=DUPLICATE_PLAYER,
                message=f"{player.name} is already in the squad or on the bench",
            )
        )
        return ValidationResult(is_valid=False, errors=errors)

    formation = state.selected_formation
    if formation is not None:
        current = state.position_counts()[player.position]
        allowed = formation.slots_for(player.position)
        if current >= allowed:
            errors.append(
                SquadValidationError(
                    code=FORMATION_SLOT_FULL,
                    message=f"{formation.name} allows {allowed} "
                    f"{player.position.value} ({current} selected)",
                )
            )
    elif len(state.squad) >= MAX_SQUAD_SIZE_NO_FORMATION:
        errors.append(
            SquadValidationError(
                code=SQUAD_FULL,
                message=f"Squad is full ({MAX_SQUAD_SIZE_NO_FORMATION} players)",
            )
        )

    if state.roster_size >= MAX_ROSTER_SIZE:
        errors.append(
            SquadValidationError(
                code=ROSTER_FULL,
                message=f"Squad and bench already hold {MAX_ROSTER_SIZE} players",
            )
        )

    if state.budget < player.price:
        errors.append(
            SquadValidationError(
                code=INSUFFICIENT_BUDGET,
                message=f"{player.name} costs {_format_price(player.price)}, "
                f"only {_format_price(state.budget)} left",
            )
        )

    return ValidationResult(is_valid=len(errors) == 0, errors=errors)


def can_add_to_bench(state: SquadState, player: Player) -> ValidationResult:
    """
    Check if a player can join the bench.

    Args:
        state: The current squad state.
        player: The player to potentially add.

    Returns:
        ValidationResult indicating if the add is valid.
    """
    errors: list[SquadValidationError] = []

    if state.contains(player.id):
        errors.append(
            SquadValidationError(
                code=DUPLICATE_PLAYER,
                message=f"{player.name} is already in the squad or on the bench",
            )
        )
        return ValidationResult(is_valid=False, errors=errors)

    if len(state.bench) >= MAX_BENCH_SIZE:
        errors.append(
            SquadValidationError(
                code=BENCH_FULL,
                message=f"Bench is full ({MAX_BENCH_SIZE} players)",
            )
        )

    if state.roster_size >= MAX_ROSTER_SIZE:
        errors.append(
            SquadValidationError(
                code=ROSTER_FULL,
                message=f"Squad and bench already hold {MAX_ROSTER_SIZE} players",
            )
        )

    if state.budget < player.price:
        errors.append(
            SquadValidationError(
                code=INSUFFICIENT_BUDGET,
                message=f"{player.name} costs {_format_price(player.price)}, "
                f"only {_format_price(state.budget)} left",
            )
        )

    return ValidationResult(is_valid=len(errors) == 0, errors=errors)


def can_substitute(
    state: SquadState,
    squad_player_id: str,
    bench_player_id: str,
) -> ValidationResult:
    """
    Check if a squad player can swap places with a bench player.

    Both players must exist in their containers and share a position.
    """
    errors: list[SquadValidationError] = []

    squad_player = state.get_squad_player(squad_player_id)
    bench_player = state.get_bench_player(bench_player_id)

    if squad_player is None:
        errors.append(
            SquadValidationError(
                code=PLAYER_NOT_FOUND,
                message=f"Player {squad_player_id} is not in the squad",
            )
        )
    if bench_player is None:
        errors.append(
            SquadValidationError(
                code=PLAYER_NOT_FOUND,
                message=f"Player {bench_player_id} is not on the bench",
            )
        )
    if errors:
        return ValidationResult(is_valid=False, errors=errors)

    if squad_player.position != bench_player.position:
        errors.append(
            SquadValidationError(
                code=POSITION_MISMATCH,
                message=f"Cannot swap {squad_player.position.value} "
                f"{squad_player.name} for {bench_player.position.value} "
                f"{bench_player.name}",
            )
        )

    return ValidationResult(is_valid=len(errors) == 0, errors=errors)


def add_to_squad(state: SquadState, player: Player) -> ValidationResult:
    """Buy a player into the starting squad. State is untouched on failure."""
    result = can_add_to_squad(state, player)
    if result.is_valid:
        state.budget -= player.price
        state.squad.append(player)
    return result


def add_to_bench(state: SquadState, player: Player) -> ValidationResult:
    """Buy a player onto the bench. State is untouched on failure."""
    result = can_add_to_bench(state, player)
    if result.is_valid:
        state.budget -= player.price
        state.bench.append(player)
    return result


def remove_from_squad(state: SquadState, player_id: str) -> ValidationResult:
    """Sell a squad player and refund the price. Unknown ids are a no-op."""
    player = state.get_squad_player(player_id)
    if player is None:
        return ValidationResult(
            is_valid=True, warnings=[f"Player {player_id} is not in the squad"]
        )
    state.squad.remove(player)
    state.budget += player.price
    return ValidationResult(is_valid=True)


def remove_from_bench(state: SquadState, player_id: str) -> ValidationResult:
    """Sell a bench player and refund the price. Unknown ids are a no-op."""
    player = state.get_bench_player(player_id)
    if player is None:
        return ValidationResult(
            is_valid=True, warnings=[f"Player {player_id} is not on the bench"]
        )
    state.bench.remove(player)
    state.budget += player.price
    return ValidationResult(is_valid=True)


def substitute(
    state: SquadState,
    squad_player_id: str,
    bench_player_id: str,
) -> ValidationResult:
    """
    Swap a squad player with a bench player of the same position.

    Each player takes the other's slot, so list order is kept. No money
    changes hands.
    """
    result = can_substitute(state, squad_player_id, bench_player_id)
    if not result.is_valid:
        return result

    squad_index = next(i for i, p in enumerate(state.squad) if p.id == squad_player_id)
    bench_index = next(i for i, p in enumerate(state.bench) if p.id == bench_player_id)
    state.squad[squad_index], state.bench[bench_index] = (
        state.bench[bench_index],
        state.squad[squad_index],
    )
    return result


def _formation_overflow(state: SquadState, formation: Formation) -> list[str]:
    warnings = []
    for position, count in state.position_counts().items():
        allowed = formation.slots_for(position)
        if count > allowed:
            warnings.append(
                f"{count} {position.value} selected but {formation.name} "
                f"allows {allowed}"
            )
    return warnings


def set_formation(state: SquadState, formation: Formation) -> ValidationResult:
    """
    Select a formation for future squad additions.

    Existing players are never evicted; positions now over the new limit
    come back as warnings.
    """
    state.selected_formation = formation
    warnings = _formation_overflow(state, formation)
    if warnings:
        logger.info("Formation %s leaves squad over limit: %s", formation.id, warnings)
    return ValidationResult(is_valid=True, warnings=warnings)


def validate_squad(state: SquadState) -> ValidationResult:
    """
    Audit a whole squad state, e.g. one loaded from storage.

    Args:
        state: The squad state to check.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[SquadValidationError] = []
    warnings: list[str] = []

    all_ids = [p.id for p in state.players]
    duplicates = sorted({pid for pid in all_ids if all_ids.count(pid) > 1})
    for player_id in duplicates:
        errors.append(
            SquadValidationError(
                code=DUPLICATE_PLAYER,
                message=f"Player {player_id} is held more than once",
            )
        )

    if len(state.bench) > MAX_BENCH_SIZE:
        errors.append(
            SquadValidationError(
                code=BENCH_FULL,
                message=f"Bench has {len(state.bench)} players (max {MAX_BENCH_SIZE})",
            )
        )

    if state.roster_size > MAX_ROSTER_SIZE:
        errors.append(
            SquadValidationError(
                code=ROSTER_FULL,
                message=f"Squad and bench hold {state.roster_size} players "
                f"(max {MAX_ROSTER_SIZE})",
            )
        )

    if state.budget < 0:
        errors.append(
            SquadValidationError(
                code=NEGATIVE_BUDGET,
                message=f"Budget is overdrawn ({_format_price(state.budget)})",
            )
        )

    if state.selected_formation is None:
        if len(state.squad) > MAX_SQUAD_SIZE_NO_FORMATION:
            errors.append(
                SquadValidationError(
                    code=SQUAD_FULL,
                    message=f"Squad has {len(state.squad)} players "
                    f"(max {MAX_SQUAD_SIZE_NO_FORMATION})",
                )
            )
        if state.squad:
            warnings.append("No formation selected")
    else:
        warnings.extend(_formation_overflow(state, state.selected_formation))

    return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)


def get_position_slots_remaining(state: SquadState, position: Position) -> Optional[int]:
    """
    Get the number of free squad slots for a position.

    Returns:
        Free slots under the selected formation, or None without one.
    """
    if state.selected_formation is None:
        return None
    current = state.position_counts()[position]
    return max(0, state.selected_formation.slots_for(position) - current)


def get_bench_slots_remaining(state: SquadState) -> int:
    return max(0, MAX_BENCH_SIZE - len(state.bench))


def get_max_player_price(state: SquadState) -> int:
    """Most expensive price the manager can still afford."""
    return max(0, state.budget)


def find_eligible_players(
    state: SquadState,
    candidates: Iterable[Player],
    position: Optional[Position] = None,
) -> list[Player]:
    """
    Find candidates that could be added to the starting squad right now.

    Args:
        state: The current squad state.
        candidates: Players to filter.
        position: Only consider this position, if given.

    Returns:
        Candidates for which add_to_squad would succeed.
    """
    eligible: list[Player] = []
    for candidate in candidates:
        if position is not None and candidate.position != position:
            continue
        if can_add_to_squad(state, candidate).is_valid:
            eligible.append(candidate)
    return eligible


class SquadSession:
    """
    Serialized access to one manager's squad state.

    Every mutation holds the session lock for its whole read-modify-write,
    so concurrent requests for the same manager apply one at a time.
    """

    def __init__(self, state: Optional[SquadState] = None) -> None:
        self._state = state if state is not None else SquadState.new()
        self._lock = threading.Lock()

    def snapshot(self) -> SquadState:
        """Return an independent copy of the current state."""
        with self._lock:
            return copy.deepcopy(self._state)

    def add_to_squad(self, player: Player) -> ValidationResult:
        with self._lock:
            return add_to_squad(self._state, player)

    def remove_from_squad(self, player_id: str) -> ValidationResult:
        with self._lock:
            return remove_from_squad(self._state, player_id)

    def add_to_bench(self, player: Player) -> ValidationResult:
        with self._lock:
            return add_to_bench(self._state, player)

    def remove_from_bench(self, player_id: str) -> ValidationResult:
        with self._lock:
            return remove_from_bench(self._state, player_id)

    def substitute(self, squad_player_id: str, bench_player_id: str) -> ValidationResult:
        with self._lock:
            return substitute(self._state, squad_player_id, bench_player_id)

    def set_formation(self, formation: Formation) -> ValidationResult:
        with self._lock:
            return set_formation(self._state, formation)
