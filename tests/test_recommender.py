"""Tests for the recommender module."""

import pytest

from src.analysis.recommender import (
    DEFAULT_FORMATION_ID,
    SquadSuggestion,
    build_budget_squad,
    value_ratio,
)
from src.models import Player, Position, get_formation

MILLION = 1_000_000


def make_player(id: str, position: Position, rating: int, price_m: int) -> Player:
    """Helper to create a player priced in millions."""
    return Player(
        id=id,
        name=f"Player {id}",
        position=position,
        club="Stellenbosch",
        nationality="South Africa",
        rating=rating,
        price=price_m * MILLION,
    )


@pytest.fixture
def sample_players() -> list[Player]:
    """A pool with two options per slot of a 4-4-2, cheap and expensive."""
    players = []
    layout = {Position.GK: 1, Position.DEF: 4, Position.MID: 4, Position.ATT: 2}
    for position, count in layout.items():
        for i in range(count):
            # Good value: rating 80 for 10m
            players.append(make_player(f"{position.value}-value-{i}", position, 80, 10))
            # Poor value: rating 90 for 90m
            players.append(make_player(f"{position.value}-star-{i}", position, 90, 90))
    return players


class TestValueRatio:
    """Tests for value_ratio."""

    def test_rating_per_million(self) -> None:
        player = make_player("p", Position.MID, 80, 40)
        assert value_ratio(player) == pytest.approx(2.0)

    def test_free_player_ranks_first(self) -> None:
        player = make_player("p", Position.MID, 50, 0)
        assert value_ratio(player) == float("inf")


class TestBuildBudgetSquad:
    """Tests for build_budget_squad."""

    def test_defaults_to_442(self, sample_players: list[Player]) -> None:
        suggestion = build_budget_squad(sample_players)
        assert isinstance(suggestion, SquadSuggestion)
        assert suggestion.formation.id == DEFAULT_FORMATION_ID
        assert suggestion.is_complete

    def test_picks_best_value(self, sample_players: list[Player]) -> None:
        """Value players are preferred over expensive stars."""
        suggestion = build_budget_squad(sample_players)
        assert all("value" in p.id for p in suggestion.players)
        assert suggestion.remaining_budget == 1_000_000_000 - 11 * 10 * MILLION

    def test_fills_goalkeeper_first(self, sample_players: list[Player]) -> None:
        suggestion = build_budget_squad(sample_players)
        positions = [p.position for p in suggestion.players]
        assert positions == (
            [Position.GK] + [Position.DEF] * 4 + [Position.MID] * 4 + [Position.ATT] * 2
        )

    def test_respects_budget(self, sample_players: list[Player]) -> None:
        """Slots stay empty when nobody affordable remains."""
        suggestion = build_budget_squad(sample_players, budget=35 * MILLION)
        assert len(suggestion.players) == 3
        assert suggestion.remaining_budget == 5 * MILLION
        assert not suggestion.is_complete
        assert all(p.position in (Position.GK, Position.DEF) for p in suggestion.players)

    def test_falls_back_to_cheaper_option(self) -> None:
        """When the best value is unaffordable, the next affordable player is taken."""
        players = [
            make_player("gk-good", Position.GK, 90, 30),
            make_player("gk-cheap", Position.GK, 40, 20),
        ]
        suggestion = build_budget_squad(players, budget=25 * MILLION)
        assert [p.id for p in suggestion.players] == ["gk-cheap"]

    def test_honours_formation(self, sample_players: list[Player]) -> None:
        extra = [make_player(f"ATT-extra-{i}", Position.ATT, 70, 5) for i in range(2)]
        suggestion = build_budget_squad(sample_players + extra, get_formation("4-3-3"))
        counts = {position: 0 for position in Position}
        for player in suggestion.players:
            counts[player.position] += 1
        assert counts == {Position.GK: 1, Position.DEF: 4, Position.MID: 3, Position.ATT: 3}

    def test_no_duplicates(self, sample_players: list[Player]) -> None:
        suggestion = build_budget_squad(sample_players)
        ids = [p.id for p in suggestion.players]
        assert len(ids) == len(set(ids))

    def test_empty_pool(self) -> None:
        suggestion = build_budget_squad([])
        assert suggestion.players == []
        assert suggestion.remaining_budget == 1_000_000_000
