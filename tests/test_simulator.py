"""Tests for the stat generator and gameweek simulator."""

import random

import pytest

from src.analysis.calculator import calculate_points
from src.analysis.simulator import (
    generate_random_stats,
    manager_rng,
    score_player,
    simulate_gameweek,
    simulate_gameweek_for_managers,
    simulate_player_pool,
)
from src.models import MatchStats, Player, Position, SquadState


def make_player(id: str, position: Position) -> Player:
    """Helper to create test players."""
    return Player(
        id=id,
        name=f"Player {id}",
        position=position,
        club="Orlando Pirates",
        nationality="South Africa",
        price=50_000_000,
    )


def make_lineup() -> tuple[list[Player], list[Player]]:
    """A 4-4-2 starting eleven and a four-man bench."""
    layout = [(Position.GK, 1), (Position.DEF, 4), (Position.MID, 4), (Position.ATT, 2)]
    squad = [
        make_player(f"{position.value}{i}", position)
        for position, count in layout
        for i in range(count)
    ]
    bench = [
        make_player("bench-gk", Position.GK),
        make_player("bench-def", Position.DEF),
        make_player("bench-mid", Position.MID),
        make_player("bench-att", Position.ATT),
    ]
    return squad, bench


class TestGenerateRandomStats:
    """Tests for generate_random_stats."""

    @pytest.mark.parametrize("position", list(Position))
    def test_fields_within_ranges(self, position: Position) -> None:
        """Generated stats stay inside their documented ranges."""
        rng = random.Random(7)
        for _ in range(500):
            stats = generate_random_stats(position, rng)
            assert isinstance(stats, MatchStats)
            assert 0 <= stats.minutes_played <= 90
            assert 0 <= stats.goals <= 2
            assert stats.assists in (0, 1)
            assert 0 <= stats.saves <= 5
            assert stats.penalties_saved in (0, 1)
            assert stats.yellow_cards in (0, 1)
            assert stats.red_cards in (0, 1)
            assert stats.own_goals in (0, 1)
            if stats.clean_sheet:
                assert stats.goals_conceded == 0
            else:
                assert 1 <= stats.goals_conceded <= 3

    def test_position_specific_fields(self) -> None:
        """Only keepers make saves; only keepers and defenders keep clean sheets."""
        rng = random.Random(11)
        for _ in range(500):
            mid = generate_random_stats(Position.MID, rng)
            att = generate_random_stats(Position.ATT, rng)
            gk = generate_random_stats(Position.GK, rng)
            assert mid.saves == 0 and mid.penalties_saved == 0
            assert not mid.clean_sheet and not att.clean_sheet
            assert gk.goals == 0

    def test_attackers_score_more_than_defenders(self) -> None:
        """Goal probability is weighted towards attackers."""
        rng = random.Random(3)
        att_goals = sum(generate_random_stats(Position.ATT, rng).goals for _ in range(2000))
        def_goals = sum(generate_random_stats(Position.DEF, rng).goals for _ in range(2000))
        assert att_goals > def_goals

    def test_seeded_generator_is_reproducible(self) -> None:
        """Same seed produces the same stats."""
        first = [generate_random_stats(Position.MID, random.Random(42)) for _ in range(3)]
        second = [generate_random_stats(Position.MID, random.Random(42)) for _ in range(3)]
        assert first == second

    def test_generated_stats_score(self) -> None:
        """Every generated record is accepted by the calculator."""
        rng = random.Random(5)
        for position in Position:
            for _ in range(200):
                stats = generate_random_stats(position, rng)
                breakdown = calculate_points(stats, position)
                assert isinstance(breakdown.total, int)


class TestSimulateGameweek:
    """Tests for simulate_gameweek."""

    def test_all_players_recorded(self) -> None:
        """Eleven starters and four reserves give fifteen entries."""
        squad, bench = make_lineup()
        result = simulate_gameweek(squad, bench, 1, rng=random.Random(1))

        assert len(result.player_stats) == 15
        assert set(result.player_stats) == {p.id for p in squad + bench}

    def test_total_counts_squad_only(self) -> None:
        """Total points equal the starters' points; bench is informational."""
        squad, bench = make_lineup()
        result = simulate_gameweek(squad, bench, 3, rng=random.Random(2))

        squad_sum = sum(result.player_stats[p.id].points for p in squad)
        bench_sum = sum(result.player_stats[p.id].points for p in bench)
        assert result.total_points == squad_sum
        assert result.squad_points == squad_sum
        assert result.bench_points == bench_sum
        assert result.gameweek == 3

    def test_points_match_stats(self) -> None:
        """Stored points are the calculator's total for the stored stats."""
        squad, bench = make_lineup()
        result = simulate_gameweek(squad, bench, 1, rng=random.Random(9))
        for player in squad + bench:
            score = result.player_stats[player.id]
            assert score.points == calculate_points(score.stats, player.position).total

    def test_empty_squad(self) -> None:
        """An empty squad scores nothing."""
        result = simulate_gameweek([], [], 1)
        assert result.total_points == 0
        assert result.player_stats == {}
        assert result.date

    def test_played_on_override(self) -> None:
        """The date stamp can be supplied."""
        result = simulate_gameweek([], [], 2, played_on="2025-01-01T00:00:00+00:00")
        assert result.date == "2025-01-01T00:00:00+00:00"

    def test_invalid_gameweek(self) -> None:
        """Gameweeks start at 1."""
        with pytest.raises(ValueError, match="gameweek"):
            simulate_gameweek([], [], 0)

    def test_reproducible_with_seed(self) -> None:
        """Same seed gives the same result."""
        squad, bench = make_lineup()
        first = simulate_gameweek(squad, bench, 1, random.Random(99), played_on="x")
        second = simulate_gameweek(squad, bench, 1, random.Random(99), played_on="x")
        assert first == second

    def test_to_dict_shape(self) -> None:
        """Result serializes to the stored record shape."""
        squad, bench = make_lineup()
        data = simulate_gameweek(squad, bench, 1, random.Random(4)).to_dict()
        assert set(data) == {
            "gameweek", "totalPoints", "squadPoints", "benchPoints", "playerStats", "date",
        }
        entry = data["playerStats"]["GK0"]
        assert set(entry) == {"points", "stats"}
        assert "minutesPlayed" in entry["stats"]


class TestSimulatePlayerPool:
    """Tests for simulate_player_pool."""

    def test_scores_every_player(self) -> None:
        """Every pool player gets a score."""
        squad, bench = make_lineup()
        results = simulate_player_pool(squad + bench, 5, random.Random(0))
        assert set(results) == {p.id for p in squad + bench}

    def test_score_player(self) -> None:
        """score_player pairs stats with their points."""
        player = make_player("p1", Position.ATT)
        score = score_player(player, random.Random(8))
        assert score.points == calculate_points(score.stats, Position.ATT).total


class TestSimulateForManagers:
    """Tests for the parallel all-managers simulation."""

    def make_states(self) -> dict[str, SquadState]:
        squad, bench = make_lineup()
        return {
            "alice": SquadState(squad=squad, bench=bench),
            "bob": SquadState(squad=squad[:5], bench=[]),
            "carol": SquadState(),
        }

    def test_every_manager_simulated(self) -> None:
        """Each manager gets a result for the gameweek."""
        results = simulate_gameweek_for_managers(self.make_states(), 4, seed=1)
        assert list(results) == ["alice", "bob", "carol"]
        assert len(results["alice"].player_stats) == 15
        assert len(results["bob"].player_stats) == 5
        assert results["carol"].total_points == 0
        assert all(r.gameweek == 4 for r in results.values())

    def test_seeded_runs_match_sequential(self) -> None:
        """Parallel results equal a sequential run on the same per-manager generators."""
        states = self.make_states()
        parallel = simulate_gameweek_for_managers(states, 2, seed=123, max_workers=3)
        for manager_id, state in states.items():
            expected = simulate_gameweek(
                state.squad,
                state.bench,
                2,
                manager_rng(123, manager_id, 2),
                played_on=parallel[manager_id].date,
            )
            assert parallel[manager_id] == expected

    def test_no_managers(self) -> None:
        assert simulate_gameweek_for_managers({}, 1) == {}
