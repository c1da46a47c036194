"""Tests for data models."""

import pytest

from src.models import (
    FORMATIONS,
    Formation,
    GameweekResult,
    ManagerHistory,
    MatchStats,
    Player,
    PlayerScore,
    Position,
    PositionCounts,
    SquadState,
    STARTING_BUDGET,
    get_formation,
)


def make_player(id: str = "p1", position: Position = Position.MID, price: int = 0) -> Player:
    return Player(
        id=id,
        name="Themba Zwane",
        position=position,
        club="Mamelodi Sundowns",
        nationality="South Africa",
        rating=85,
        price=price,
    )


class TestPosition:
    """Tests for Position enum."""

    def test_from_value(self) -> None:
        assert Position.from_value("gk") == Position.GK
        assert Position.from_value(" ATT ") == Position.ATT

    def test_unknown_position_raises_error(self) -> None:
        with pytest.raises(ValueError, match="Unknown position"):
            Position.from_value("Striker")


class TestPlayer:
    """Tests for Player model."""

    def test_create_player(self) -> None:
        """Test basic player creation."""
        player = make_player(price=90_000_000)
        assert player.position == Position.MID
        assert player.price == 90_000_000
        assert player.attributes["pace"] == 70
        assert player.is_goalkeeper is False

    def test_negative_price_raises_error(self) -> None:
        with pytest.raises(ValueError, match="price cannot be negative"):
            make_player(price=-1)

    def test_attribute_out_of_range_raises_error(self) -> None:
        with pytest.raises(ValueError, match="pace"):
            Player(id="p", name="n", position=Position.GK, club="c", nationality="n", pace=100)

    def test_rating_out_of_range_raises_error(self) -> None:
        with pytest.raises(ValueError, match="rating"):
            Player(id="p", name="n", position=Position.GK, club="c", nationality="n", rating=-1)

    def test_player_is_immutable(self) -> None:
        player = make_player()
        with pytest.raises(AttributeError):
            player.price = 5  # type: ignore[misc]

    def test_dict_round_trip(self) -> None:
        player = make_player(position=Position.DEF, price=12)
        assert Player.from_dict(player.to_dict()) == player

    def test_from_dict_accepts_team_and_cost(self) -> None:
        """Older records used team and cost keys."""
        player = Player.from_dict(
            {"id": 7, "name": "X", "position": "ATT", "team": "AmaZulu", "cost": 30}
        )
        assert player.id == "7"
        assert player.club == "AmaZulu"
        assert player.price == 30


class TestFormation:
    """Tests for Formation model."""

    def test_presets(self) -> None:
        assert set(FORMATIONS) == {"4-3-3", "4-4-2", "3-5-2", "4-2-3-1", "5-3-2"}
        for formation in FORMATIONS.values():
            assert formation.positions.total == 11
            assert formation.slots_for(Position.GK) == 1

    def test_preset_counts(self) -> None:
        """The 4-2-3-1 midfield band holds five players behind a lone striker."""
        formation = get_formation("4-2-3-1")
        assert formation.slots_for(Position.DEF) == 4
        assert formation.slots_for(Position.MID) == 5
        assert formation.slots_for(Position.ATT) == 1

    @pytest.mark.parametrize(
        "formation_id,counts",
        [
            ("4-3-3", (1, 4, 3, 3)),
            ("4-4-2", (1, 4, 4, 2)),
            ("3-5-2", (1, 3, 5, 2)),
            ("4-2-3-1", (1, 4, 5, 1)),
            ("5-3-2", (1, 5, 3, 2)),
        ],
    )
    def test_every_preset_fills_eleven(
        self, formation_id: str, counts: tuple[int, int, int, int]
    ) -> None:
        formation = get_formation(formation_id)
        assert tuple(formation.slots_for(p) for p in Position) == counts
        assert sum(counts) == 11

    def test_unknown_formation(self) -> None:
        with pytest.raises(KeyError):
            get_formation("2-3-5-0")

    def test_must_sum_to_eleven(self) -> None:
        with pytest.raises(ValueError, match="expected 11"):
            Formation(id="bad", name="bad", positions=PositionCounts(1, 4, 4, 3))

    def test_negative_count(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            PositionCounts(gk=-1, defenders=5, midfielders=5, attackers=2)

    def test_dict_round_trip(self) -> None:
        formation = get_formation("3-5-2")
        restored = Formation.from_dict(formation.to_dict())
        assert restored.positions == formation.positions
        assert formation.to_dict()["positions"] == {"GK": 1, "DEF": 3, "MID": 5, "ATT": 2}


class TestMatchStats:
    """Tests for MatchStats model."""

    def test_defaults(self) -> None:
        stats = MatchStats()
        assert stats.minutes_played == 0
        assert stats.clean_sheet is False
        assert stats.played is False

    def test_negative_counts_rejected(self) -> None:
        with pytest.raises(ValueError, match="goals cannot be negative"):
            MatchStats(minutes_played=90, goals=-1)

    def test_to_dict_uses_stored_keys(self) -> None:
        data = MatchStats(minutes_played=90, penalties_saved=1).to_dict()
        assert data["minutesPlayed"] == 90
        assert data["penaltiesSaved"] == 1
        assert MatchStats.from_dict(data) == MatchStats(minutes_played=90, penalties_saved=1)

    @pytest.mark.parametrize(
        "stored,expected",
        [(True, True), (False, False), ("false", False), ("False", False), ("true", True),
         ("0", False), (1, True), (None, False)],
    )
    def test_clean_sheet_flag_parsing(self, stored: object, expected: bool) -> None:
        """String spellings of false do not turn into a clean sheet."""
        stats = MatchStats.from_dict({"minutesPlayed": 90, "cleanSheet": stored})
        assert stats.clean_sheet is expected

    def test_clean_sheet_flag_rejects_garbage(self) -> None:
        with pytest.raises(ValueError, match="Not a boolean flag"):
            MatchStats.from_dict({"cleanSheet": "maybe"})


class TestSquadState:
    """Tests for SquadState model."""

    def test_new_state(self) -> None:
        state = SquadState.new()
        assert state.budget == STARTING_BUDGET == 1_000_000_000
        assert state.squad == [] and state.bench == []
        assert state.selected_formation is None

    def test_derived_values(self) -> None:
        gk = make_player("gk", Position.GK, price=100)
        mid = make_player("mid", Position.MID, price=50)
        state = SquadState(budget=850, squad=[gk], bench=[mid])

        assert state.total_value == 150
        assert state.initial_budget == 1000
        assert state.roster_size == 2
        assert state.player_ids == {"gk", "mid"}
        assert state.contains("mid") is True
        assert state.get_squad_player("mid") is None
        assert state.position_counts() == {
            Position.GK: 1, Position.DEF: 0, Position.MID: 0, Position.ATT: 0,
        }
        assert state.position_counts(include_bench=True)[Position.MID] == 1

    def test_dict_round_trip(self) -> None:
        state = SquadState(
            budget=10,
            squad=[make_player("a")],
            bench=[make_player("b", Position.GK)],
            selected_formation=get_formation("4-4-2"),
        )
        data = state.to_dict()
        assert data["selectedFormation"]["id"] == "4-4-2"
        restored = SquadState.from_dict(data)
        assert restored.squad == state.squad
        assert restored.bench == state.bench
        assert restored.selected_formation.positions == state.selected_formation.positions


class TestManagerHistory:
    """Tests for ManagerHistory."""

    def make_result(self, gameweek: int, points: int) -> GameweekResult:
        return GameweekResult(
            gameweek=gameweek,
            total_points=points,
            squad_points=points,
            bench_points=3,
            player_stats={"p1": PlayerScore(points=points, stats=MatchStats(minutes_played=90))},
            date="2025-01-01T00:00:00+00:00",
        )

    def test_running_total(self) -> None:
        history = ManagerHistory()
        assert history.total_points == 0
        assert history.last_gameweek_points == 0

        history.append(self.make_result(1, 40))
        history.append(self.make_result(2, -2))
        assert history.total_points == 38
        assert history.last_gameweek_points == -2
        assert len(history) == 2

    def test_append_only_in_order(self) -> None:
        history = ManagerHistory()
        history.append(self.make_result(2, 10))
        with pytest.raises(ValueError, match="must come after"):
            history.append(self.make_result(2, 10))
        with pytest.raises(ValueError):
            history.append(self.make_result(1, 10))

    def test_result_dict_round_trip(self) -> None:
        result = self.make_result(1, 12)
        assert GameweekResult.from_dict(result.to_dict()) == result
