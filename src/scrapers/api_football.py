"""API-Football client: real fixture statistics normalized into MatchStats."""

import random
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Optional

from .. import config
from ..analysis.calculator import CLEAN_SHEET_MIN_MINUTES, calculate_points
from ..models import MatchStats, Player, Position
from .base import BaseScraper, FetchError, ParseError
from .catalog import calculate_cost, generate_attributes


# Fixture statuses that mean the match is over
FINISHED_STATUSES = frozenset({"FT", "AET", "PEN"})

# Fixture lineup position code → Position
FIXTURE_POSITION_MAP: dict[str, Position] = {
    "G": Position.GK,
    "D": Position.DEF,
    "M": Position.MID,
    "F": Position.ATT,
}

# Squad listing position name → Position
SQUAD_POSITION_MAP: dict[str, Position] = {
    "Goalkeeper": Position.GK,
    "Defender": Position.DEF,
    "Midfielder": Position.MID,
    "Attacker": Position.ATT,
}

# Squad listings carry no ratings; players with a known age get one in this band
SQUAD_RATING_MIN = 60
SQUAD_RATING_MAX = 84
SQUAD_RATING_UNKNOWN = 70
DEFAULT_NATIONALITY = "South Africa"


@dataclass
class RealPlayerPerformance:
    """
    A player's real-world fixture statistics and the points they earn.

    Attributes:
        player_id: Provider player id.
        name: Player name.
        team: Team name.
        position: Position played in the fixture.
        stats: Normalized match statistics.
        points: Fantasy points for the stats.
        fixture_id: Provider fixture id.
    """

    player_id: str
    name: str
    team: str
    position: Position
    stats: MatchStats
    points: int
    fixture_id: int


def map_fixture_position(code: Optional[str]) -> Position:
    """Map a fixture position code (G/D/M/F) to a Position, defaulting to MID."""
    return FIXTURE_POSITION_MAP.get(code or "", Position.MID)


def map_squad_position(name: Optional[str]) -> Position:
    """Map a squad position name (Goalkeeper, ...) to a Position, defaulting to MID."""
    return SQUAD_POSITION_MAP.get(name or "", Position.MID)


def _count(section: dict, key: str) -> int:
    return int(section.get(key) or 0)


def normalize_player_stats(raw: dict) -> MatchStats:
    """
    Convert one provider statistics block into MatchStats.

    Missing or null values count as 0. The provider does not report own
    goals, so they are always 0. A clean sheet is credited when the player
    lasted 60 minutes without conceding.

    Raises:
        ParseError: If a required section is missing or not numeric.
    """
    try:
        games = raw["games"]
        goals = raw["goals"]
        cards = raw["cards"]
        penalty = raw.get("penalty") or {}

        minutes = _count(games, "minutes")
        conceded = _count(goals, "conceded")
        return MatchStats(
            minutes_played=minutes,
            goals=_count(goals, "total"),
            assists=_count(goals, "assists"),
            clean_sheet=minutes >= CLEAN_SHEET_MIN_MINUTES and conceded == 0,
            saves=_count(goals, "saves"),
            penalties_saved=_count(penalty, "saved"),
            yellow_cards=_count(cards, "yellow"),
            red_cards=_count(cards, "red"),
            own_goals=0,
            goals_conceded=conceded,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ParseError(f"Malformed player statistics: {e}") from e


def parse_fixture_players(data: dict, fixture_id: int) -> list[RealPlayerPerformance]:
    """
    Parse a fixtures/players response into scored performances.

    Raises:
        ParseError: If the payload structure is not recognised.
    """
    performances: list[RealPlayerPerformance] = []
    try:
        for team_data in data.get("response") or []:
            team_name = team_data["team"]["name"]
            for entry in team_data["players"]:
                raw = entry["statistics"][0]
                stats = normalize_player_stats(raw)
                position = map_fixture_position(raw["games"].get("position"))
                performances.append(
                    RealPlayerPerformance(
                        player_id=str(entry["player"]["id"]),
                        name=entry["player"]["name"],
                        team=team_name,
                        position=position,
                        stats=stats,
                        points=calculate_points(stats, position).total,
                        fixture_id=fixture_id,
                    )
                )
    except (KeyError, IndexError, TypeError) as e:
        raise ParseError(f"Malformed players payload for fixture {fixture_id}: {e}") from e
    return performances


class APIFootballScraper(BaseScraper):
    """
    Client for the API-Football v3 REST API.

    Fetches:
    - Fixtures for a league and date range
    - Per-player statistics for finished fixtures
    - Team squads to build the player catalog
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        league_id: int = config.LEAGUE_ID,
        season: int = config.SEASON,
        base_url: str = config.API_FOOTBALL_BASE_URL,
        cache_dir: Optional[Path] = None,
        cache_ttl_hours: int = config.CACHE_TTL_HOURS,
    ) -> None:
        """
        Initialize the API-Football client.

        Args:
            api_key: RapidAPI key. Defaults to API_FOOTBALL_KEY from the environment.
            league_id: Provider league id.
            season: Season start year.
            base_url: API base URL.
            cache_dir: Directory for caching responses.
            cache_ttl_hours: Cache time-to-live in hours.
        """
        self.api_key = api_key if api_key is not None else config.API_FOOTBALL_KEY
        super().__init__(
            base_url=base_url,
            cache_dir=cache_dir,
            cache_ttl_hours=cache_ttl_hours,
            rate_limit_seconds=0.2,
            headers={
                "x-rapidapi-host": config.API_FOOTBALL_HOST,
                "x-rapidapi-key": self.api_key,
            },
        )
        self.league_id = league_id
        self.season = season

    def _get(self, endpoint: str, use_cache: bool = True, **params: Any) -> dict:
        if not self.api_key:
            raise FetchError("API_FOOTBALL_KEY is not set")
        data = self.get_json(endpoint, params, use_cache=use_cache)
        if not isinstance(data, dict):
            raise ParseError(f"Unexpected response from {endpoint}")
        if data.get("errors"):
            raise FetchError(f"API errors from {endpoint}: {data['errors']}")
        return data

    def fetch_fixtures(
        self, from_date: date, to_date: date, use_cache: bool = True
    ) -> list[dict]:
        """
        Fetch league fixtures played between two dates (inclusive).

        Returns:
            Raw fixture objects.
        """
        data = self._get(
            "fixtures",
            use_cache=use_cache,
            league=self.league_id,
            season=self.season,
            **{"from": from_date.isoformat(), "to": to_date.isoformat()},
        )
        fixtures = data.get("response") or []
        self.logger.info(
            "Found %d fixtures from %s to %s", len(fixtures), from_date, to_date
        )
        return fixtures

    def fetch_fixture_player_stats(
        self, fixture_id: int, use_cache: bool = True
    ) -> list[RealPlayerPerformance]:
        """Fetch and score every player's statistics for one fixture."""
        data = self._get("fixtures/players", use_cache=use_cache, fixture=fixture_id)
        return parse_fixture_players(data, fixture_id)

    def scrape(
        self, from_date: date, to_date: date, use_cache: bool = True
    ) -> list[RealPlayerPerformance]:
        """
        Score every player in finished fixtures between two dates.

        Fixtures with malformed player data are skipped.

        Returns:
            Performances across all finished fixtures.
        """
        performances: list[RealPlayerPerformance] = []
        for fixture in self.fetch_fixtures(from_date, to_date, use_cache=use_cache):
            try:
                fixture_id = int(fixture["fixture"]["id"])
                status = fixture["fixture"]["status"]["short"]
            except (KeyError, TypeError, ValueError):
                self.logger.warning("Skipping malformed fixture entry")
                continue

            if status not in FINISHED_STATUSES:
                continue

            try:
                performances.extend(
                    self.fetch_fixture_player_stats(fixture_id, use_cache=use_cache)
                )
            except ParseError as e:
                self.logger.warning("Skipping fixture %d: %s", fixture_id, e)

        self.logger.info("Scored %d player performances", len(performances))
        return performances

    def fetch_league_players(
        self, rng: Optional[random.Random] = None, use_cache: bool = True
    ) -> list[Player]:
        """
        Build the player catalog from every team squad in the league.

        Squad listings have no ratings, so each player gets a generated
        rating, attribute set and price.
        """
        rng = rng or random.Random()
        teams = self._get(
            "teams", use_cache=use_cache, league=self.league_id, season=self.season
        ).get("response") or []

        players: list[Player] = []
        for item in teams:
            try:
                team_id = item["team"]["id"]
                team_name = item["team"]["name"]
            except (KeyError, TypeError):
                self.logger.warning("Skipping malformed team entry")
                continue

            squad_data = self._get("players/squads", use_cache=use_cache, team=team_id)
            squads = squad_data.get("response") or []
            squad = squads[0].get("players", []) if squads else []

            for entry in squad:
                if not entry.get("position"):
                    continue
                if entry.get("id") is None:
                    self.logger.warning("Skipping %s squad entry without an id", team_name)
                    continue
                position = map_squad_position(entry["position"])
                if entry.get("age"):
                    rating = rng.randint(SQUAD_RATING_MIN, SQUAD_RATING_MAX)
                else:
                    rating = SQUAD_RATING_UNKNOWN
                players.append(
                    Player(
                        id=str(entry["id"]),
                        name=entry.get("name", ""),
                        position=position,
                        club=team_name,
                        nationality=DEFAULT_NATIONALITY,
                        rating=rating,
                        price=calculate_cost(rating, rng),
                        **generate_attributes(position, rating, rng),
                    )
                )

        self.logger.info("Fetched %d players from %d teams", len(players), len(teams))
        return players
