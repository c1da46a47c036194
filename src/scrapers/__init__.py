"""Scrapers and loaders for player reference data and real match statistics."""

from .base import (
    BaseScraper,
    FetchError,
    ParseError,
    RateLimitError,
    ScraperError,
    CACHE_DIR,
)
from .catalog import (
    balance_prices,
    balanced_price,
    calculate_cost,
    create_sample_players,
    generate_attributes,
    get_player_by_id,
    get_players_by_position,
    load_players_from_csv,
    search_players,
    PLAYERS_CSV_PATH,
)
from .api_football import (
    APIFootballScraper,
    RealPlayerPerformance,
    map_fixture_position,
    map_squad_position,
    normalize_player_stats,
    parse_fixture_players,
    FINISHED_STATUSES,
)

__all__ = [
    # Base
    "BaseScraper",
    "FetchError",
    "ParseError",
    "RateLimitError",
    "ScraperError",
    "CACHE_DIR",
    # Catalog
    "balance_prices",
    "balanced_price",
    "calculate_cost",
    "create_sample_players",
    "generate_attributes",
    "get_player_by_id",
    "get_players_by_position",
    "load_players_from_csv",
    "search_players",
    "PLAYERS_CSV_PATH",
    # API-Football
    "APIFootballScraper",
    "RealPlayerPerformance",
    "map_fixture_position",
    "map_squad_position",
    "normalize_player_stats",
    "parse_fixture_players",
    "FINISHED_STATUSES",
]
