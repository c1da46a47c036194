"""Application settings read from the environment (and a .env file, if present)."""

import logging
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


# API-Football (RapidAPI) credentials
API_FOOTBALL_KEY = os.getenv("API_FOOTBALL_KEY", "")
API_FOOTBALL_HOST = os.getenv("API_FOOTBALL_HOST", "api-football-v1.p.rapidapi.com")
API_FOOTBALL_BASE_URL = os.getenv(
    "API_FOOTBALL_BASE_URL", f"https://{API_FOOTBALL_HOST}/v3"
)

# League settings
LEAGUE_ID = int(os.getenv("LEAGUE_ID", "288"))  # South African Premier Soccer League
SEASON = int(os.getenv("SEASON", "2024"))

# Application settings
CACHE_TTL_HOURS = int(os.getenv("CACHE_TTL_HOURS", "1"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Set up root logging once for scripts and services."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
