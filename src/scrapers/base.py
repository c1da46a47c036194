"""JSON API access shared by the data sources: session, response cache and throttling."""

import hashlib
import json
import logging
import re
import time
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

import requests


# Default cache directory
CACHE_DIR = Path(__file__).parent.parent.parent / "data" / "cache"

REQUEST_TIMEOUT = 30
USER_AGENT = "PitchPoints/1.0 (Fantasy Football Engine)"

# Seconds to wait on a 429 when the server sends no Retry-After
DEFAULT_RETRY_AFTER = 60.0


class ScraperError(Exception):
    """Base exception for data source errors."""


class RateLimitError(ScraperError):
    """Raised when the provider answers 429."""

    def __init__(self, message: str, retry_after: float = DEFAULT_RETRY_AFTER) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class FetchError(ScraperError):
    """Raised when a request fails or the provider reports an error."""


class ParseError(ScraperError):
    """Raised when a response cannot be decoded or has an unexpected shape."""


def _retry_after(response: requests.Response) -> float:
    try:
        return float(response.headers.get("Retry-After", DEFAULT_RETRY_AFTER))
    except (TypeError, ValueError):
        return DEFAULT_RETRY_AFTER


class BaseScraper:
    """
    Client for a JSON REST API.

    Requests are addressed as an endpoint plus query parameters. Decoded
    responses are cached on disk per (endpoint, params) pair, and calls are
    spaced at least rate_limit_seconds apart.
    """

    def __init__(
        self,
        base_url: str = "",
        headers: Optional[Mapping[str, str]] = None,
        cache_dir: Optional[Path] = None,
        cache_ttl_hours: int = 1,
        rate_limit_seconds: float = 1.0,
    ) -> None:
        """
        Args:
            base_url: URL prefix every endpoint is appended to.
            headers: Extra request headers, e.g. API credentials.
            cache_dir: Directory for cached responses.
            cache_ttl_hours: How long a cached response stays fresh.
            rate_limit_seconds: Minimum seconds between requests.
        """
        self.base_url = base_url.rstrip("/")
        self.cache_dir = cache_dir or CACHE_DIR
        self.cache_ttl = timedelta(hours=cache_ttl_hours)
        self.rate_limit_seconds = rate_limit_seconds
        self._last_request_time: Optional[float] = None
        self.logger = logging.getLogger(self.__class__.__name__)

        self.cache_dir.mkdir(parents=True, exist_ok=True)

        self._session = requests.Session()
        self._session.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})
        if headers:
            self._session.headers.update(headers)

    def build_url(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Join base URL, endpoint and sorted query parameters."""
        url = f"{self.base_url}/{endpoint.strip('/')}"
        if params:
            url = f"{url}?{urlencode(sorted(params.items()))}"
        return url

    def _cache_path(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Path:
        """Cache file for a request; readable endpoint prefix plus a digest of the params."""
        query = urlencode(sorted((params or {}).items()))
        digest = hashlib.md5(f"{endpoint}?{query}".encode()).hexdigest()[:16]
        slug = re.sub(r"[^a-z0-9]+", "-", endpoint.lower()).strip("-") or "root"
        return self.cache_dir / f"{slug}-{digest}.json"

    def _read_cache(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Optional[Any]:
        """Return the cached response if present and fresh."""
        path = self._cache_path(endpoint, params)
        if not path.exists():
            return None
        try:
            with open(path, "r") as f:
                entry = json.load(f)
            fetched_at = datetime.fromisoformat(entry["fetched_at"])
        except (json.JSONDecodeError, KeyError, ValueError):
            self.logger.debug("Discarding unreadable cache entry %s", path.name)
            path.unlink(missing_ok=True)
            return None

        if datetime.now(timezone.utc) - fetched_at >= self.cache_ttl:
            return None
        return entry["data"]

    def _write_cache(
        self, endpoint: str, params: Optional[Mapping[str, Any]], data: Any
    ) -> None:
        entry = {
            "endpoint": endpoint,
            "params": dict(params or {}),
            "fetched_at": datetime.now(timezone.utc).isoformat(),
            "data": data,
        }
        with open(self._cache_path(endpoint, params), "w") as f:
            json.dump(entry, f)

    def _rate_limit(self) -> None:
        if self._last_request_time is not None:
            elapsed = time.monotonic() - self._last_request_time
            if elapsed < self.rate_limit_seconds:
                time.sleep(self.rate_limit_seconds - elapsed)
        self._last_request_time = time.monotonic()

    def _request(self, url: str) -> requests.Response:
        self._rate_limit()
        self.logger.info("GET %s", url)
        try:
            response = self._session.get(url, timeout=REQUEST_TIMEOUT)
        except requests.exceptions.Timeout as e:
            raise FetchError(f"Request timed out: {url}") from e
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Request failed: {url} - {e}") from e

        if response.status_code == 429:
            raise RateLimitError(f"Rate limited: {url}", retry_after=_retry_after(response))
        if not response.ok:
            raise FetchError(f"HTTP error {response.status_code}: {url}")
        return response

    def get_json(
        self,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
        use_cache: bool = True,
    ) -> Any:
        """
        Fetch and decode one endpoint.

        Raises:
            FetchError: If the request fails.
            RateLimitError: If the provider answers 429.
            ParseError: If the body is not valid JSON.
        """
        if use_cache:
            cached = self._read_cache(endpoint, params)
            if cached is not None:
                self.logger.debug("Cache hit: %s %s", endpoint, dict(params or {}))
                return cached

        url = self.build_url(endpoint, params)
        response = self._request(url)
        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"Invalid JSON from {url}") from e

        if use_cache:
            self._write_cache(endpoint, params, data)
        return data

    def clear_cache(self) -> int:
        """
        Delete every cached response this client wrote.

        Returns:
            Number of cache entries removed.
        """
        count = 0
        for path in self.cache_dir.glob("*.json"):
            try:
                with open(path, "r") as f:
                    entry = json.load(f)
            except (json.JSONDecodeError, OSError):
                continue
            if not isinstance(entry, dict) or not {"endpoint", "fetched_at", "data"} <= entry.keys():
                continue
            path.unlink()
            count += 1
        return count
