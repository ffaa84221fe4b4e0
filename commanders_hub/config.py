# commanders_hub/config.py
"""
Configuration for the Commanders hub.

This module centralizes all tunable settings (upstream API base + credential,
tracked team, display timezone, file locations and timeouts).
"""

from __future__ import annotations

from dataclasses import dataclass
import os


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, returning default on missing/invalid values."""
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


def _env_float(name: str, default: float) -> float:
    """Read a float environment variable, returning default on missing/invalid values."""
    try:
        return float(os.getenv(name, str(default)))
    except Exception:
        return default


def _env_str(name: str, default: str) -> str:
    """
    Read a string environment variable, stripped.

    Blank values count as missing so `TEAM_ID=` in a .env file doesn't wipe the default.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable app configuration.

    Notes:
      - espn_api_key is only ever read server-side; it never reaches a response or log line.
      - proxy_base_url is where the page engine fetches /events, /standings and /content.
        Left blank, the page route uses the URL the request came in on.
    """

    # Upstream gateway
    espn_api_base: str = _env_str("ESPN_API_BASE", "http://site.api.espn.com/apis/site/v2")
    espn_api_key: str = os.getenv("ESPN_API_KEY", "")
    sport: str = _env_str("ESPN_SPORT", "football")
    league: str = _env_str("ESPN_LEAGUE", "nfl")

    # Tracked team (Washington Commanders)
    team_id: str = _env_str("TEAM_ID", "28")
    team_name: str = _env_str("TEAM_NAME", "Washington Commanders")

    # Display
    display_tz: str = _env_str("DISPLAY_TZ", "Europe/Madrid")

    # Files
    content_path: str = _env_str("CONTENT_PATH", "data/content.json")
    fragment_store_path: str = _env_str("FRAGMENT_STORE_PATH", ".cache/fragments.json")

    # Page engine
    proxy_base_url: str = os.getenv("PROXY_BASE_URL", "")

    # Timeouts
    request_timeout_seconds: int = _env_int("REQUEST_TIMEOUT_SECONDS", 10)
    fetch_timeout_seconds: float = _env_float("FETCH_TIMEOUT_SECONDS", 15.0)

    log_level: str = _env_str("LOG_LEVEL", "INFO").upper()
