# commanders_hub/espn_client.py
"""
Thin HTTP client wrapper for the ESPN site API.

Injects the API credential, builds the URL, and turns every failure into one of
the tagged errors in `errors.py`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .errors import ConfigurationError, FormatError, HttpError, NetworkError

log = logging.getLogger(__name__)


class EspnClient:
    """A minimal client for retrieving JSON from the ESPN API base."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        sport: str = "football",
        league: str = "nfl",
        team_id: str = "28",
        timeout: int = 10,
    ) -> None:
        """Store the base URL, credential and tracked team, and build request headers."""
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.sport = sport
        self.league = league
        self.team_id = team_id
        self.timeout = timeout
        self._headers = {"User-Agent": "commanders-hub/1.0", "Accept": "application/json"}

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Execute a GET request to base_url/path?params&apikey=... and return parsed JSON.

        Raises:
            ConfigurationError if no API key is configured.
            NetworkError on transport failures.
            HttpError on non-2xx responses (status attached).
            FormatError when the body is not valid JSON.
        """
        if not self.api_key:
            log.error("ESPN_API_KEY is not set; refusing to call the ESPN API")
            raise ConfigurationError("The server is missing its API credential.")

        url = f"{self.base_url}/{path.lstrip('/')}"
        query = dict(params or {})
        # What we log: path + params without the credential.
        safe_target = f"{url} {query}"
        query["apikey"] = self.api_key

        try:
            r = requests.get(url, params=query, timeout=self.timeout, headers=self._headers)
        except requests.RequestException as exc:
            log.error("Network error while fetching ESPN API at %s: %s", safe_target, exc)
            raise NetworkError(
                "A network error occurred while trying to reach the ESPN API."
            ) from exc

        if not r.ok:
            log.error(
                "Error fetching from ESPN API at %s. Status: %s %s. Body: %s",
                safe_target, r.status_code, r.reason, r.text,
            )
            raise HttpError(
                f"Request to ESPN API failed with status {r.status_code} ({r.reason}).",
                status=r.status_code,
            )

        try:
            return r.json()
        except ValueError as exc:
            log.error("Error parsing JSON response from ESPN API at %s: %s", safe_target, exc)
            raise FormatError("Failed to parse the JSON response from the ESPN API.") from exc

    def team_schedule(self) -> Any:
        """Fetch the regular-season schedule for the tracked team."""
        return self.get_json(
            f"sports/{self.sport}/{self.league}/teams/{self.team_id}/schedule",
            {"seasontype": 2, "groups": "all", "limit": 500},
        )

    def standings(self) -> Any:
        """Fetch league standings (all groups)."""
        return self.get_json(
            f"sports/{self.sport}/{self.league}/standings",
            {"groups": "all", "limit": 500},
        )
