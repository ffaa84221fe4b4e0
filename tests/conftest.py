"""Shared fixtures: fake HTTP responses and sample upstream payloads."""

from __future__ import annotations

import json
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest


def make_response(
    json_data: Any = None,
    status: int = 200,
    content_type: Optional[str] = "application/json; charset=utf-8",
    text: Optional[str] = None,
    reason: str = "OK",
    json_error: bool = False,
) -> MagicMock:
    """Build a MagicMock that quacks like a requests.Response."""
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.reason = reason
    resp.headers = {"Content-Type": content_type} if content_type else {}
    resp.text = text if text is not None else json.dumps(json_data)
    if json_error:
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        resp.json.return_value = json_data
    return resp


@pytest.fixture
def response_factory():
    return make_response


def competitor(side: str, abbr: str, name: str, score: Any = None, logo: str = "") -> dict:
    team = {"id": "x", "abbreviation": abbr, "displayName": name}
    if logo:
        team["logo"] = logo
    out = {"homeAway": side, "team": team}
    if score is not None:
        out["score"] = score
    return out


@pytest.fixture
def schedule_payload() -> dict:
    return {
        "team": {"id": "28", "displayName": "Washington Commanders"},
        "events": [
            {
                "name": "New York Giants at Washington Commanders",
                "date": "2025-09-07T17:00Z",
                "competitions": [
                    {
                        "status": {"type": {"completed": True, "description": "Final"}},
                        "competitors": [
                            competitor("home", "WSH", "Washington Commanders", "21", "https://a.espncdn.com/wsh.png"),
                            competitor("away", "NYG", "New York Giants", "6", "https://a.espncdn.com/nyg.png"),
                        ],
                    }
                ],
            },
            {
                "name": "Washington Commanders at Green Bay Packers",
                "date": "2025-09-12T00:15Z",
                "competitions": [
                    {
                        "status": {"type": {"completed": False, "description": "Scheduled"}},
                        "competitors": [
                            competitor("home", "GB", "Green Bay Packers"),
                            competitor("away", "WSH", "Washington Commanders"),
                        ],
                    }
                ],
            },
        ],
    }


@pytest.fixture
def content_payload() -> dict:
    return {
        "articles": [
            {"title": "Primera", "summary": "Resumen uno", "link": "https://example.com/1"},
            {},
        ],
        "podcasts": [
            {"title": "Episodio 1", "src": "https://example.com/1.mp3"},
            {"title": "Sin audio"},
        ],
    }
