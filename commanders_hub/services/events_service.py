# commanders_hub/services/events_service.py
"""
Schedule normalization.

Responsibilities:
  - validate the `events` list from the team schedule payload
  - parse kickoff dates into the display timezone
  - resolve home/away competitors, falling back to a minimal line when they can't be
  - derive a final score or a status description
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import Any, Dict, List, Optional

from dateutil import parser, tz

from ..formatters import format_events
from ..models import (
    Completed,
    EventEntry,
    EventFallback,
    EventStatus,
    NormalizedEvent,
    Scheduled,
    TeamRef,
)
from .helpers import as_list, get_nested

log = logging.getLogger(__name__)

PENDING = "Pendiente"
INCOMPLETE_COMPETITION = "Datos de competición incompletos"
INCOMPLETE_TEAMS = "Datos de equipo incompletos"
UNNAMED_EVENT = "Unnamed Event"


@dataclass
class EventsService:
    """Turns a raw schedule payload into NormalizedEvent / EventFallback entries."""

    tz_name: str = "Europe/Madrid"

    @property
    def display_tz(self):
        """Return the configured timezone object used for all local conversions."""
        return tz.gettz(self.tz_name)

    def _parse_kickoff(self, event: Dict[str, Any], index: int) -> Optional[datetime]:
        """
        Parse event.date and convert to the display timezone.

        Naive timestamps are treated as UTC. Returns None when missing or unparsable.
        """
        raw = event.get("date")
        if not raw:
            return None
        try:
            dt = parser.isoparse(str(raw))
        except (ValueError, OverflowError):
            try:
                dt = parser.parse(str(raw))
            except (ValueError, OverflowError):
                log.warning("Invalid date format for event at index %d: %r", index, raw)
                return None
        try:
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return dt.astimezone(self.display_tz)
        except (OverflowError, ValueError) as exc:
            log.warning("Date out of range for event at index %d: %r (%s)", index, raw, exc)
            return None

    @staticmethod
    def _team_ref(competitor: Dict[str, Any]) -> TeamRef:
        """Build a TeamRef from a competitor, with placeholder names when fields are missing."""
        team = competitor.get("team") or {}
        logo = team.get("logo")
        if not logo:
            logos = as_list(team.get("logos"))
            logo = get_nested(logos[0], ["href"], "") if logos else ""
        return TeamRef(
            display_name=team.get("displayName") or team.get("name") or "Unknown Team",
            abbreviation=team.get("abbreviation") or "N/A",
            logo_url=logo if isinstance(logo, str) else "",
        )

    @staticmethod
    def _score(competitor: Dict[str, Any]) -> str:
        """
        Extract a display score.

        The schedule endpoint sends either "24" / 24 or {"value": 24.0, "displayValue": "24"}.
        Missing or empty scores read as '0'.
        """
        score = competitor.get("score")
        if isinstance(score, dict):
            score = score.get("displayValue") or score.get("value")
            if isinstance(score, float) and score.is_integer():
                score = int(score)
        if score is None or score == "":
            return "0"
        return str(score)

    def _status(self, competition: Dict[str, Any], home: Dict[str, Any], away: Dict[str, Any]) -> EventStatus:
        status_type = get_nested(competition, ["status", "type"], {})
        if not isinstance(status_type, dict):
            status_type = {}
        if status_type.get("completed"):
            return Completed(home_score=self._score(home), away_score=self._score(away))
        description = status_type.get("description")
        if isinstance(description, str) and description.strip():
            return Scheduled(description=description.strip())
        return Scheduled(description=PENDING)

    def normalize_event(self, event: Any, index: int = 0) -> Optional[EventEntry]:
        """
        Normalize one schedule entry.

        Returns None only when the entry is not an object at all; incomplete
        entries degrade to an EventFallback instead of disappearing.
        """
        if not isinstance(event, dict):
            log.warning("Event at index %d is not a valid object. Skipping.", index)
            return None

        name = event.get("name") or UNNAMED_EVENT
        kickoff = self._parse_kickoff(event, index)

        competitions = as_list(event.get("competitions"))
        competition = competitions[0] if competitions else None
        competitors = as_list(competition.get("competitors")) if isinstance(competition, dict) else []
        if len(competitors) < 2:
            log.warning("Event at index %d (%r) is missing competition or competitor data.", index, name)
            return EventFallback(name=name, kickoff=kickoff, reason=INCOMPLETE_COMPETITION)

        home = next((c for c in competitors if isinstance(c, dict) and c.get("homeAway") == "home"), None)
        away = next((c for c in competitors if isinstance(c, dict) and c.get("homeAway") == "away"), None)
        if not home or not away or not isinstance(home.get("team"), dict) or not isinstance(away.get("team"), dict):
            log.warning("Event at index %d (%r) has incomplete team data.", index, name)
            return EventFallback(name=name, kickoff=kickoff, reason=INCOMPLETE_TEAMS)

        return NormalizedEvent(
            kickoff=kickoff,
            home_team=self._team_ref(home),
            away_team=self._team_ref(away),
            status=self._status(competition, home, away),
            name=name,
        )

    def normalize(self, payload: Any) -> Optional[List[EventEntry]]:
        """Return one entry per processable event, or None (empty signal)."""
        events = payload.get("events") if isinstance(payload, dict) else None
        if not isinstance(events, list) or not events:
            log.warning("No events data found or data is not in the expected format.")
            return None

        out: List[EventEntry] = []
        for i, ev in enumerate(events):
            entry = self.normalize_event(ev, i)
            if entry is not None:
                out.append(entry)

        if not out:
            log.warning("No events could be processed into displayable entries.")
            return None
        return out

    def transform(self, payload: Any) -> Optional[str]:
        """Engine transform: payload -> HTML fragment, or None when there is nothing to show."""
        entries = self.normalize(payload)
        if entries is None:
            return None
        return str(format_events(entries))
