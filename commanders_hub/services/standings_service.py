# commanders_hub/services/standings_service.py
"""
Standings logic.

Responsibilities:
  - locate the tracked team's record in whichever payload shape upstream sent
  - extract W/L/T from a summary string or a stats list
  - normalize into a StandingsRecord

Upstream shapes are modelled explicitly and tried in a fixed order:
  1. NestedTreeShape   children[] -> (children[] ...) -> standings.entries[] (team id match)
  2. RecordItemsShape  record.items[] (type "total" / description "Overall")
  3. RecordsShape      records[] (type "total" / name "Overall")
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Any, Dict, Iterator, List, Optional, Sequence

from ..formatters import format_standings
from ..models import RecordSource, StandingsRecord
from .helpers import as_list, get_nested, safe_int

log = logging.getLogger(__name__)

SUMMARY_RE = re.compile(r"^(\d+)-(\d+)(?:-(\d+))?$")


class UpstreamShape:
    """One known layout of the standings payload."""

    name = "shape"

    def find_record(self, payload: Dict[str, Any], team_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError


class NestedTreeShape(UpstreamShape):
    """League tree: conferences/divisions under `children`, entries per group."""

    name = "nested tree"

    def _groups(self, node: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
        for child in as_list(node.get("children")):
            if isinstance(child, dict):
                yield child
                yield from self._groups(child)

    def find_record(self, payload: Dict[str, Any], team_id: str) -> Optional[Dict[str, Any]]:
        wanted = str(team_id)
        for group in self._groups(payload):
            for entry in as_list(get_nested(group, ["standings", "entries"])):
                if not isinstance(entry, dict):
                    continue
                if str(get_nested(entry, ["team", "id"], "")) == wanted:
                    return entry
        return None


class RecordItemsShape(UpstreamShape):
    """Team-level payload: record.items[] with one overall item."""

    name = "record.items"

    def find_record(self, payload: Dict[str, Any], team_id: str) -> Optional[Dict[str, Any]]:
        for item in as_list(get_nested(payload, ["record", "items"])):
            if isinstance(item, dict) and (item.get("type") == "total" or item.get("description") == "Overall"):
                return item
        return None


class RecordsShape(UpstreamShape):
    """Flat records[] list."""

    name = "records"

    def find_record(self, payload: Dict[str, Any], team_id: str) -> Optional[Dict[str, Any]]:
        for rec in as_list(payload.get("records")):
            if isinstance(rec, dict) and (rec.get("type") == "total" or rec.get("name") == "Overall"):
                return rec
        return None


DEFAULT_SHAPES: Sequence[UpstreamShape] = (NestedTreeShape(), RecordItemsShape(), RecordsShape())


def record_from_summary(record: Dict[str, Any]) -> Optional[StandingsRecord]:
    """Parse "W-L" or "W-L-T". Returns None when the summary is absent or malformed."""
    summary = record.get("summary")
    if not isinstance(summary, str):
        return None
    m = SUMMARY_RE.match(summary.strip())
    if not m:
        log.warning("Could not parse W-L-T record from summary string: %r", summary)
        return None
    return StandingsRecord(
        wins=safe_int(m.group(1)),
        losses=safe_int(m.group(2)),
        ties=safe_int(m.group(3)),
        source=RecordSource.SUMMARY,
    )


def _stat_value(stats: List[Dict[str, Any]], name: str) -> int:
    """Look a stat up by canonical name ("wins") or single-letter abbreviation ("W")."""
    abbr = name[:1].upper()
    for s in stats:
        if s.get("name") == name or s.get("abbreviation") == abbr:
            return safe_int(s.get("value"), 0)
    return 0


def record_from_stats(record: Dict[str, Any]) -> Optional[StandingsRecord]:
    """
    Build a record from a stats list.

    Accepted when any count is non-zero or a "wins" entry exists (a 0-0 team still has one).
    """
    stats = [s for s in as_list(record.get("stats")) if isinstance(s, dict)]
    if not stats:
        return None
    wins = _stat_value(stats, "wins")
    losses = _stat_value(stats, "losses")
    ties = _stat_value(stats, "ties")
    if wins > 0 or losses > 0 or ties > 0 or any(s.get("name") == "wins" for s in stats):
        return StandingsRecord(wins=wins, losses=losses, ties=ties, source=RecordSource.STATS)
    log.warning("Found a stats list but no meaningful W-L-T values: %r", stats)
    return None


@dataclass
class StandingsService:
    """Service responsible for resolving the tracked team's W/L/T record."""

    team_id: str
    team_name: str
    shapes: Sequence[UpstreamShape] = DEFAULT_SHAPES

    def find_record(self, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Try every known shape in order; first hit wins."""
        for shape in self.shapes:
            rec = shape.find_record(payload, self.team_id)
            if rec is not None:
                log.debug("Standings record located via %s", shape.name)
                return rec
        return None

    def normalize(self, payload: Any) -> Optional[StandingsRecord]:
        """Return the tracked team's record, or None (empty signal)."""
        if not isinstance(payload, dict):
            log.warning("No standings data found or data is not a valid object.")
            return None

        rec = self.find_record(payload)
        if rec is None:
            log.warning("Team %s record not found in any known standings layout.", self.team_id)
            return None

        result = record_from_summary(rec) or record_from_stats(rec)
        if result is None:
            log.warning("Could not determine standings from the located record.")
            return None

        log.debug("Standings resolved from %s: %s", result.source.value, result)
        return result

    def transform(self, payload: Any) -> Optional[str]:
        """Engine transform: payload -> HTML fragment, or None when unresolved."""
        record = self.normalize(payload)
        if record is None:
            return None
        return str(format_standings(record, self.team_name))
