# commanders_hub/models.py
"""
Domain models for the hub.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Union


@dataclass(frozen=True)
class DataSourceRequest:
    """Immutable descriptor of one fetch → transform → cache → render task."""
    url: str
    cache_key: str
    target_id: str
    transform: Callable[[Any], Optional[str]]
    empty_message: str = "No data available."


@dataclass(frozen=True)
class TeamRef:
    """One side of a fixture."""
    display_name: str
    abbreviation: str
    logo_url: str = ""


@dataclass(frozen=True)
class Completed:
    """Final score. Scores stay as display strings ('0' when missing)."""
    home_score: str
    away_score: str


@dataclass(frozen=True)
class Scheduled:
    """Not finished yet; description is the upstream status text or 'Pendiente'."""
    description: str


EventStatus = Union[Completed, Scheduled]


@dataclass(frozen=True)
class NormalizedEvent:
    """A fully resolved schedule entry."""
    kickoff: Optional[datetime]   # None -> "Date N/A"
    home_team: TeamRef
    away_team: TeamRef
    status: EventStatus
    name: str = ""


@dataclass(frozen=True)
class EventFallback:
    """An event we could date/name but not resolve into two teams."""
    name: str
    kickoff: Optional[datetime]
    reason: str


EventEntry = Union[NormalizedEvent, EventFallback]


class RecordSource(str, Enum):
    """Which extraction strategy produced a standings record."""
    SUMMARY = "Summary String"
    STATS = "Stats Array"


@dataclass(frozen=True)
class StandingsRecord:
    """W/L/T for the tracked team."""
    wins: int
    losses: int
    ties: int
    source: RecordSource


@dataclass(frozen=True)
class Article:
    title: str
    summary: str
    link: str


@dataclass(frozen=True)
class Podcast:
    title: str
    src: str


class SectionStatus(str, Enum):
    """Terminal state a section reaches after one engine run."""
    CACHED = "cached"
    DATA = "data"
    EMPTY = "empty"
    ERROR = "error"
    MISSING_TARGET = "missing_target"


@dataclass
class Section:
    """
    A display target on the page.

    Mirrors the loader / error / content trio each page section carries.
    Sections without an error slot show failures inline in their content, and
    sections without a separate content area are never cleared before a run.
    """
    id: str
    title: str = ""
    has_error_slot: bool = True
    has_content_area: bool = True

    loader_visible: bool = False
    error_visible: bool = False
    error_message: str = ""
    content: str = ""
    status: Optional[SectionStatus] = None

    def show_loader(self) -> None:
        self.loader_visible = True

    def hide_loader(self) -> None:
        self.loader_visible = False

    def hide_error(self) -> None:
        self.error_visible = False

    def clear_content(self) -> None:
        if self.has_content_area:
            self.content = ""

    def set_content(self, fragment: str) -> None:
        self.content = fragment


@dataclass
class Page:
    """Ordered collection of sections addressable by id."""
    sections: Dict[str, Section] = field(default_factory=dict)

    @classmethod
    def of(cls, sections: Iterable[Section]) -> "Page":
        return cls(sections={s.id: s for s in sections})

    def get(self, section_id: str) -> Optional[Section]:
        return self.sections.get(section_id)

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections.values())
