# commanders_hub/formatters.py
"""
Presentational markup for normalized records.

Everything here is a pure function: same record in, same markup out. Upstream
strings are escaped via markupsafe, so a team name with a `<` can't break the page.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from markupsafe import Markup, escape

from .models import (
    Article,
    Completed,
    EventEntry,
    EventFallback,
    NormalizedEvent,
    Podcast,
    StandingsRecord,
    TeamRef,
)

DATE_NA = "Date N/A"
DATE_FORMAT = "%d/%m/%Y, %H:%M"


def format_kickoff(kickoff: Optional[datetime]) -> str:
    """es-ES style day/month/year, 24h clock. The datetime is already in the display tz."""
    if kickoff is None:
        return DATE_NA
    return kickoff.strftime(DATE_FORMAT)


def format_team(team: TeamRef) -> Markup:
    """Abbreviation + logo. The <img> is hidden (alt text kept) when there is no logo."""
    hidden = "" if team.logo_url else " display:none;"
    return Markup(
        '{abbr} <img src="{logo}" alt="{name} logo" style="height: 20px; vertical-align: middle;{hidden}">'
    ).format(
        abbr=team.abbreviation,
        logo=team.logo_url,
        name=team.display_name,
        hidden=Markup(hidden),
    )


def format_score(event: NormalizedEvent) -> str:
    status = event.status
    if isinstance(status, Completed):
        return f"{status.home_score} - {status.away_score}"
    return status.description


def format_event(entry: EventEntry) -> Markup:
    """One <p> line per schedule entry."""
    if isinstance(entry, EventFallback):
        return Markup("<p>Evento: {name} - Fecha: {date} - {reason}</p>").format(
            name=entry.name,
            date=format_kickoff(entry.kickoff),
            reason=entry.reason,
        )
    return Markup("<p>{away} @ {home} | Fecha: {date} | Estado: {score}</p>").format(
        away=format_team(entry.away_team),
        home=format_team(entry.home_team),
        date=format_kickoff(entry.kickoff),
        score=format_score(entry),
    )


def format_events(entries: Iterable[EventEntry]) -> Markup:
    return Markup("").join(format_event(e) for e in entries)


def format_standings(record: StandingsRecord, team_name: str) -> Markup:
    return Markup("<p>{team}: {w}V - {l}D - {t}E</p>").format(
        team=team_name,
        w=record.wins,
        l=record.losses,
        t=record.ties,
    )


def safe_link(link: str) -> str:
    """Only http(s) URLs and in-page anchors survive; anything else (javascript:, data:) becomes '#'."""
    link = (link or "").strip()
    if link.startswith(("http://", "https://", "#")):
        return link
    return "#"


def format_article(article: Article) -> Markup:
    return Markup(
        "<article>"
        "<h3>{title}</h3>"
        '<p>{summary} <a href="{link}" rel="noopener" target="_blank">Leer más</a></p>'
        "</article>"
    ).format(title=article.title, summary=article.summary, link=safe_link(article.link))


def format_podcast(podcast: Podcast) -> Markup:
    return Markup(
        '<div class="podcast-item">'
        "<h3>{title}</h3>"
        '<audio controls aria-label="Reproducir {title}">'
        '<source src="{src}" type="audio/mpeg">'
        "Tu navegador no soporta audio HTML5."
        "</audio>"
        "</div>"
    ).format(title=podcast.title, src=podcast.src)


def format_message(message: str) -> Markup:
    """Wrap a plain message (empty-state or inline error) in a paragraph."""
    return Markup("<p>{}</p>").format(escape(message))
