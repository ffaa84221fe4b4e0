# commanders_hub/handlers/page_handler.py
"""
Handler/controller responsible for building the hub page.

Keeps Flask routes simple by concentrating section wiring here: which URL feeds
which section, under which cache key, with which transform.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..cache import FragmentStore
from ..engine import FetchRenderEngine
from ..models import DataSourceRequest, Page, Section, SectionStatus
from ..services.content_service import ContentService
from ..services.events_service import EventsService
from ..services.standings_service import StandingsService

EVENTS_SECTION = "teams-data"
STANDINGS_SECTION = "temporada-data"
ARTICLES_SECTION = "articles-list"
PODCASTS_SECTION = "podcast-list"


@dataclass
class PageHandler:
    """Orchestrates the four page sections through the fetch/render engine."""

    events_service: EventsService
    standings_service: StandingsService
    content_service: ContentService
    store: FragmentStore
    fetch_timeout: Optional[float] = None

    def build_page(self) -> Page:
        """Fresh page with the four sections, all idle."""
        team = self.standings_service.team_name
        return Page.of([
            Section(id=EVENTS_SECTION, title=f"Partidos de los {team}"),
            Section(id=STANDINGS_SECTION, title="Temporada"),
            Section(id=ARTICLES_SECTION, title="Artículos"),
            Section(id=PODCASTS_SECTION, title="Podcasts"),
        ])

    def build_requests(self, base_url: str) -> List[DataSourceRequest]:
        """
        Build one DataSourceRequest per section.

        Args:
            base_url: where the proxy routes live (e.g. http://127.0.0.1:8000).
        """
        base = base_url.rstrip("/")
        return [
            DataSourceRequest(
                url=f"{base}/events",
                cache_key="commanders-events",
                target_id=EVENTS_SECTION,
                transform=self.events_service.transform,
                empty_message="No hay partidos disponibles para los Commanders en este momento.",
            ),
            DataSourceRequest(
                url=f"{base}/standings",
                cache_key="commanders-standings",
                target_id=STANDINGS_SECTION,
                transform=self.standings_service.transform,
                empty_message="No hay datos de clasificación disponibles en este momento.",
            ),
            DataSourceRequest(
                url=f"{base}/content",
                cache_key="articles-cache",
                target_id=ARTICLES_SECTION,
                transform=self.content_service.articles_transform,
                empty_message="No hay artículos disponibles en este momento.",
            ),
            DataSourceRequest(
                url=f"{base}/content",
                cache_key="podcasts-cache",
                target_id=PODCASTS_SECTION,
                transform=self.content_service.podcasts_transform,
                empty_message="No hay podcasts disponibles en este momento.",
            ),
        ]

    def build(
        self, base_url: str, transport: Optional[Callable[..., Any]] = None
    ) -> tuple[Page, Dict[str, SectionStatus]]:
        """Run every section concurrently and return the filled page plus per-section status."""
        page = self.build_page()
        engine = FetchRenderEngine(page, self.store, timeout=self.fetch_timeout, transport=transport)
        statuses = engine.run_all(self.build_requests(base_url))
        return page, statuses

    def build_context(self, base_url: str, transport: Optional[Callable[..., Any]] = None) -> dict:
        """
        Build a plain dict suitable for render_template(**context).

        transport is handed to the engine as-is (None means real HTTP).
        """
        page, statuses = self.build(base_url, transport=transport)
        return {
            "team_name": self.standings_service.team_name,
            "sections": list(page),
            "statuses": {k: v.value for k, v in statuses.items()},
        }
