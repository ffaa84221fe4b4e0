# commanders_hub/services/content_service.py
"""
Articles + podcasts from the static content document.

The same service reads the document for the /content route and normalizes it
for the two page sections.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from typing import Any, List, Optional

from markupsafe import Markup

from ..errors import FormatError
from ..formatters import format_article, format_podcast
from ..models import Article, Podcast

log = logging.getLogger(__name__)


def _items(payload: Any, field_name: str) -> Optional[list]:
    items = payload.get(field_name) if isinstance(payload, dict) else None
    if not isinstance(items, list) or not items:
        log.warning("No %s data found or data is not in the expected format.", field_name)
        return None
    return items


@dataclass
class ContentService:
    """Loads the static content document and normalizes its two lists."""

    content_path: str

    def load(self) -> Any:
        """
        Read and parse the content document.

        Raises:
            FormatError if the file can't be read or isn't valid JSON.
        """
        try:
            with open(self.content_path, "r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as exc:
            log.error("Error loading content document %s: %s", self.content_path, exc)
            raise FormatError("Error al cargar content.json") from exc

    def normalize_articles(self, payload: Any) -> Optional[List[Article]]:
        items = _items(payload, "articles")
        if items is None:
            return None
        out: List[Article] = []
        for item in items:
            if not isinstance(item, dict):
                item = {}
            out.append(
                Article(
                    title=item.get("title") or "Untitled Article",
                    summary=item.get("summary") or "No summary available.",
                    link=item.get("link") or "#",
                )
            )
        return out

    def normalize_podcasts(self, payload: Any) -> Optional[List[Podcast]]:
        """Podcasts without a playable src are skipped, not rendered broken."""
        items = _items(payload, "podcasts")
        if items is None:
            return None
        out: List[Podcast] = []
        for item in items:
            if not isinstance(item, dict):
                item = {}
            title = item.get("title") or "Untitled Podcast"
            src = item.get("src") or ""
            if not src:
                log.warning("Podcast %r is missing src and will be skipped.", title)
                continue
            out.append(Podcast(title=title, src=src))
        return out or None

    def articles_transform(self, payload: Any) -> Optional[str]:
        articles = self.normalize_articles(payload)
        if not articles:
            return None
        return str(Markup("").join(format_article(a) for a in articles))

    def podcasts_transform(self, payload: Any) -> Optional[str]:
        podcasts = self.normalize_podcasts(payload)
        if not podcasts:
            return None
        return str(Markup("").join(format_podcast(p) for p in podcasts))
