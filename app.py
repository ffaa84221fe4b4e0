# app.py
"""
Flask entrypoint for the Commanders hub.

Routes:
  HTML:
    - /              hub page (schedule, standings, articles, podcasts)

  JSON (proxy):
    - /events        team schedule, passed through from ESPN verbatim
    - /standings     league standings, passed through from ESPN verbatim
    - /content       static articles + podcasts document

  Misc:
    - /health

CLI:
  - flask --app app clear-cache [KEY ...]

Notes:
  - Proxy failures are logged in full and answered with a generic {"error": ...} 500.
  - The page fetches its data from the proxy routes (over HTTP at PROXY_BASE_URL,
    or in-process when unset) and caches rendered fragments without expiry.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Optional

import click
from flask import Flask, jsonify, render_template, request

from commanders_hub.cache import FragmentStore
from commanders_hub.config import AppConfig
from commanders_hub.errors import FetchDataError
from commanders_hub.espn_client import EspnClient
from commanders_hub.handlers.page_handler import PageHandler
from commanders_hub.services.content_service import ContentService
from commanders_hub.services.events_service import EventsService
from commanders_hub.services.standings_service import StandingsService
from commanders_hub.transport import LocalTransport

log = logging.getLogger("commanders_hub.app")


def create_app(cfg: Optional[AppConfig] = None) -> Flask:
    """
    App factory.

    Builds shared dependencies (client + fragment store + services) once per process.
    """
    cfg = cfg or AppConfig()
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    client = EspnClient(
        cfg.espn_api_base,
        cfg.espn_api_key,
        sport=cfg.sport,
        league=cfg.league,
        team_id=cfg.team_id,
        timeout=cfg.request_timeout_seconds,
    )
    store = FragmentStore(cfg.fragment_store_path)
    content = ContentService(content_path=cfg.content_path)

    handler = PageHandler(
        events_service=EventsService(tz_name=cfg.display_tz),
        standings_service=StandingsService(team_id=cfg.team_id, team_name=cfg.team_name),
        content_service=content,
        store=store,
        fetch_timeout=cfg.fetch_timeout_seconds,
    )

    app = Flask(__name__)
    app.config["HUB_CONFIG"] = cfg
    app.extensions["fragment_store"] = store

    # -------------------------
    # Proxy helpers
    # -------------------------

    def proxy(loader: Callable[[], Any], error_message: str, what: str):
        """
        Call loader and pass its JSON through, or answer 500 with a generic envelope.

        The detailed error is logged; the client only ever sees error_message.
        """
        try:
            return jsonify(loader())
        except FetchDataError as exc:
            log.error("Error fetching %s: %s (%s)", what, exc.message, exc.kind)
            return jsonify({"error": error_message}), 500

    # -------------------------
    # Proxy routes
    # -------------------------

    @app.get("/events")
    def events():
        """Team schedule (regular season, all groups, large limit)."""
        return proxy(client.team_schedule, "Failed to fetch ESPN events", "ESPN events")

    @app.get("/standings")
    def standings():
        """League standings (all groups, large limit)."""
        return proxy(
            client.standings,
            f"Failed to fetch ESPN {cfg.league} standings",
            f"{cfg.league} standings",
        )

    @app.get("/content")
    def content_doc():
        """Static articles + podcasts document."""
        return proxy(content.load, "Error al cargar content.json", "content.json")

    # -------------------------
    # Page
    # -------------------------

    @app.get("/")
    def index():
        """
        Hub page.

        Each section is fetched and rendered independently; a failing section
        shows its own error message and the rest of the page is unaffected.
        """
        if cfg.proxy_base_url:
            ctx = handler.build_context(cfg.proxy_base_url)
        else:
            # Own proxy routes are dispatched in-process; a self-call over HTTP would
            # deadlock a single sync worker.
            ctx = handler.build_context(request.host_url, transport=LocalTransport(app))
        return render_template("index.html", **ctx)

    # -------------------------
    # Health
    # -------------------------

    @app.get("/health")
    def health():
        """Simple health endpoint for Docker/monitoring checks."""
        return {"ok": True}

    # -------------------------
    # Cache invalidation
    # -------------------------

    @app.cli.command("clear-cache")
    @click.argument("keys", nargs=-1)
    def clear_cache(keys):
        """Drop cached fragments (all of them when no KEY is given)."""
        removed = store.clear(list(keys) if keys else None)
        click.echo(f"Removed {removed} cached fragment(s).")

    return app


# WSGI entrypoint for gunicorn (Docker CMD uses: app:app)
app = create_app()

if __name__ == "__main__":
    # Dev server (not for production).
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "8000")), debug=True, threaded=True)
