# commanders_hub/engine.py
"""
Generic fetch → validate → transform → cache → render engine.

Every page section goes through the same cycle, parameterized by a
DataSourceRequest. A run always ends with the section in a terminal state
(data, cached data, empty message or error message) and never raises.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
import logging
from typing import Any, Callable, Dict, Optional, Sequence

import requests

from .cache import FragmentStore
from .errors import FetchDataError, FormatError, HttpError, NetworkError, ProcessingError
from .formatters import format_message
from .models import DataSourceRequest, Page, Section, SectionStatus

log = logging.getLogger(__name__)

GENERIC_ERROR = "An unexpected error occurred. Please try again."

# No shared Session: tasks run on worker threads.
_HTTP_HEADERS = {"User-Agent": "commanders-hub/1.0", "Accept": "application/json"}


class FetchRenderEngine:
    """Runs DataSourceRequests against a Page, backed by a FragmentStore."""

    def __init__(
        self,
        page: Page,
        store: FragmentStore,
        timeout: Optional[float] = None,
        transport: Optional[Callable[..., Any]] = None,
    ) -> None:
        """
        Args:
            transport: callable with the `requests.get(url, headers=, timeout=)` signature
                returning a response-like object. None means plain `requests.get`.
        """
        self.page = page
        self.store = store
        self.timeout = timeout
        self.transport = transport

    # -------------------------
    # Retrieval
    # -------------------------

    def fetch_json(self, req: DataSourceRequest) -> Any:
        """
        GET req.url and return parsed JSON.

        Raises:
            NetworkError, HttpError (status attached) or FormatError.
        """
        tag = req.target_id
        get = self.transport or requests.get
        try:
            resp = get(req.url, headers=_HTTP_HEADERS, timeout=self.timeout)
        except requests.RequestException as exc:
            log.error("[%s] Network error while fetching %s: %s", tag, req.url, exc)
            raise NetworkError(
                "Could not connect to the server. Please check your internet connection."
            ) from exc

        if not resp.ok:
            log.error("[%s] HTTP error %s while fetching %s: %s", tag, resp.status_code, req.url, resp.text)
            raise HttpError(
                f"Failed to load data: Server responded with {resp.status_code} ({resp.reason}).",
                status=resp.status_code,
            )

        content_type = resp.headers.get("Content-Type") or ""
        if "application/json" not in content_type:
            log.error(
                "[%s] Invalid content type. Expected JSON, got %r. Response text: %s",
                tag, content_type, resp.text,
            )
            raise FormatError("The server provided data in an unexpected format (expected JSON).")

        try:
            return resp.json()
        except ValueError as exc:
            log.error("[%s] Error parsing JSON from %s: %s", tag, req.url, exc)
            raise FormatError(
                "There was an issue understanding the data from the server (JSON parsing failed)."
            ) from exc

    @staticmethod
    def apply_transform(req: DataSourceRequest, payload: Any) -> Optional[str]:
        """Run the transform; anything it raises that isn't already tagged becomes a ProcessingError."""
        try:
            return req.transform(payload)
        except FetchDataError:
            raise
        except Exception as exc:
            log.exception("[%s] Error processing data", req.target_id)
            raise ProcessingError("There was an issue preparing the data for display.") from exc

    # -------------------------
    # Rendering
    # -------------------------

    @staticmethod
    def _show_error(section: Section, message: str) -> None:
        if section.has_error_slot:
            section.error_message = message
            section.error_visible = True
            if section.has_content_area:
                section.content = ""
        else:
            section.content = str(format_message(message))

    def run(self, req: DataSourceRequest) -> SectionStatus:
        """Execute one full cycle for req. Never raises."""
        section = self.page.get(req.target_id)
        if section is None:
            log.error("[%s] Section with id %r not found. Cannot display data.", req.target_id, req.target_id)
            return SectionStatus.MISSING_TARGET

        status = SectionStatus.ERROR
        try:
            section.show_loader()
            section.hide_error()
            section.clear_content()

            cached = self.store.get(req.cache_key)
            if cached:
                section.set_content(cached)
                status = SectionStatus.CACHED
                return status

            payload = self.fetch_json(req)
            fragment = self.apply_transform(req, payload)

            if fragment and fragment.strip():
                section.set_content(fragment)
                status = SectionStatus.DATA
                try:
                    self.store.set(req.cache_key, fragment)
                except OSError as exc:
                    log.warning("[%s] Could not persist fragment %r: %s", req.target_id, req.cache_key, exc)
            else:
                # Only real data is cached; an empty answer is fetched again next time.
                section.set_content(str(format_message(req.empty_message)))
                status = SectionStatus.EMPTY

        except FetchDataError as exc:
            log.error("[%s] %s: %s", req.target_id, exc.kind, exc.message)
            self._show_error(section, exc.message)
            status = SectionStatus.ERROR
        except Exception:
            log.exception("[%s] Unexpected error in fetch/render cycle", req.target_id)
            self._show_error(section, GENERIC_ERROR)
            status = SectionStatus.ERROR
        finally:
            section.hide_loader()
            section.status = status

        return status

    def run_all(self, reqs: Sequence[DataSourceRequest]) -> Dict[str, SectionStatus]:
        """
        Run every request as an independent task and wait for all of them.

        Completion order is not defined; each task only touches its own section
        and its own cache key.
        """
        if not reqs:
            return {}
        results: Dict[str, SectionStatus] = {}
        with ThreadPoolExecutor(max_workers=len(reqs), thread_name_prefix="section") as pool:
            futures = {pool.submit(self.run, r): r for r in reqs}
            for fut in as_completed(futures):
                results[futures[fut].target_id] = fut.result()
        return results
