# commanders_hub/transport.py
"""
In-process transport for the page's own proxy routes.

With no PROXY_BASE_URL configured, the page route would otherwise call back into
this same server over HTTP. A single sync worker can't answer that while it is
still busy rendering the page, so instead the request is dispatched through the
Flask test client and never leaves the process.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlsplit

from flask import Flask


class LocalResponse:
    """The slice of requests.Response the fetch engine reads."""

    def __init__(self, status_code: int, reason: str, headers: Mapping[str, str], text: str) -> None:
        self.status_code = status_code
        self.reason = reason
        self.headers = headers
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        # ValueError (JSONDecodeError) on bad bodies, same as requests.
        return json.loads(self.text)


class LocalTransport:
    """Callable with the requests.get(url, headers=, timeout=) shape, served by `app`."""

    def __init__(self, app: Flask) -> None:
        self.app = app

    def __call__(self, url: str, headers: Optional[Dict[str, str]] = None, timeout: Optional[float] = None) -> LocalResponse:
        # timeout is accepted for signature compatibility; nothing here blocks on the network.
        parts = urlsplit(url)
        path = parts.path or "/"
        if parts.query:
            path = f"{path}?{parts.query}"

        resp = self.app.test_client().get(path, headers=headers or {})
        _, _, reason = resp.status.partition(" ")
        return LocalResponse(
            status_code=resp.status_code,
            reason=reason,
            headers=resp.headers,
            text=resp.get_data(as_text=True),
        )
