# commanders_hub/errors.py
"""
Tagged error hierarchy shared by the upstream client and the render engine.

Every error carries a `message` that is safe to show to a user. Anything more
detailed (URLs, bodies, tracebacks) belongs in the log.
"""

from __future__ import annotations

from typing import Optional


class FetchDataError(Exception):
    """Base class for classified fetch/processing failures."""

    kind = "FetchDataError"

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def __repr__(self) -> str:
        if self.status is None:
            return f"{self.kind}({self.message!r})"
        return f"{self.kind}({self.message!r}, status={self.status})"


class NetworkError(FetchDataError):
    """The transport could not reach the server (DNS, refused, timeout)."""

    kind = "NetworkError"


class HttpError(FetchDataError):
    """The server answered with a non-2xx status."""

    kind = "HttpError"


class FormatError(FetchDataError):
    """The body was missing, not JSON, or not parseable."""

    kind = "FormatError"


class ProcessingError(FetchDataError):
    """A transform raised while turning JSON into a fragment."""

    kind = "ProcessingError"


class ConfigurationError(FetchDataError):
    """Server-side misconfiguration, e.g. a missing API credential."""

    kind = "ConfigurationError"
