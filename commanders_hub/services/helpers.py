# commanders_hub/services/helpers.py
"""
Small defensive accessors shared by the normalizers.
"""

from __future__ import annotations

from typing import Any


def safe_int(v, default=0) -> int:
    """
    Convert a value to int safely; return default on failures.

    Accepts ints, floats and numeric strings ("7", " 7 ", "7.0").
    """
    if isinstance(v, str):
        v = v.strip()
        try:
            return int(v)
        except ValueError:
            pass
    try:
        return int(float(v)) if isinstance(v, str) else int(v)
    except (TypeError, ValueError, OverflowError):
        return default


def get_nested(obj: Any, path: list[str], default=None):
    """Safely access nested dict keys by path; return default if missing."""
    cur = obj
    for k in path:
        if not isinstance(cur, dict):
            return default
        cur = cur.get(k)
    return cur if cur is not None else default


def as_list(v: Any) -> list:
    """Return v if it is a list, else an empty list."""
    return v if isinstance(v, list) else []
