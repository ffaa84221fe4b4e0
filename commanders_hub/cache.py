# commanders_hub/cache.py
"""
Persistent fragment store.

Maps a cache key to the rendered fragment for a page section. Entries never
expire: once a key is present the engine skips the network for it on every
later run, until the entry is deleted (see the `clear-cache` CLI command) or
the backing file is removed.

The store is shared by every task in the process. Each key is owned by one
task, so the lock only guards the file write, not the values.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from typing import Dict, Iterable, Optional

log = logging.getLogger(__name__)


class FragmentStore:
    """A small string -> string store persisted as a JSON object on disk."""

    def __init__(self, path: Optional[str] = None) -> None:
        """
        Args:
            path: JSON file backing the store. None keeps everything in memory.
        """
        self.path = path
        self._lock = threading.Lock()
        self._store: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        """Read the backing file; an unreadable or corrupt file counts as empty."""
        if not self.path or not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            log.warning("Fragment store %s unreadable, starting empty: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            log.warning("Fragment store %s is not a JSON object, starting empty", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def _flush(self) -> None:
        """Atomically rewrite the backing file. Caller holds the lock."""
        if not self.path:
            return
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=directory, prefix=".fragments-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(self._store, fh, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def get(self, key: str) -> Optional[str]:
        """Return the cached fragment for key, or None."""
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        """Store a fragment and persist it."""
        with self._lock:
            self._store[key] = value
            self._flush()

    def delete(self, key: str) -> bool:
        """Remove one entry. Returns True if it existed."""
        with self._lock:
            if key not in self._store:
                return False
            del self._store[key]
            self._flush()
            return True

    def clear(self, keys: Optional[Iterable[str]] = None) -> int:
        """
        Remove the given keys, or everything when keys is None.

        Returns:
            How many entries were removed.
        """
        with self._lock:
            if keys is None:
                removed = len(self._store)
                self._store.clear()
            else:
                removed = 0
                for key in keys:
                    if self._store.pop(key, None) is not None:
                        removed += 1
            self._flush()
            return removed

    def keys(self) -> list[str]:
        return sorted(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store
