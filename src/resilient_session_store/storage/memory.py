"""In-memory storage backend.

Stores payloads in a plain Python dict with optional per-key expiry.
All data is lost when the process exits.  This backend is primarily
useful for tests and local prototyping; it can also simulate an outage
by flipping ``available`` to False.

Classes
-------
- InMemoryBackend  — dict-backed ephemeral storage
"""
from __future__ import annotations

import threading
import time

from resilient_session_store.storage.base import BackendUnavailableError, StorageBackend


class InMemoryBackend(StorageBackend):
    """Ephemeral, in-process storage backend backed by a Python dict.

    Parameters
    ----------
    initial_data:
        Optional pre-populated mapping of keys to raw payloads.
        A shallow copy is taken so the caller's dict is not mutated.
    clock:
        Monotonic clock used for expiry.  Defaults to ``time.monotonic``;
        tests may pass a controllable replacement.
    """

    def __init__(
        self,
        initial_data: dict[str, bytes] | None = None,
        clock=time.monotonic,
    ) -> None:
        self._store: dict[str, bytes] = dict(initial_data or {})
        self._expiry: dict[str, float] = {}
        self._clock = clock
        self._lock = threading.Lock()
        self.available = True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _check_available(self) -> None:
        if not self.available:
            raise BackendUnavailableError("InMemoryBackend is marked unavailable.")

    def _evict_if_expired(self, key: str) -> None:
        deadline = self._expiry.get(key)
        if deadline is not None and self._clock() >= deadline:
            self._store.pop(key, None)
            self._expiry.pop(key, None)

    # ------------------------------------------------------------------
    # StorageBackend interface
    # ------------------------------------------------------------------

    def get(self, key: str) -> bytes | None:
        """Return the payload for ``key``, or None if absent or expired."""
        self._check_available()
        with self._lock:
            self._evict_if_expired(key)
            return self._store.get(key)

    def set(self, key: str, payload: bytes) -> None:
        """Store ``payload`` under ``key``, clearing any previous expiry."""
        self._check_available()
        with self._lock:
            self._store[key] = payload
            self._expiry.pop(key, None)

    def set_with_ttl(self, key: str, payload: bytes, ttl: int) -> None:
        """Store ``payload`` under ``key`` for ``ttl`` seconds."""
        self._check_available()
        with self._lock:
            self._store[key] = payload
            self._expiry[key] = self._clock() + ttl

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        self._check_available()
        with self._lock:
            self._store.pop(key, None)
            self._expiry.pop(key, None)

    def exists(self, key: str) -> bool:
        """Return True if ``key`` is present and not expired."""
        self._check_available()
        with self._lock:
            self._evict_if_expired(key)
            return key in self._store

    # ------------------------------------------------------------------
    # Extras
    # ------------------------------------------------------------------

    def ttl(self, key: str) -> float | None:
        """Return the remaining lifetime of ``key`` in seconds, if it expires."""
        with self._lock:
            deadline = self._expiry.get(key)
        if deadline is None:
            return None
        return max(deadline - self._clock(), 0.0)

    def clear(self) -> None:
        """Remove all stored payloads."""
        with self._lock:
            self._store.clear()
            self._expiry.clear()

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"InMemoryBackend(keys={len(self._store)}, available={self.available})"
