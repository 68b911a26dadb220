"""Abstract base class for session storage backends.

A backend is a thin, TTL-capable key/value client.  Keys are fully
prefixed strings (the store owns prefixing); values are opaque byte
strings produced by a codec.

Classes
-------
- StorageBackend           — abstract base for all backends
- BackendUnavailableError  — raised when the backend cannot be reached
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class BackendUnavailableError(ConnectionError):
    """Raised when a backend call fails because the backend is unreachable."""


class StorageBackend(ABC):
    """Protocol for reading and writing raw session payloads.

    Every method raises ``BackendUnavailableError`` (or another
    ``ConnectionError``) when the backend cannot be reached.  Backends
    must be safe for use from several request threads at once; the
    store never holds a backend-level lock.
    """

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the payload stored under ``key``, or None if absent."""

    @abstractmethod
    def set(self, key: str, payload: bytes) -> None:
        """Store ``payload`` under ``key`` with no expiry."""

    @abstractmethod
    def set_with_ttl(self, key: str, payload: bytes, ttl: int) -> None:
        """Store ``payload`` under ``key``, expiring after ``ttl`` seconds.

        Parameters
        ----------
        key:
            Fully prefixed storage key.
        payload:
            Encoded session bytes.
        ttl:
            Positive number of seconds before the key expires.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``.  Deleting a missing key is not an error."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True if ``key`` is currently stored."""
