"""Adapter for duck-typed storage clients.

Classes
-------
- ClientAdapter  — wraps any object exposing the backend methods
"""
from __future__ import annotations

from typing import Any

from resilient_session_store.storage.base import StorageBackend

#: Methods an object must expose to be used as a storage client.
CLIENT_METHODS: tuple[str, ...] = ("get", "set", "set_with_ttl", "delete", "exists")


def is_storage_client(client: Any) -> bool:
    """Return True if ``client`` has a callable for every backend method."""
    return all(callable(getattr(client, name, None)) for name in CLIENT_METHODS)


class ClientAdapter(StorageBackend):
    """Presents a duck-typed client as a ``StorageBackend``.

    Calls are forwarded unchanged, so connectivity errors raised by the
    client (``BackendUnavailableError`` or any ``ConnectionError``) reach
    the store as they would from a built-in backend.  ``str`` payloads
    are encoded as UTF-8 and ``exists`` results are coerced to ``bool``.

    Parameters
    ----------
    client:
        Object with ``get``, ``set``, ``set_with_ttl``, ``delete`` and
        ``exists`` methods taking the same arguments as ``StorageBackend``.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        """The wrapped client."""
        return self._client

    def get(self, key: str) -> bytes | None:
        value = self._client.get(key)
        if value is None:
            return None
        if isinstance(value, str):
            return value.encode("utf-8")
        return bytes(value)

    def set(self, key: str, payload: bytes) -> None:
        self._client.set(key, payload)

    def set_with_ttl(self, key: str, payload: bytes, ttl: int) -> None:
        self._client.set_with_ttl(key, payload, ttl)

    def delete(self, key: str) -> None:
        self._client.delete(key)

    def exists(self, key: str) -> bool:
        return bool(self._client.exists(key))

    def __repr__(self) -> str:
        return f"ClientAdapter({self._client!r})"
