"""Redis storage backend.

Classes
-------
- RedisBackend  — Redis key-value session storage
"""
from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import redis
from redis import exceptions as redis_exceptions

from resilient_session_store.storage.base import BackendUnavailableError, StorageBackend

_CONNECTIVITY_ERRORS = (
    redis_exceptions.ConnectionError,
    redis_exceptions.TimeoutError,
)


@contextmanager
def _translate_errors(operation: str, key: str) -> Iterator[None]:
    try:
        yield
    except _CONNECTIVITY_ERRORS as exc:
        raise BackendUnavailableError(
            f"Redis unreachable during {operation} of {key!r}: {exc}"
        ) from exc


class RedisBackend(StorageBackend):
    """Persists session payloads in a Redis instance.

    Keys arrive fully prefixed from the store and are used verbatim.
    Connectivity failures from redis-py (``ConnectionError`` and
    ``TimeoutError``) are re-raised as ``BackendUnavailableError``;
    every other redis error propagates unchanged.

    Parameters
    ----------
    url:
        Redis connection URL (e.g. ``"redis://localhost:6379/0"``).
        Ignored when ``client`` is supplied.
    client:
        A pre-built ``redis.Redis`` (or compatible) client.  Responses
        must be raw bytes, i.e. the client must not use
        ``decode_responses=True``.
    **options:
        Extra keyword arguments for ``redis.Redis.from_url`` such as
        ``socket_timeout``.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        client: Any | None = None,
        **options: Any,
    ) -> None:
        if client is None:
            client = redis.Redis.from_url(url, **options)
        self._client = client
        self._url = url

    @property
    def client(self) -> Any:
        """The underlying redis client."""
        return self._client

    # ------------------------------------------------------------------
    # StorageBackend interface
    # ------------------------------------------------------------------

    def get(self, key: str) -> bytes | None:
        with _translate_errors("get", key):
            value = self._client.get(key)
        if value is None:
            return None
        if isinstance(value, str):
            return value.encode("utf-8")
        return bytes(value)

    def set(self, key: str, payload: bytes) -> None:
        with _translate_errors("set", key):
            self._client.set(key, payload)

    def set_with_ttl(self, key: str, payload: bytes, ttl: int) -> None:
        with _translate_errors("setex", key):
            self._client.setex(key, ttl, payload)

    def delete(self, key: str) -> None:
        with _translate_errors("delete", key):
            self._client.delete(key)

    def exists(self, key: str) -> bool:
        """Return True if the key exists in Redis."""
        with _translate_errors("exists", key):
            return bool(self._client.exists(key))

    def __repr__(self) -> str:
        return f"RedisBackend(url={self._url!r})"
