"""Store configuration.

``StoreConfig`` is an immutable pydantic model built once when a
``SessionStore`` is constructed.  Per-request settings (currently only the
TTL) are passed to the individual store calls instead.

Classes
-------
- StoreConfig         — frozen configuration model
- normalize_ttl       — convert a TTL to positive whole seconds
- ConfigurationError  — invalid configuration detected at construction
"""
from __future__ import annotations

import math
import secrets
from datetime import timedelta
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConfigurationError(ValueError):
    """Raised when the store is configured with an unusable value."""


def generate_identifier() -> str:
    """Return a fresh 128-bit random session identifier as 32 hex chars."""
    return secrets.token_hex(16)


def normalize_ttl(value: int | timedelta) -> int:
    """Return ``value`` as a positive whole number of seconds.

    A ``timedelta`` is rounded up, so a sub-second expiry still expires
    rather than being stored forever.

    Raises
    ------
    ValueError
        If the resulting number of seconds is not positive.
    """
    seconds = math.ceil(value.total_seconds()) if isinstance(value, timedelta) else value
    if seconds <= 0:
        raise ValueError(f"ttl must be positive, got {value!r}")
    return seconds


class StoreConfig(BaseModel):
    """Immutable configuration for a ``SessionStore``.

    Attributes
    ----------
    identifier_cookie_name:
        Cookie (or parameter) carrying the session identifier.  Only the
        request middleware reads it.
    key_prefix:
        String prepended to every identifier to form the backend key.
    expire_after:
        Default TTL in seconds.  A ``timedelta`` is accepted and rounded up
        to whole seconds.  ``None`` stores keys without expiry.
    redis_url:
        Connection URL used when no ``backend_client`` is supplied.
    redis_options:
        Extra keyword arguments for ``redis.Redis.from_url``.
    backend_client:
        A ready ``StorageBackend``, a ``redis.Redis`` client, or any object
        with ``get``, ``set``, ``set_with_ttl``, ``delete`` and ``exists``.
    on_backend_down:
        Called with ``(error, context, identifier)`` when the backend is
        unreachable.
    on_decode_error:
        Called with ``(error, identifier)`` when a stored payload cannot be
        decoded.
    codec:
        ``"native"``, ``"json"``, ``"migrating"`` (alias ``"hybrid"``),
        ``"yaml"``, or an object with ``encode``/``decode`` methods.
    id_generator:
        Zero-argument callable producing fresh identifiers.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    identifier_cookie_name: str = "_session_id"
    key_prefix: str = ""
    expire_after: int | None = None
    redis_url: str = "redis://localhost:6379/0"
    redis_options: dict[str, Any] = Field(default_factory=dict)
    backend_client: Any = None
    on_backend_down: Any = None
    on_decode_error: Any = None
    codec: Any = "native"
    id_generator: Callable[[], str] = generate_identifier

    @field_validator("expire_after", mode="before")
    @classmethod
    def _normalise_expire_after(cls, value: Any) -> Any:
        if isinstance(value, timedelta):
            return math.ceil(value.total_seconds())
        return value

    @field_validator("expire_after")
    @classmethod
    def _check_expire_after(cls, value: int | None) -> int | None:
        if value is not None and value <= 0:
            raise ValueError(f"expire_after must be positive, got {value!r}")
        return value
