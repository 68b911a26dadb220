"""resilient-session-store — Redis-backed session records that survive outages.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> from resilient_session_store import InMemoryBackend, SessionStore
>>> store = SessionStore(backend_client=InMemoryBackend(), codec="json")
>>> identifier, record = store.load(None)
>>> record["user_id"] = 42
>>> store.save(identifier, record) == identifier
True
"""
from __future__ import annotations

# Configuration
from resilient_session_store.config import ConfigurationError, StoreConfig, generate_identifier

# Codecs
from resilient_session_store.codec import (
    NATIVE_SIGNATURE,
    Codec,
    DecodeError,
    EncodeError,
    JsonCodec,
    MigratingCodec,
    NativeCodec,
    YamlCodec,
    resolve_codec,
)

# Session lifecycle
from resilient_session_store.session.merge import NO_WRITE, deep_merge, resolve_write, same_value
from resilient_session_store.session.policy import FailurePolicy, Operation
from resilient_session_store.session.record import LoadedSession, SessionRecord
from resilient_session_store.session.store import SessionStore

# Storage backends
from resilient_session_store.storage.base import BackendUnavailableError, StorageBackend
from resilient_session_store.storage.memory import InMemoryBackend
from resilient_session_store.storage.redis import RedisBackend

# Middleware
from resilient_session_store.middleware.session_middleware import SessionMiddleware

__version__: str = "0.1.0"

__all__ = [
    "__version__",
    # Configuration
    "ConfigurationError",
    "StoreConfig",
    "generate_identifier",
    # Codecs
    "NATIVE_SIGNATURE",
    "Codec",
    "DecodeError",
    "EncodeError",
    "JsonCodec",
    "MigratingCodec",
    "NativeCodec",
    "YamlCodec",
    "resolve_codec",
    # Session lifecycle
    "NO_WRITE",
    "FailurePolicy",
    "LoadedSession",
    "Operation",
    "SessionRecord",
    "SessionStore",
    "deep_merge",
    "resolve_write",
    "same_value",
    # Storage backends
    "BackendUnavailableError",
    "InMemoryBackend",
    "RedisBackend",
    "StorageBackend",
    # Middleware
    "SessionMiddleware",
]
