"""Storage backend subpackage.

All backends implement the ``StorageBackend`` ABC and signal an
unreachable backend with ``BackendUnavailableError``.

Public surface
--------------
- StorageBackend           — abstract base class
- BackendUnavailableError  — connectivity failure raised by backends
- InMemoryBackend          — in-process dict (useful for testing)
- RedisBackend             — Redis backend
- ClientAdapter            — wraps a duck-typed client with the backend methods
"""
from __future__ import annotations

from resilient_session_store.storage.adapter import ClientAdapter, is_storage_client
from resilient_session_store.storage.base import BackendUnavailableError, StorageBackend
from resilient_session_store.storage.memory import InMemoryBackend
from resilient_session_store.storage.redis import RedisBackend

__all__ = [
    "BackendUnavailableError",
    "ClientAdapter",
    "InMemoryBackend",
    "RedisBackend",
    "StorageBackend",
    "is_storage_client",
]
