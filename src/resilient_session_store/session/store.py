"""Session record lifecycle.

Provides ``SessionStore``, the engine that loads, saves, checks and
destroys session records in a TTL-capable key/value backend while
degrading gracefully when the backend is down or a stored payload is
unreadable.

Classes
-------
- SessionStore  — load / save / exists / destroy over a StorageBackend
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import timedelta
from types import MappingProxyType
from typing import Any, Literal

import redis

from resilient_session_store.codec import Codec, DecodeError, resolve_codec
from resilient_session_store.config import ConfigurationError, StoreConfig, normalize_ttl
from resilient_session_store.session.merge import NO_WRITE, resolve_write
from resilient_session_store.session.policy import FailurePolicy, Operation
from resilient_session_store.session.record import LoadedSession, SessionRecord
from resilient_session_store.storage.adapter import ClientAdapter, is_storage_client
from resilient_session_store.storage.base import StorageBackend
from resilient_session_store.storage.redis import RedisBackend

logger = logging.getLogger(__name__)

_EMPTY_CONTEXT: Mapping[str, Any] = MappingProxyType({})


class SessionStore:
    """Load, save, check and destroy session records.

    Every call is synchronous and talks to the backend directly; nothing
    is cached between calls.  Connectivity failures are absorbed by the
    ``FailurePolicy`` and turned into per-operation fallbacks, so callers
    never see them.

    Parameters
    ----------
    config:
        A ``StoreConfig``.  When omitted, ``options`` are used to build one.
    **options:
        ``StoreConfig`` fields; applied on top of ``config`` if both are
        given.

    Raises
    ------
    ConfigurationError
        If a failure hook is not callable, the codec cannot be resolved or
        ``backend_client`` is not a usable client.
    """

    def __init__(self, config: StoreConfig | None = None, **options: Any) -> None:
        if config is None:
            config = StoreConfig(**options)
        elif options:
            config = StoreConfig.model_validate({**dict(config), **options})
        self._config = config
        self._policy = FailurePolicy(
            on_backend_down=config.on_backend_down,
            on_decode_error=config.on_decode_error,
        )
        self._codec = resolve_codec(config.codec)
        self._backend = self._build_backend(config)

    @staticmethod
    def _build_backend(config: StoreConfig) -> StorageBackend:
        client = config.backend_client
        if client is None:
            return RedisBackend(url=config.redis_url, **config.redis_options)
        if isinstance(client, StorageBackend):
            return client
        if isinstance(client, (redis.Redis, redis.RedisCluster)):
            return RedisBackend(url=config.redis_url, client=client)
        if is_storage_client(client):
            return ClientAdapter(client)
        raise ConfigurationError(
            "backend_client must be a StorageBackend, a redis client or an object "
            f"with get/set/set_with_ttl/delete/exists methods, got {client!r}"
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def codec(self) -> Codec:
        return self._codec

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    @property
    def policy(self) -> FailurePolicy:
        return self._policy

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(
        self,
        identifier: str | None,
        context: Mapping[str, Any] | None = None,
    ) -> LoadedSession:
        """Return the session stored under ``identifier``.

        A fresh identifier with an empty record is returned when
        ``identifier`` is empty, nothing is stored under it, the stored
        payload cannot be decoded, or the backend is unreachable.  An
        unknown identifier is never reused.

        Parameters
        ----------
        identifier:
            The identifier supplied by the client, if any.
        context:
            Request context passed through to ``on_backend_down``.

        Returns
        -------
        LoadedSession
            ``(identifier, record)``; the record carries its snapshot.
        """
        context = _EMPTY_CONTEXT if context is None else context
        if not identifier:
            return self._fresh_session()
        try:
            data = self._read(identifier, context)
        except self._policy.connectivity_errors as exc:
            self._policy.backend_down(Operation.LOAD, exc, context, identifier)
            return self._fresh_session()

        if data is None:
            logger.debug("SessionStore: no session stored for %r", identifier)
            return self._fresh_session()
        logger.debug("SessionStore: loaded session %r", identifier)
        return LoadedSession(identifier, SessionRecord(data))

    def save(
        self,
        identifier: str,
        record: Mapping[str, Any],
        ttl: int | timedelta | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> str | Literal[False]:
        """Persist ``record`` under ``identifier``.

        Nothing is written when the record equals the snapshot it was
        loaded with.  If another writer changed the stored record since
        the load, this request's keys are merged on top of the stored
        value.  After a write the record is updated to the persisted value
        and re-snapshotted.

        Parameters
        ----------
        identifier:
            The identifier returned by ``load``.
        record:
            The (possibly mutated) record.  Plain mappings are accepted and
            treated as having no snapshot.
        ttl:
            Per-call expiry overriding ``expire_after``.  A ``timedelta``
            is rounded up to whole seconds.
        context:
            Request context passed through to ``on_backend_down``.

        Returns
        -------
        str | False
            ``identifier`` on success (including a skipped write), False if
            the backend was unreachable.

        Raises
        ------
        ValueError
            If ``ttl`` is not positive.
        """
        context = _EMPTY_CONTEXT if context is None else context
        if ttl is not None:
            ttl = normalize_ttl(ttl)
        snapshot = record.snapshot if isinstance(record, SessionRecord) else None
        try:
            resolved = resolve_write(
                record,
                snapshot,
                lambda: self._read(identifier, context),
            )
            if resolved is NO_WRITE:
                logger.debug("SessionStore: session %r unchanged, skipping write", identifier)
                return identifier
            self._write(identifier, resolved, ttl)
        except self._policy.connectivity_errors as exc:
            self._policy.backend_down(Operation.SAVE, exc, context, identifier)
            return False

        if isinstance(record, SessionRecord):
            record.clear()
            record.update(resolved)
            record.rebase()
        return identifier

    def exists(
        self,
        identifier: str | None,
        context: Mapping[str, Any] | None = None,
    ) -> bool:
        """Return True if a session is stored under ``identifier``.

        When the backend is unreachable this returns True: the session may
        still be valid, but its data is not known to be retrievable.
        """
        context = _EMPTY_CONTEXT if context is None else context
        if not identifier:
            return False
        try:
            return self._backend.exists(self._key(identifier))
        except self._policy.connectivity_errors as exc:
            self._policy.backend_down(Operation.EXISTS, exc, context, identifier)
            return True

    def destroy(
        self,
        identifier: str,
        replace: bool = True,
        context: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Delete the session stored under ``identifier``.

        Parameters
        ----------
        identifier:
            The session to delete.
        replace:
            When True (default) a new identifier is generated and returned
            for the follow-up session; when False nothing is returned.
        context:
            Request context passed through to ``on_backend_down``.

        Returns
        -------
        str | None
            The replacement identifier, or None if ``replace`` is False.
            An unreachable backend is treated as if the key were already
            gone.
        """
        context = _EMPTY_CONTEXT if context is None else context
        try:
            self._backend.delete(self._key(identifier))
            logger.debug("SessionStore: destroyed session %r", identifier)
        except self._policy.connectivity_errors as exc:
            self._policy.backend_down(Operation.DESTROY, exc, context, identifier)
        if not replace:
            return None
        return self._generate_identifier(avoid=identifier)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _key(self, identifier: str) -> str:
        return f"{self._config.key_prefix}{identifier}"

    def _generate_identifier(self, avoid: str | None = None) -> str:
        identifier = self._config.id_generator()
        while identifier == avoid:
            identifier = self._config.id_generator()
        return identifier

    def _fresh_session(self) -> LoadedSession:
        return LoadedSession(self._generate_identifier(), SessionRecord())

    def _read(self, identifier: str, context: Mapping[str, Any]) -> dict[str, Any] | None:
        """Return the decoded record for ``identifier`` or None.

        An undecodable payload is deleted and reported, then treated as
        absent.  Connectivity errors from the ``get`` propagate.
        """
        payload = self._backend.get(self._key(identifier))
        if payload is None:
            return None
        try:
            value = self._codec.decode(payload)
            if not isinstance(value, Mapping):
                raise DecodeError(
                    f"Stored session is a {type(value).__name__}, not a mapping"
                )
        except DecodeError as exc:
            self.destroy(identifier, replace=False, context=context)
            self._policy.decode_failed(exc, identifier)
            return None
        return dict(value)

    def _write(self, identifier: str, data: Mapping[str, Any], ttl: int | None) -> None:
        payload = self._codec.encode(dict(data))
        expiry = self._config.expire_after if ttl is None else ttl
        key = self._key(identifier)
        if expiry is not None:
            self._backend.set_with_ttl(key, payload, expiry)
        else:
            self._backend.set(key, payload)
        logger.debug("SessionStore: wrote session %r (ttl=%r)", identifier, expiry)

    def __repr__(self) -> str:
        return (
            f"SessionStore(backend={self._backend!r}, codec={self._codec!r}, "
            f"key_prefix={self._config.key_prefix!r})"
        )
