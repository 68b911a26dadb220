"""Session load / commit middleware.

Wraps a ``SessionStore`` with the hooks a web framework calls around each
request: find the identifier in the request cookies, load the session,
and write it back when the response goes out.

Classes
-------
- SessionMiddleware  — before/after request hooks for session management
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, Literal

from resilient_session_store.session.record import LoadedSession
from resilient_session_store.session.store import SessionStore

logger = logging.getLogger(__name__)


class SessionMiddleware:
    """Load and persist session state around each request cycle.

    It is intentionally framework-agnostic: callers pass the request's
    cookie mapping and call the hooks at the right points in their own
    pipeline.  Setting the response cookie to the returned identifier is
    left to the caller.

    Parameters
    ----------
    store:
        The session store to delegate to.
    """

    def __init__(self, store: SessionStore) -> None:
        self._store = store

    @property
    def cookie_name(self) -> str:
        """Name of the cookie carrying the session identifier."""
        return self._store.config.identifier_cookie_name

    def identifier_from(self, cookies: Mapping[str, str]) -> str | None:
        """Return the session identifier in ``cookies``, if any."""
        return cookies.get(self.cookie_name) or None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def before_request(
        self,
        cookies: Mapping[str, str],
        context: Mapping[str, Any] | None = None,
    ) -> LoadedSession:
        """Load the session named by the request cookies.

        Returns
        -------
        LoadedSession
            The stored session, or a fresh identifier with an empty record.
            Callers must send the returned identifier back in the cookie.
        """
        requested = self.identifier_from(cookies)
        loaded = self._store.load(requested, context=context)
        if loaded.identifier != requested:
            logger.debug("SessionMiddleware: issued new session %r", loaded.identifier)
        return loaded

    def after_request(
        self,
        loaded: LoadedSession,
        ttl: int | timedelta | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> str | Literal[False]:
        """Persist the session loaded in ``before_request``.

        Parameters
        ----------
        loaded:
            The value returned by ``before_request``; its record may have
            been mutated since.
        ttl:
            Per-request expiry overriding the store's ``expire_after``.
        context:
            Request context for failure hooks.

        Returns
        -------
        str | False
            The identifier on success, False if the backend was down.
        """
        result = self._store.save(loaded.identifier, loaded.record, ttl=ttl, context=context)
        logger.debug("SessionMiddleware: committed session %r", loaded.identifier)
        return result

    def exists(
        self,
        cookies: Mapping[str, str],
        context: Mapping[str, Any] | None = None,
    ) -> bool:
        """Return True if the cookie names a session that is still stored."""
        return self._store.exists(self.identifier_from(cookies), context=context)

    def destroy(
        self,
        cookies: Mapping[str, str],
        context: Mapping[str, Any] | None = None,
    ) -> None:
        """Drop the session named by the request cookies, if any.

        No replacement identifier is issued; the caller should clear the
        cookie.
        """
        identifier = self.identifier_from(cookies)
        if identifier is None:
            return
        self._store.destroy(identifier, replace=False, context=context)
        logger.debug("SessionMiddleware: dropped session %r", identifier)
