"""Failure handling for backend and decode errors.

Classes
-------
- Operation      — the store operation a failure happened in
- FailurePolicy  — classifies errors, logs them and fires the hooks
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable

from resilient_session_store.config import ConfigurationError
from resilient_session_store.storage.base import BackendUnavailableError

logger = logging.getLogger(__name__)

BackendDownHandler = Callable[[BaseException, Mapping[str, Any], str | None], Any]
DecodeErrorHandler = Callable[[BaseException, str], Any]


class Operation(str, Enum):
    """Store operations that talk to the backend."""

    LOAD = "load"
    SAVE = "save"
    EXISTS = "exists"
    DESTROY = "destroy"


class FailurePolicy:
    """Decide what a backend or decode failure means for the caller.

    Connectivity errors never escape the store: each one is logged,
    reported to ``on_backend_down`` and replaced by the operation's
    fallback.  Decode errors are reported to ``on_decode_error``.  Both
    hooks are observational; their return values are ignored.

    Parameters
    ----------
    on_backend_down:
        Optional ``(error, context, identifier)`` callable.
    on_decode_error:
        Optional ``(error, identifier)`` callable.

    Raises
    ------
    ConfigurationError
        If a hook is supplied but is not callable.
    """

    #: Exception types treated as "backend unreachable".
    connectivity_errors: tuple[type[BaseException], ...] = (
        BackendUnavailableError,
        ConnectionError,
    )

    def __init__(
        self,
        on_backend_down: BackendDownHandler | None = None,
        on_decode_error: DecodeErrorHandler | None = None,
    ) -> None:
        self.on_backend_down = on_backend_down
        self.on_decode_error = on_decode_error
        self._verify_handlers()

    def _verify_handlers(self) -> None:
        for name in ("on_backend_down", "on_decode_error"):
            handler = getattr(self, name)
            if handler is not None and not callable(handler):
                raise ConfigurationError(f"{name} handler is not callable")

    def backend_down(
        self,
        operation: Operation,
        error: BaseException,
        context: Mapping[str, Any],
        identifier: str | None,
    ) -> None:
        """Record a connectivity failure during ``operation``."""
        logger.warning(
            "Session backend unreachable during %s of %r: %s",
            operation.value,
            identifier,
            error,
        )
        if self.on_backend_down is not None:
            self.on_backend_down(error, context, identifier)

    def decode_failed(self, error: BaseException, identifier: str) -> None:
        """Record that the payload stored for ``identifier`` was unreadable."""
        logger.warning("Discarding undecodable session %r: %s", identifier, error)
        if self.on_decode_error is not None:
            self.on_decode_error(error, identifier)

    def __repr__(self) -> str:
        return (
            f"FailurePolicy(on_backend_down={self.on_backend_down!r}, "
            f"on_decode_error={self.on_decode_error!r})"
        )
