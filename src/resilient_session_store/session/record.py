"""Session record types.

Classes
-------
- SessionRecord  — mutable session mapping carrying its load-time snapshot
- LoadedSession  — ``(identifier, record)`` pair returned by a load
"""
from __future__ import annotations

import copy
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, NamedTuple

from resilient_session_store.session.merge import same_value


class SessionRecord(dict):
    """A visitor's session data plus the snapshot it was loaded with.

    The record itself is an ordinary ``dict`` that request code mutates
    freely.  ``snapshot`` is a deep copy of the record as it was when
    loaded, exposed read-only; the store compares against it at save time
    to skip no-op writes and to detect concurrent writers.

    Parameters
    ----------
    data:
        Initial contents.
    snapshot:
        Baseline to record.  Defaults to a copy of ``data``.
    """

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        snapshot: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(data or {})
        baseline = self if snapshot is None else snapshot
        self._snapshot: Mapping[str, Any] = MappingProxyType(copy.deepcopy(dict(baseline)))

    @property
    def snapshot(self) -> Mapping[str, Any]:
        """Read-only copy of the record as it was loaded."""
        return self._snapshot

    @property
    def changed(self) -> bool:
        """True if the record differs from its snapshot."""
        return not same_value(self, self._snapshot)

    def rebase(self) -> None:
        """Take a fresh snapshot of the current contents."""
        self._snapshot = MappingProxyType(copy.deepcopy(dict(self)))

    def __repr__(self) -> str:
        return f"SessionRecord({dict.__repr__(self)})"


class LoadedSession(NamedTuple):
    """Result of ``SessionStore.load``; unpacks as ``identifier, record``."""

    identifier: str
    record: SessionRecord
