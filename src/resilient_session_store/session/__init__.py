"""Session lifecycle subpackage.

Public surface
--------------
- SessionStore   — load / save / exists / destroy engine
- SessionRecord  — mutable record carrying its load-time snapshot
- LoadedSession  — ``(identifier, record)`` result of a load
- FailurePolicy  — backend/decode failure handling
- Operation      — enum of store operations
- deep_merge     — recursive mapping merge used at save time
- resolve_write  — save-time conflict resolution
- NO_WRITE       — sentinel for an unchanged record
- same_value     — type-aware deep equality used to detect changes
"""
from __future__ import annotations

from resilient_session_store.session.merge import NO_WRITE, deep_merge, resolve_write, same_value
from resilient_session_store.session.policy import FailurePolicy, Operation
from resilient_session_store.session.record import LoadedSession, SessionRecord
from resilient_session_store.session.store import SessionStore

__all__ = [
    "NO_WRITE",
    "FailurePolicy",
    "LoadedSession",
    "Operation",
    "SessionRecord",
    "SessionStore",
    "deep_merge",
    "resolve_write",
    "same_value",
]
