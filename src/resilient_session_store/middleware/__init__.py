"""Request-cycle helpers.

Public surface
--------------
- SessionMiddleware  — cookie-driven load/commit/destroy hooks
"""
from __future__ import annotations

from resilient_session_store.middleware.session_middleware import SessionMiddleware

__all__ = ["SessionMiddleware"]
