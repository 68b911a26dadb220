"""JSON codec that upgrades native payloads on read.

Stores written by the native codec can be switched to JSON without
dropping live sessions: a payload starting with the native signature is
decoded through :class:`NativeCodec` and handed back as a plain value, so
the next save writes it as JSON.  Anything else is read as JSON.

The signature check is a prefix sniff performed before any JSON parse.
A JSON document can never start with byte ``0x80``, so the two formats
cannot be confused.
"""
from __future__ import annotations

import logging
from typing import Any

from resilient_session_store.codec.native import NativeCodec
from resilient_session_store.codec.structured import JsonCodec

logger = logging.getLogger(__name__)


class MigratingCodec(JsonCodec):
    """Writes JSON; reads JSON or legacy native payloads."""

    name = "migrating"

    def __init__(self) -> None:
        self._legacy = NativeCodec()

    def decode(self, payload: bytes) -> Any:
        if self.needs_migration(payload):
            logger.debug("MigratingCodec: decoding legacy native payload")
            return self._legacy.decode(payload)
        return super().decode(payload)

    @staticmethod
    def needs_migration(payload: bytes) -> bool:
        """Return True if ``payload`` was written by the native codec."""
        return NativeCodec.is_native(payload)
