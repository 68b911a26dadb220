"""Native binary codec backed by :mod:`pickle`.

Payloads are written with a fixed pickle protocol so every encoded value
starts with the same two-byte signature.  The migrating codec relies on
that signature to recognise legacy payloads.

Only decode payloads from a backend you trust: unpickling attacker
controlled bytes can execute arbitrary code.
"""
from __future__ import annotations

import pickle
from typing import Any

from resilient_session_store.codec.base import Codec, DecodeError, EncodeError

PICKLE_PROTOCOL: int = 4

#: ``PROTO`` opcode followed by the protocol number.
NATIVE_SIGNATURE: bytes = bytes([0x80, PICKLE_PROTOCOL])


class NativeCodec(Codec):
    """Round-trips arbitrary picklable Python values."""

    name = "native"

    def encode(self, value: Any) -> bytes:
        try:
            return pickle.dumps(value, protocol=PICKLE_PROTOCOL)
        except (pickle.PicklingError, TypeError, AttributeError) as exc:
            raise EncodeError(f"Value is not picklable: {exc}") from exc

    def decode(self, payload: bytes) -> Any:
        # Unpickling failures surface as many unrelated exception types.
        try:
            return pickle.loads(payload)
        except Exception as exc:  # noqa: BLE001
            raise DecodeError(f"Invalid native payload: {exc}") from exc

    @staticmethod
    def is_native(payload: bytes) -> bool:
        """Return True if ``payload`` carries the native signature."""
        return payload[:2] == NATIVE_SIGNATURE
