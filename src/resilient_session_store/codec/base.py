"""Codec contract and codec errors.

A codec turns a session record into bytes for the backend and back.
``decode`` may return any value the format can carry; the store decides
whether the value is a usable record.

Classes
-------
- Codec        — abstract encode/decode pair
- DecodeError  — stored bytes could not be decoded
- EncodeError  — a value could not be represented by the codec
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class DecodeError(ValueError):
    """Raised when a payload cannot be decoded by the active codec."""


class EncodeError(ValueError):
    """Raised when a value cannot be represented by the active codec."""


class Codec(ABC):
    """Encode/decode pair for persisting a session record as bytes."""

    #: Short name used in configuration and log messages.
    name: str = "custom"

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        """Return ``value`` encoded as bytes.

        Raises
        ------
        EncodeError
            If ``value`` contains types the format cannot represent.
        """

    @abstractmethod
    def decode(self, payload: bytes) -> Any:
        """Return the value encoded in ``payload``.

        Raises
        ------
        DecodeError
            If ``payload`` is malformed for this format.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
