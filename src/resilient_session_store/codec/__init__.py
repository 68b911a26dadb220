"""Codec subpackage.

Public surface
--------------
- Codec           — abstract encode/decode pair
- DecodeError     — malformed payload
- EncodeError     — unrepresentable value
- NativeCodec     — pickle, fixed protocol and signature
- JsonCodec       — UTF-8 JSON
- YamlCodec       — safe YAML
- MigratingCodec  — JSON that upgrades native payloads on read
- resolve_codec   — select a codec from a name or custom object
"""
from __future__ import annotations

from typing import Any

from resilient_session_store.codec.base import Codec, DecodeError, EncodeError
from resilient_session_store.codec.migrating import MigratingCodec
from resilient_session_store.codec.native import NATIVE_SIGNATURE, NativeCodec
from resilient_session_store.codec.structured import JsonCodec, YamlCodec
from resilient_session_store.config import ConfigurationError

_CODECS: dict[str, type[Codec]] = {
    "native": NativeCodec,
    "json": JsonCodec,
    "migrating": MigratingCodec,
    "hybrid": MigratingCodec,
    "yaml": YamlCodec,
}


class _CustomCodec(Codec):
    """Adapts a duck-typed encode/decode object to the ``Codec`` contract.

    Any exception raised by the wrapped ``decode`` is re-raised as
    ``DecodeError`` so the store can treat it as a corrupt payload.
    """

    def __init__(self, wrapped: Any) -> None:
        self._wrapped = wrapped
        self.name = getattr(wrapped, "name", type(wrapped).__name__)

    def encode(self, value: Any) -> bytes:
        return self._wrapped.encode(value)

    def decode(self, payload: bytes) -> Any:
        try:
            return self._wrapped.decode(payload)
        except DecodeError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise DecodeError(f"{self.name} could not decode payload: {exc}") from exc

    def __repr__(self) -> str:
        return f"_CustomCodec({self._wrapped!r})"


def resolve_codec(codec: str | Any) -> Codec:
    """Return the codec named by ``codec`` or wrap a custom codec object.

    Parameters
    ----------
    codec:
        A registered name (``"native"``, ``"json"``, ``"migrating"``,
        ``"hybrid"``, ``"yaml"``), a ``Codec`` instance, or any object with
        callable ``encode`` and ``decode`` attributes.

    Returns
    -------
    Codec

    Raises
    ------
    ConfigurationError
        If the name is unknown or the object lacks ``encode``/``decode``.
    """
    if isinstance(codec, Codec):
        return codec
    if isinstance(codec, type) and issubclass(codec, Codec):
        return codec()
    if isinstance(codec, str):
        try:
            return _CODECS[codec.lower()]()
        except KeyError:
            known = ", ".join(sorted(_CODECS))
            raise ConfigurationError(
                f"Unknown codec {codec!r}. Known codecs: {known}"
            ) from None
    if callable(getattr(codec, "encode", None)) and callable(getattr(codec, "decode", None)):
        return _CustomCodec(codec)
    raise ConfigurationError(
        f"codec must be a codec name or an object with encode/decode, got {codec!r}"
    )


__all__ = [
    "NATIVE_SIGNATURE",
    "Codec",
    "DecodeError",
    "EncodeError",
    "JsonCodec",
    "MigratingCodec",
    "NativeCodec",
    "YamlCodec",
    "resolve_codec",
]
