"""Structured-text codecs: JSON and YAML.

Both round-trip only JSON-representable values (mappings with string keys,
lists, strings, numbers, booleans and None).  The top-level value may be
any of those, not only a mapping.

Classes
-------
- JsonCodec  — compact UTF-8 JSON
- YamlCodec  — YAML via ``yaml.safe_dump`` / ``yaml.safe_load``
"""
from __future__ import annotations

import json
from typing import Any

import yaml

from resilient_session_store.codec.base import Codec, DecodeError, EncodeError


class JsonCodec(Codec):
    """UTF-8 JSON codec."""

    name = "json"

    def encode(self, value: Any) -> bytes:
        try:
            text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            raise EncodeError(f"Value is not JSON-serialisable: {exc}") from exc
        return text.encode("utf-8")

    def decode(self, payload: bytes) -> Any:
        try:
            return json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError(f"Invalid JSON payload: {exc}") from exc


class YamlCodec(Codec):
    """YAML codec restricted to the safe loader and dumper."""

    name = "yaml"

    def encode(self, value: Any) -> bytes:
        try:
            text = yaml.safe_dump(value, default_flow_style=False, allow_unicode=True, sort_keys=True)
        except yaml.YAMLError as exc:
            raise EncodeError(f"Value is not YAML-serialisable: {exc}") from exc
        return text.encode("utf-8")

    def decode(self, payload: bytes) -> Any:
        try:
            return yaml.safe_load(payload.decode("utf-8"))
        except (UnicodeDecodeError, yaml.YAMLError) as exc:
            raise DecodeError(f"Invalid YAML payload: {exc}") from exc
