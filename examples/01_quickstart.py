#!/usr/bin/env python3
"""Example: Quickstart

Loads a session, mutates it, saves it, and shows that an unchanged save
never reaches the backend.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install resilient-session-store
"""
from __future__ import annotations

import resilient_session_store
from resilient_session_store import InMemoryBackend, SessionStore


def main() -> None:
    print(f"resilient-session-store version: {resilient_session_store.__version__}")

    backend = InMemoryBackend()
    store = SessionStore(backend_client=backend, key_prefix="demo:", codec="json", expire_after=1800)

    identifier, record = store.load(None)
    print(f"\nNew session {identifier}: {dict(record)}")

    record["user_id"] = 42
    record["cart"] = ["sku-1"]
    store.save(identifier, record)
    print(f"Stored payload: {backend.get(f'demo:{identifier}')!r}")
    print(f"TTL remaining: {backend.ttl(f'demo:{identifier}'):.0f}s")

    identifier, record = store.load(identifier)
    print(f"\nReloaded: {dict(record)} (changed={record.changed})")
    store.save(identifier, record)
    print("Unchanged save skipped the backend write.")


if __name__ == "__main__":
    main()
