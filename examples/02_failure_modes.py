#!/usr/bin/env python3
"""Example: Failure Modes

Demonstrates the three situations the store absorbs instead of raising:
concurrent saves, a backend outage, and legacy pickle payloads read by the
migrating codec.

Usage:
    python examples/02_failure_modes.py

Requirements:
    pip install resilient-session-store
"""
from __future__ import annotations

from resilient_session_store import InMemoryBackend, NativeCodec, SessionStore


def demo_concurrent_saves(store: SessionStore) -> None:
    identifier, record = store.load(None)
    record["visits"] = 1
    store.save(identifier, record)

    _, first = store.load(identifier)
    _, second = store.load(identifier)
    first["cart"] = ["sku-1"]
    second["locale"] = "fr"
    store.save(identifier, first)
    store.save(identifier, second)
    print(f"  merged: {dict(store.load(identifier).record)}")


def demo_outage(backend: InMemoryBackend, store: SessionStore) -> None:
    backend.available = False
    try:
        identifier, record = store.load("some-session")
        print(f"  load -> fresh {identifier[:8]}..., record={dict(record)}")
        print(f"  exists -> {store.exists('some-session')}")
        record["a"] = 1
        print(f"  save -> {store.save(identifier, record)}")
    finally:
        backend.available = True


def demo_migration(backend: InMemoryBackend) -> None:
    backend.set("demo:legacy", NativeCodec().encode({"user_id": 7}))
    store = SessionStore(backend_client=backend, key_prefix="demo:", codec="migrating")
    identifier, record = store.load("legacy")
    record["migrated"] = True
    store.save(identifier, record)
    print(f"  rewritten payload: {backend.get('demo:legacy')!r}")


def main() -> None:
    backend = InMemoryBackend()
    store = SessionStore(
        backend_client=backend,
        key_prefix="demo:",
        codec="json",
        on_backend_down=lambda err, ctx, sid: print(f"  [hook] backend down for {sid}: {err}"),
    )

    print("Concurrent saves:")
    demo_concurrent_saves(store)

    print("\nBackend outage:")
    demo_outage(backend, store)

    print("\nNative -> JSON migration:")
    demo_migration(backend)


if __name__ == "__main__":
    main()
