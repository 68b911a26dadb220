"""Benchmark: load/save cycle latency — per-cycle p50/p99.

Measures one request's worth of store work (load, mutate, save) against
the in-memory backend for each built-in codec, isolating the overhead of
decoding, snapshotting and conflict resolution from network cost.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from resilient_session_store.session.store import SessionStore
from resilient_session_store.storage.memory import InMemoryBackend

_WARMUP: int = 200
_ITERATIONS: int = 5_000
_CODECS: tuple[str, ...] = ("native", "json", "migrating", "yaml")


def bench_cycle_latency(codec: str) -> dict[str, object]:
    """Benchmark a load/mutate/save cycle with ``codec``.

    Returns
    -------
    dict with keys: operation, codec, iterations, total_seconds,
    ops_per_second, avg_latency_ms, p50_latency_ms, p99_latency_ms.
    """
    store = SessionStore(backend_client=InMemoryBackend(), codec=codec)
    identifier, record = store.load(None)
    record.update({"user_id": 1, "cart": [f"sku-{i}" for i in range(20)], "prefs": {"lang": "en"}})
    store.save(identifier, record)

    for i in range(_WARMUP):
        _, record = store.load(identifier)
        record["counter"] = i
        store.save(identifier, record)

    latencies_ms: list[float] = []
    for i in range(_ITERATIONS):
        t0 = time.perf_counter()
        _, record = store.load(identifier)
        record["counter"] = i
        store.save(identifier, record)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": "load_save_cycle",
        "codec": codec,
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_latency_ms": round(sorted_lats[n // 2], 4),
        "p99_latency_ms": round(sorted_lats[min(int(n * 0.99), n - 1)], 4),
    }
    print(
        f"[bench_session_latency] {codec}: "
        f"p50={result['p50_latency_ms']:.4f}ms  "
        f"p99={result['p99_latency_ms']:.4f}ms"
    )
    return result


def run_benchmark() -> list[dict[str, object]]:
    """Entry point returning one result dict per codec."""
    return [bench_cycle_latency(codec) for codec in _CODECS]


if __name__ == "__main__":
    results = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(results, fh, indent=2)
    print(f"Results saved to {output_path}")
