"""Save-time conflict resolution.

Two requests that load the same record and save independently must not
let the second save drop keys the first one added.  At save time the
store compares the mutated record against the snapshot it was loaded
with and, if another writer changed the stored record in between, merges
the local changes on top of the stored value.

This is per-key last-writer-wins, not a transaction: a write landing
between the fresh read and our own write is still lost.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

#: Sentinel returned by ``resolve_write`` when nothing needs persisting.
NO_WRITE: Any = object()


def deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` with every key of ``overlay`` laid on top.

    Values that are mappings on both sides are merged recursively;
    otherwise the ``overlay`` value wins.  Neither argument is mutated.

    Example
    -------
    >>> deep_merge({"a": 1, "n": {"x": 1}}, {"a": 5, "n": {"y": 2}})
    {'a': 5, 'n': {'x': 1, 'y': 2}}
    """
    merged: dict[str, Any] = dict(base)
    for key, value in overlay.items():
        existing = merged.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(existing, value)
        else:
            merged[key] = value
    return merged


def same_value(left: Any, right: Any) -> bool:
    """Return True if ``left`` and ``right`` are equal with identical types.

    Plain ``==`` treats ``1``, ``1.0`` and ``True`` as equal; a record whose
    value changed type must still be written, so types are compared at
    every level of nesting.
    """
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return len(left) == len(right) and all(
            key in right and same_value(value, right[key]) for key, value in left.items()
        )
    if type(left) is not type(right):
        return False
    if isinstance(left, (list, tuple)):
        return len(left) == len(right) and all(map(same_value, left, right))
    return left == right


def resolve_write(
    current: Mapping[str, Any],
    snapshot: Mapping[str, Any] | None,
    read_fresh: Callable[[], Mapping[str, Any] | None],
) -> Any:
    """Compute the value to persist for a save.

    Parameters
    ----------
    current:
        The record after this request's mutations.
    snapshot:
        The record as loaded, or None if it was not obtained from a load.
    read_fresh:
        Returns what the backend holds right now (None if nothing).  Only
        called when the record actually changed.

    Returns
    -------
    ``NO_WRITE`` when ``current`` equals ``snapshot``; otherwise the
    mapping to write.
    """
    if snapshot is not None and same_value(current, snapshot):
        return NO_WRITE

    fresh = read_fresh()
    if fresh is not None and (snapshot is None or not same_value(fresh, snapshot)):
        return deep_merge(fresh, current)
    return dict(current)
