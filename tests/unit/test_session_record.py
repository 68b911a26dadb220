"""Unit tests for resilient_session_store.session.record."""
from __future__ import annotations

import pytest

from resilient_session_store.session.record import LoadedSession, SessionRecord


class TestSessionRecord:
    def test_is_a_dict(self) -> None:
        record = SessionRecord({"a": 1})
        assert isinstance(record, dict)
        assert record == {"a": 1}

    def test_empty_by_default(self) -> None:
        record = SessionRecord()
        assert record == {}
        assert dict(record.snapshot) == {}

    def test_snapshot_matches_initial_contents(self) -> None:
        record = SessionRecord({"a": 1})
        assert dict(record.snapshot) == {"a": 1}

    def test_snapshot_unaffected_by_mutation(self) -> None:
        record = SessionRecord({"a": {"x": 1}})
        record["a"]["x"] = 2
        record["b"] = 3
        assert dict(record.snapshot) == {"a": {"x": 1}}

    def test_snapshot_is_read_only(self) -> None:
        record = SessionRecord({"a": 1})
        with pytest.raises(TypeError):
            record.snapshot["a"] = 2  # type: ignore[index]

    def test_explicit_snapshot(self) -> None:
        record = SessionRecord({"a": 2}, snapshot={"a": 1})
        assert dict(record.snapshot) == {"a": 1}

    def test_changed(self) -> None:
        record = SessionRecord({"a": 1})
        assert record.changed is False
        record["a"] = 2
        assert record.changed is True

    def test_type_change_counts_as_changed(self) -> None:
        record = SessionRecord({"flag": 1, "ids": [1, 2]})
        record["flag"] = True
        assert record.changed is True
        record["flag"] = 1
        record["ids"] = [1, 2.0]
        assert record.changed is True

    def test_rebase(self) -> None:
        record = SessionRecord({"a": 1})
        record["a"] = 2
        record.rebase()
        assert record.changed is False
        assert dict(record.snapshot) == {"a": 2}

    def test_repr(self) -> None:
        assert repr(SessionRecord({"a": 1})) == "SessionRecord({'a': 1})"


class TestLoadedSession:
    def test_unpacks(self) -> None:
        record = SessionRecord()
        identifier, unpacked = LoadedSession("abc", record)
        assert identifier == "abc"
        assert unpacked is record

    def test_named_fields(self) -> None:
        loaded = LoadedSession("abc", SessionRecord({"a": 1}))
        assert loaded.identifier == "abc"
        assert loaded.record == {"a": 1}
