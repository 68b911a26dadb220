"""Unit tests for resilient_session_store.cli.main.

The store factory is patched to use an in-memory backend so no Redis
server is required.
"""
from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from resilient_session_store.cli import main as cli_main
from resilient_session_store.codec import JsonCodec
from resilient_session_store.session.policy import Operation
from resilient_session_store.session.store import SessionStore
from resilient_session_store.storage.memory import InMemoryBackend
from resilient_session_store.storage.redis import RedisBackend


@pytest.fixture()
def memory() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def invoke(memory: InMemoryBackend, runner: CliRunner):
    def _make_store(url, key_prefix, codec, failures):
        return SessionStore(
            backend_client=memory,
            key_prefix=key_prefix,
            codec=codec,
            on_backend_down=failures.on_backend_down,
            on_decode_error=failures.on_decode_error,
        )

    def _invoke(*args: str):
        with patch.object(cli_main, "_make_store", _make_store):
            return runner.invoke(cli_main.cli, list(args), obj={})

    return _invoke


class TestCliVersion:
    def test_version_command(self, invoke) -> None:
        result = invoke("version")
        assert result.exit_code == 0
        assert "resilient-session-store" in result.output


class TestCliShow:
    def test_show_table(self, invoke, memory: InMemoryBackend) -> None:
        memory.set("p:abc", JsonCodec().encode({"user_id": 5}))
        result = invoke("--key-prefix", "p:", "--codec", "json", "show", "abc")
        assert result.exit_code == 0
        assert "user_id" in result.output

    def test_show_json_output(self, invoke, memory: InMemoryBackend) -> None:
        memory.set("abc", JsonCodec().encode({"user_id": 5}))
        result = invoke("--codec", "json", "show", "abc", "--json-output")
        assert result.exit_code == 0
        assert json.loads(result.output) == {"user_id": 5}

    def test_show_missing(self, invoke) -> None:
        result = invoke("show", "nope")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_show_undecodable(self, invoke, memory: InMemoryBackend) -> None:
        memory.set("abc", b"{broken")
        result = invoke("--codec", "json", "show", "abc")
        assert result.exit_code == 1
        assert "undecodable" in result.output
        assert memory.exists("abc") is False

    def test_show_backend_down(self, invoke, memory: InMemoryBackend) -> None:
        memory.available = False
        result = invoke("show", "abc")
        assert result.exit_code == 2
        assert "unreachable" in result.output


class TestCliExists:
    def test_exists(self, invoke, memory: InMemoryBackend) -> None:
        memory.set("abc", b"x")
        result = invoke("exists", "abc")
        assert result.exit_code == 0

    def test_not_exists(self, invoke) -> None:
        result = invoke("exists", "abc")
        assert result.exit_code == 1

    def test_backend_down(self, invoke, memory: InMemoryBackend) -> None:
        memory.available = False
        result = invoke("exists", "abc")
        assert result.exit_code == 2


class TestCliDestroy:
    def test_destroy(self, invoke, memory: InMemoryBackend) -> None:
        memory.set("abc", b"x")
        result = invoke("destroy", "abc")
        assert result.exit_code == 0
        assert memory.exists("abc") is False


class TestCliStoreFactory:
    def test_builds_session_store_for_url(self) -> None:
        failures = cli_main._FailureLog()
        store = cli_main._make_store("redis://cache:6380/2", "app:", "json", failures)
        assert isinstance(store, SessionStore)
        assert isinstance(store.backend, RedisBackend)
        assert store.config.redis_url == "redis://cache:6380/2"
        assert store.config.key_prefix == "app:"
        assert store.codec.name == "json"

    def test_hooks_feed_failure_log(self) -> None:
        failures = cli_main._FailureLog()
        store = cli_main._make_store("redis://cache:6380/2", "", "json", failures)
        error = ConnectionRefusedError(111, "Connection refused")
        store.policy.backend_down(Operation.LOAD, error, {}, "abc")
        assert failures.backend_errors == [error]
