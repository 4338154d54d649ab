"""Tests for ValkeyClient - Redis-compatible session store wrapper."""

import pytest
import time
from unittest.mock import Mock

import redis

from clients.valkey_client import ValkeyClient


class TestValkeyClientInit:
    """Connection initialization."""

    def test_pings_on_connect(self, monkeypatch, redis_backend):
        redis_backend.ping = Mock(return_value=True)
        monkeypatch.setattr("clients.valkey_client.redis.from_url", lambda url, **kwargs: redis_backend)

        ValkeyClient("redis://cache:6379/0")

        redis_backend.ping.assert_called_once()

    def test_decodes_responses(self, monkeypatch, redis_backend):
        from_url = Mock(return_value=redis_backend)
        monkeypatch.setattr("clients.valkey_client.redis.from_url", from_url)

        ValkeyClient("redis://cache:6379/0")

        from_url.assert_called_once_with("redis://cache:6379/0", decode_responses=True)

    def test_unreachable_server_raises(self, monkeypatch):
        """Fail-fast on construction, no lazy connect."""
        backend = Mock()
        backend.ping.side_effect = redis.ConnectionError("refused")
        monkeypatch.setattr("clients.valkey_client.redis.from_url", lambda url, **kwargs: backend)

        with pytest.raises(redis.ConnectionError):
            ValkeyClient("redis://nowhere")


class TestBasicOperations:
    """Get/set/delete operations."""

    def test_set_and_get(self, valkey):
        """Set then get returns same value."""
        valkey.set("test:basic", "hello")
        assert valkey.get("test:basic") == "hello"

    def test_get_missing_returns_none(self, valkey):
        """Get on non-existent key returns None (not error)."""
        assert valkey.get("test:nonexistent") is None

    def test_delete_returns_true_when_existed(self, valkey):
        valkey.set("test:delete", "value")
        assert valkey.delete("test:delete") is True

    def test_delete_returns_false_when_missing(self, valkey):
        assert valkey.delete("test:nonexistent") is False


class TestExpiration:
    """TTL functionality."""

    def test_set_with_expiration(self, valkey):
        """Value expires after specified seconds."""
        valkey.set("test:expire", "value", expire_seconds=1)
        assert valkey.get("test:expire") == "value"
        time.sleep(1.1)
        assert valkey.get("test:expire") is None

    def test_expiry_passed_to_server(self, valkey, redis_backend):
        valkey.set("test:ttl", "value", expire_seconds=100)
        assert 95 <= redis_backend.ttl("test:ttl") <= 100

    def test_no_expiry_by_default(self, valkey, redis_backend):
        valkey.set("test:noexpiry", "value")
        assert redis_backend.ttl("test:noexpiry") == -1


class TestJsonHelpers:
    """JSON serialization helpers."""

    def test_json_roundtrip(self, valkey):
        """set_json/get_json preserves structure."""
        data = {"authenticated": True, "name": "Alice", "expires_at": "2026-01-01T00:00:00+00:00"}
        valkey.set_json("test:json", data, expire_seconds=60)
        assert valkey.get_json("test:json") == data

    def test_get_json_missing_returns_none(self, valkey):
        assert valkey.get_json("test:nonexistent") is None

    def test_get_json_invalid_raises(self, valkey):
        """get_json raises on non-JSON value."""
        valkey.set("test:notjson", "not valid json {")
        with pytest.raises(ValueError, match="test:notjson"):
            valkey.get_json("test:notjson")
