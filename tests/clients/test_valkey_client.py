"""Tests for ValkeyClient - JSON documents with a lifetime."""

import pytest


class TestJsonDocuments:

    def test_round_trips_list(self, valkey):
        rows = [{"id": "a", "amount": 5000}]
        valkey.set_json("test:json", rows)
        assert valkey.get_json("test:json") == rows

    def test_missing_returns_none(self, valkey):
        assert valkey.get_json("test:json:missing") is None

    def test_invalid_json_raises(self, valkey, redis_connection):
        redis_connection.set("test:json:bad", "{not json")
        with pytest.raises(ValueError, match="Invalid JSON"):
            valkey.get_json("test:json:bad")

    def test_expiring_document(self, valkey, redis_connection):
        valkey.set_json("test:ttl", {"a": 1}, expire_seconds=120)
        assert 0 < redis_connection.ttl("test:ttl") <= 120

    def test_overwrite_clears_lifetime(self, valkey, redis_connection):
        valkey.set_json("test:ttl", {"a": 1}, expire_seconds=120)
        valkey.set_json("test:ttl", {"a": 2})

        assert redis_connection.ttl("test:ttl") == -1
        assert valkey.get_json("test:ttl") == {"a": 2}


class TestLifetime:

    def test_expire_restarts_lifetime(self, valkey, redis_connection):
        valkey.set_json("test:slide", {}, expire_seconds=5)

        assert valkey.expire("test:slide", 60) is True
        assert 5 < redis_connection.ttl("test:slide") <= 60

    def test_expire_missing_key(self, valkey):
        assert valkey.expire("test:missing", 60) is False


class TestDelete:

    def test_returns_true_when_existed(self, valkey):
        valkey.set_json("test:delete", {})
        assert valkey.delete("test:delete") is True
        assert valkey.get_json("test:delete") is None

    def test_returns_false_when_missing(self, valkey):
        assert valkey.delete("test:nonexistent") is False
