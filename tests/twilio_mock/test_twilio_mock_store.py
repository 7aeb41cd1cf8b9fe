"""Tests for the Twilio mock key-value store."""

from __future__ import annotations

import threading

from mock_servers.twilio_mock.db import (
    MISSING,
    InMemoryStore,
    channel_key,
    get_store,
    messages_key,
    reset_store,
)


class TestInMemoryStore:
    def test_read_unknown_key_is_missing(self):
        store = InMemoryStore()
        assert store.read("nope") is MISSING

    def test_missing_is_not_an_empty_value(self):
        store = InMemoryStore()
        store.write("empty_list", [])
        store.write("empty_dict", {})
        store.write("none", None)

        assert store.read("empty_list") == []
        assert store.read("empty_dict") == {}
        assert store.read("none") is None
        assert store.read("never") is MISSING
        assert not MISSING

    def test_write_overwrites(self):
        store = InMemoryStore()
        store.write("schema", {"a": "1"})
        store.write("schema", {"b": "2"})
        assert store.read("schema") == {"b": "2"}

    def test_get_with_default(self):
        store = InMemoryStore()
        assert store.get("x", default=[]) == []
        store.write("x", 0)
        assert store.get("x", default=5) == 0

    def test_keys_sorted(self):
        store = InMemoryStore()
        store.write("b", 1)
        store.write("a", 2)
        assert store.keys() == ["a", "b"]
        assert store.exists("a")
        assert not store.exists("c")

    def test_update_uses_default_for_absent_key(self):
        store = InMemoryStore()
        result = store.update("list", lambda items: items + [1], default=[])
        assert result == [1]
        assert store.read("list") == [1]

    def test_update_is_atomic_across_threads(self):
        store = InMemoryStore()
        store.write("counter", 0)

        def bump():
            for _ in range(500):
                store.update("counter", lambda n: n + 1)

        threads = [threading.Thread(target=bump) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.read("counter") == 4000

    def test_locked_is_reentrant(self):
        store = InMemoryStore()
        with store.locked():
            store.write("k", "v")
            assert store.read("k") == "v"

    def test_snapshot_is_a_copy(self):
        store = InMemoryStore()
        store.write("chatbot", {"assistant_sid": "UA1"})
        snap = store.snapshot()
        snap["chatbot"]["assistant_sid"] = "changed"
        assert store.read("chatbot") == {"assistant_sid": "UA1"}

    def test_clear(self):
        store = InMemoryStore()
        store.write("k", "v")
        store.clear()
        assert store.keys() == []


class TestSingleton:
    def test_get_store_is_shared(self):
        assert get_store() is get_store()

    def test_reset_store_drops_data(self):
        get_store().write("k", "v")
        fresh = reset_store()
        assert fresh.read("k") is MISSING
        assert get_store() is fresh


def test_key_scheme():
    assert channel_key("general") == "channel_general"
    assert messages_key("general") == "channel_general_messages"
