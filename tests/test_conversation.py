"""Tests for the per-channel conversation store."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from conversation import ConversationStore, Turn, USER, BOT


class TestConversationStore:
    def test_get_unknown_channel_is_empty(self):
        store = ConversationStore()
        assert store.get(1) == []
        # Lazily created on first access
        assert store.channel_count() == 1

    def test_append_keeps_order(self):
        store = ConversationStore()
        store.append(1, USER, "hi")
        store.append(1, BOT, "hello!")
        assert store.get(1) == [Turn(USER, "hi"), Turn(BOT, "hello!")]

    def test_evicts_oldest_past_capacity(self):
        store = ConversationStore()
        for i in range(25):
            store.append(7, USER, f"msg {i}")

        turns = store.get(7)
        assert len(turns) == 10
        assert [t.text for t in turns] == [f"msg {i}" for i in range(15, 25)]

    def test_eleventh_append_drops_exactly_one(self):
        store = ConversationStore(capacity=10)
        for i in range(11):
            store.append(1, USER, str(i))
        assert [t.text for t in store.get(1)] == [str(i) for i in range(1, 11)]

    def test_channels_are_independent(self):
        store = ConversationStore()
        store.append(1, USER, "one")
        store.append(2, USER, "two")
        assert [t.text for t in store.get(1)] == ["one"]
        assert [t.text for t in store.get(2)] == ["two"]

    def test_get_returns_a_copy(self):
        store = ConversationStore()
        store.append(1, USER, "hi")
        turns = store.get(1)
        turns.append(Turn(BOT, "injected"))
        assert len(store.get(1)) == 1

    def test_turns_are_immutable(self):
        turn = Turn(USER, "hi")
        with pytest.raises(AttributeError):
            turn.text = "changed"

    def test_clear(self):
        store = ConversationStore()
        store.append(1, USER, "hi")
        store.clear(1)
        assert store.get(1) == []
        store.clear(99)  # unknown channel is a no-op
