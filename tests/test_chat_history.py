import json

import pytest

from config.storage import InMemoryKeyValueStore, JsonFileKeyValueStore
from models.domain import Message
from utils.chat_history import ChatHistoryStore

from conftest import PNG_DATA_URI, BrokenStore


def _messages():
    return [
        Message(id="1", role="user", content="What's 2+2?"),
        Message(id="2", role="assistant", content="4"),
        Message(id="3", role="user", content="", image=PNG_DATA_URI),
    ]


def test_round_trip_preserves_order(history, kv_store):
    messages = _messages()
    assert history.save(messages) is True

    assert json.loads(kv_store.get("test_history"))[0]["content"] == "What's 2+2?"
    assert history.load() == messages


def test_empty_session_removes_key(history, kv_store):
    history.save(_messages())
    history.save([])

    assert kv_store.get("test_history") is None
    assert "test_history" not in kv_store


def test_missing_key_loads_empty(history, notices):
    assert history.load() == []
    assert notices.drain() == []


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        '{"id": "1"}',
        '[{"id": "1", "role": "robot", "content": "x"}]',
    ],
)
def test_malformed_history_is_reported_not_raised(raw, notices):
    store = InMemoryKeyValueStore({"test_history": raw})
    history = ChatHistoryStore(store, key="test_history", notices=notices)

    assert history.load() == []
    reported = notices.drain()
    assert len(reported) == 1
    assert reported[0].description == "Could not load chat history."
    assert reported[0].variant == "destructive"


def test_write_failure_is_logged(caplog):
    history = ChatHistoryStore(BrokenStore(), key="k")

    assert history.save(_messages()) is False
    assert history.clear() is False
    assert "Failed to save chat history" in caplog.text


def test_json_file_store(tmp_path):
    path = tmp_path / "nested" / "history.json"
    store = JsonFileKeyValueStore(str(path))

    assert store.get("a") is None
    store.set("a", "1")
    store.set("b", "2")
    assert json.loads(path.read_text(encoding="utf-8")) == {"a": "1", "b": "2"}

    store.remove("a")
    store.remove("missing")
    assert JsonFileKeyValueStore(str(path)).get("a") is None
    assert JsonFileKeyValueStore(str(path)).get("b") == "2"


def test_corrupt_file_yields_empty_history(tmp_path, notices):
    path = tmp_path / "history.json"
    path.write_text("{broken", encoding="utf-8")
    history = ChatHistoryStore(JsonFileKeyValueStore(str(path)), key="k", notices=notices)

    assert history.load() == []
    assert len(notices.drain()) == 1


def test_corrupt_file_is_overwritten_on_write(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{broken", encoding="utf-8")
    store = JsonFileKeyValueStore(str(path))

    store.set("a", "1")

    assert json.loads(path.read_text(encoding="utf-8")) == {"a": "1"}


def test_remove_on_corrupt_file_resets_it(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("[1, 2]", encoding="utf-8")
    store = JsonFileKeyValueStore(str(path))

    store.remove("a")

    assert json.loads(path.read_text(encoding="utf-8")) == {}
