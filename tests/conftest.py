import pytest
from langchain_core.messages import AIMessage

from agents.chat_session import ChatSession
from agents.tools import SHOULD_INCLUDE_DATA
from config.storage import InMemoryKeyValueStore
from utils.chat_history import ChatHistoryStore
from utils.notices import NoticeBoard

PNG_DATA_URI = "data:image/png;base64,iVBORw0KGgo="


class FakeChatModel:
    """Scripted chat model: replays queued replies and records every call."""

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls = []

    def queue(self, *replies):
        self.replies.extend(replies)
        return self

    def bind_tools(self, tools, **kwargs):
        return _BoundFakeChatModel(self, list(tools))

    def invoke(self, messages, config=None, **kwargs):
        return self._respond(messages, [])

    def _respond(self, messages, tools):
        self.calls.append({"messages": list(messages), "tools": tools})
        if not self.replies:
            raise AssertionError("FakeChatModel received an unexpected call")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, str):
            return AIMessage(content=reply)
        return reply


class _BoundFakeChatModel:
    def __init__(self, model, tools):
        self.model = model
        self.tools = tools

    def invoke(self, messages, config=None, **kwargs):
        return self.model._respond(messages, self.tools)


def tool_call_reply(name=SHOULD_INCLUDE_DATA, query="", content="", call_id="call_1"):
    return AIMessage(
        content=content,
        tool_calls=[{"name": name, "args": {"query": query}, "id": call_id}],
    )


def prompt_text(call) -> str:
    """Text part of the single HumanMessage sent in a recorded call."""
    content = call["messages"][0].content
    if isinstance(content, str):
        return content
    return "".join(p["text"] for p in content if p.get("type") == "text")


class BrokenStore(InMemoryKeyValueStore):
    """Store whose writes always fail."""

    def set(self, key, value):
        raise OSError("disk full")

    def remove(self, key):
        raise OSError("read-only file system")


@pytest.fixture
def fake_llm():
    return FakeChatModel()


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def notices():
    return NoticeBoard()


@pytest.fixture
def history(kv_store, notices):
    return ChatHistoryStore(kv_store, key="test_history", notices=notices)


class StubAgent:
    """Flow stand-in returning queued texts or raising queued exceptions."""

    supports_attachments = True

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def respond(self, query, attachment=None):
        from models.domain import GenerationResult

        self.calls.append((query, attachment))
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return GenerationResult(text=result)


@pytest.fixture
def make_session(history, notices):
    def _make(agent):
        return ChatSession(agent, history, notices)
    return _make
