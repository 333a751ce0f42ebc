import logging
import threading
from typing import Optional

from flask import Flask, request, jsonify
from flask_cors import CORS
from pydantic import ValidationError

from agents.chat_session import ChatSession
from config.env import AUGMENTATION_MODE, CHAT_FLOW, CHAT_HISTORY_KEY, FRONTEND_ORIGIN
from config.storage import get_store
from utils.chat_history import ChatHistoryStore
from utils.notices import NoticeBoard

from models.request import ChatRequest
from models.response import (
    ChatResponse,
    ErrorResponse,
    MessagesResponse,
    SuccessResponse,
)

logger = logging.getLogger("chatbot.api")

app = Flask(__name__)
CORS(app, resources={r"/api/*": {"origins": FRONTEND_ORIGIN}, r"/health": {"origins": FRONTEND_ORIGIN}})

_chat_session: Optional[ChatSession] = None
_chat_session_lock = threading.Lock()


def build_agent(flow: str = CHAT_FLOW, mode: str = AUGMENTATION_MODE, llm=None):
    """Create the flow wired into the session from configuration."""
    if flow == "multimodal":
        from agents.multimodal_chat import MultimodalChatAgent
        return MultimodalChatAgent(llm)
    if flow != "augment":
        raise ValueError(f"Unknown CHAT_FLOW: {flow!r}")

    from agents.augment_with_data import AugmentWithDataAgent, InlineAugmentWithDataAgent
    if mode == "inline":
        return InlineAugmentWithDataAgent(llm)
    if mode != "tool":
        raise ValueError(f"Unknown AUGMENTATION_MODE: {mode!r}")
    return AugmentWithDataAgent(llm)


def get_chat_session() -> ChatSession:
    global _chat_session
    with _chat_session_lock:
        if _chat_session is None:
            notices = NoticeBoard()
            history = ChatHistoryStore(get_store(), key=CHAT_HISTORY_KEY, notices=notices)
            _chat_session = ChatSession(build_agent(), history, notices)
            logger.info("Chat session ready (flow=%s, mode=%s)", CHAT_FLOW, AUGMENTATION_MODE)
    return _chat_session


def set_chat_session(session: Optional[ChatSession]) -> None:
    global _chat_session
    with _chat_session_lock:
        _chat_session = session


def _format_validation_error(err: ValidationError) -> str:
    try:
        details = err.errors() or []
    except Exception:
        details = []
    if not details:
        return "Invalid request data"
    first = details[0]
    loc = ".".join(str(item) for item in first.get("loc", []) if item != "__root__")
    msg = first.get("msg", "Invalid request data")
    return f"{loc}: {msg}" if loc else msg


def _error(session: ChatSession, error: str, code: str, status: int):
    error_resp = ErrorResponse(error=error, code=code, notices=session.notices.drain())
    return jsonify(error_resp.dict()), status


@app.get("/health")
def health():
    return {"ok": True}


@app.route("/api/messages", methods=["GET"])
def get_messages_endpoint():
    """Return the message log in display order."""
    session = get_chat_session()
    response = MessagesResponse(
        state=session.state.value,
        messages=list(session.messages),
        notices=session.notices.drain(),
    )
    return jsonify(response.dict())


@app.route("/api/chat", methods=["POST"])
def handle_chat():
    """Send a query, with an optional image, to the active flow."""
    session = get_chat_session()
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    try:
        req = ChatRequest(
            query=data.get("query", ""),
            photo_data_uri=data.get("photo_data_uri"),
        )
    except ValidationError as e:
        return _error(session, _format_validation_error(e), "VALIDATION_ERROR", 400)

    if session.is_awaiting_response:
        return _error(session, "A response is already pending", "REQUEST_IN_PROGRESS", 409)

    attachment = None
    if req.photo_data_uri:
        attachment = session.validate_attachment(req.photo_data_uri)
        if attachment is None:
            return _error(session, "Unsupported attachment", "UNSUPPORTED_ATTACHMENT", 415)

    reply = session.submit(req.query, attachment)
    if reply is None:
        if session.is_awaiting_response:
            return _error(session, "A response is already pending", "REQUEST_IN_PROGRESS", 409)
        return _error(
            session,
            "There was a problem communicating with the AI. Please try again.",
            "PROCESSING_ERROR",
            502,
        )

    response = ChatResponse(reply=reply.content, message=reply, notices=session.notices.drain())
    return jsonify(response.dict())


@app.route("/api/sessions/new", methods=["POST"])
def new_chat_endpoint():
    """Start a new chat, discarding the current history."""
    session = get_chat_session()
    if not session.new_chat():
        return _error(session, "A response is already pending", "REQUEST_IN_PROGRESS", 409)
    response = SuccessResponse(message="New chat started", notices=session.notices.drain())
    return jsonify(response.dict())


@app.route("/api/sessions/clear", methods=["POST"])
def clear_history_endpoint():
    """Permanently delete the chat history."""
    session = get_chat_session()
    if not session.clear_history():
        return _error(session, "A response is already pending", "REQUEST_IN_PROGRESS", 409)
    response = SuccessResponse(message="Chat history cleared", notices=session.notices.drain())
    return jsonify(response.dict())
