"""Chat session driver: message log, request gating and persistence."""
import logging
import threading
import time
from typing import List, Optional, Tuple

from models.domain import Attachment, Message, SessionState
from utils.chat_history import ChatHistoryStore
from utils.notices import NoticeBoard

logger = logging.getLogger("chatbot.session")


class ChatSession:
    """Single chat session driving one flow.

    States are ``idle`` and ``awaiting-response``; a submit is accepted only
    while idle, so at most one model request is in flight. Every change to
    the message log is written through to the history store.
    """

    def __init__(self, agent, history: ChatHistoryStore, notices: Optional[NoticeBoard] = None):
        self.agent = agent
        self.history = history
        if notices is None:
            notices = history.notices if history.notices is not None else NoticeBoard()
        self.notices = notices
        if history.notices is None:
            history.notices = self.notices

        self._lock = threading.Lock()
        self._state = SessionState.IDLE
        self._pending_attachment: Optional[Attachment] = None
        self._messages: List[Message] = self.history.load()
        self._last_id = max((self._numeric_id(m.id) for m in self._messages), default=0)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_awaiting_response(self) -> bool:
        return self._state is SessionState.AWAITING_RESPONSE

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def pending_attachment(self) -> Optional[Attachment]:
        return self._pending_attachment

    @staticmethod
    def _numeric_id(message_id: str) -> int:
        try:
            return int(message_id)
        except (TypeError, ValueError):
            return 0

    def _next_id(self) -> str:
        """Epoch milliseconds, bumped when needed to stay strictly increasing."""
        self._last_id = max(int(time.time() * 1000), self._last_id + 1)
        return str(self._last_id)

    def _persist(self) -> None:
        if not self.history.save(self._messages):
            logger.warning("Chat history not saved; keeping %d messages in memory", len(self._messages))

    def validate_attachment(self, data_uri: str) -> Optional[Attachment]:
        """Check an image for the active flow without touching session state.

        Rejections post a destructive notice and return None.
        """
        if not getattr(self.agent, "supports_attachments", False):
            self.notices.notify(
                "Attachments not supported",
                "This chat only accepts text messages.",
                variant="destructive",
            )
            return None
        try:
            return Attachment.from_data_uri(data_uri)
        except ValueError as e:
            self.notices.notify("Invalid file type", str(e), variant="destructive")
            return None

    def attach(self, data_uri: str) -> bool:
        """Select an image for the next submit. Returns False if it is rejected."""
        attachment = self.validate_attachment(data_uri)
        if attachment is None:
            return False
        with self._lock:
            self._pending_attachment = attachment
        return True

    def submit(self, query: str = "", attachment: Optional[Attachment] = None) -> Optional[Message]:
        """Send the query and an image to the active flow.

        An explicit ``attachment`` belongs to this call only; without one the
        pending attachment is consumed. Returns the assistant message, or None
        when the submit was ignored or the flow failed. Flow failures roll
        back the user message and post a notice instead of raising.
        """
        text = query or ""
        with self._lock:
            if self._state is SessionState.AWAITING_RESPONSE:
                logger.info("Submit ignored: a response is already pending")
                return None
            if attachment is None:
                attachment = self._pending_attachment
                if not text.strip() and attachment is None:
                    return None
                self._pending_attachment = None

            user_message = Message(
                id=self._next_id(),
                role="user",
                content=text,
                image=attachment.data_uri if attachment else None,
            )
            self._messages.append(user_message)
            self._state = SessionState.AWAITING_RESPONSE
            self._persist()

        try:
            result = self.agent.respond(text, attachment)
        except Exception:
            logger.exception("Error fetching response")
            with self._lock:
                self._messages = [m for m in self._messages if m.id != user_message.id]
                self._state = SessionState.IDLE
                self._persist()
            self.notices.notify(
                "Uh oh! Something went wrong.",
                "There was a problem communicating with the AI. Please try again.",
                variant="destructive",
            )
            return None

        with self._lock:
            assistant_message = Message(id=self._next_id(), role="assistant", content=result.text)
            self._messages.append(assistant_message)
            self._state = SessionState.IDLE
            self._persist()
        return assistant_message

    def _reset(self) -> bool:
        """Drop messages and the pending attachment; refused while a reply is pending."""
        with self._lock:
            if self._state is SessionState.AWAITING_RESPONSE:
                busy = True
            else:
                busy = False
                self._messages = []
                self._pending_attachment = None
                self.history.clear()
        if busy:
            self.notices.notify(
                "Please wait",
                "A response is still on its way; try again once it arrives.",
                variant="destructive",
            )
            return False
        return True

    def new_chat(self) -> bool:
        if not self._reset():
            return False
        self.notices.notify("New chat started", "Your conversation history has been cleared.")
        return True

    def clear_history(self) -> bool:
        if not self._reset():
            return False
        self.notices.notify("Chat history cleared", "Your conversation history has been permanently deleted.")
        return True
