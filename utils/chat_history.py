"""Chat history persistence on top of the key-value store."""
import json
import logging
from typing import List, Optional, Sequence

from pydantic import ValidationError

from config.env import CHAT_HISTORY_KEY
from config.storage import KeyValueStore
from models.domain import Message
from utils.notices import NoticeBoard

logger = logging.getLogger("chatbot.history")


class ChatHistoryStore:
    """Loads and saves the whole session under one fixed key.

    An empty session is stored as the absence of the key, never as ``[]``.
    Storage failures are logged and never raised to the caller.
    """

    def __init__(self, store: KeyValueStore, key: str = CHAT_HISTORY_KEY, notices: Optional[NoticeBoard] = None):
        self.store = store
        self.key = key
        self.notices = notices

    def load(self) -> List[Message]:
        """Restore the saved session, or an empty one if nothing valid is stored."""
        try:
            raw = self.store.get(self.key)
            if raw is None:
                return []
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"Expected a JSON array under {self.key!r}")
            messages = [Message(**item) for item in data]
        except (OSError, ValueError, TypeError, ValidationError):
            logger.exception("Failed to load chat history")
            if self.notices is not None:
                self.notices.notify("Error", "Could not load chat history.", variant="destructive")
            return []
        logger.info("Loaded %d messages from chat history", len(messages))
        return messages

    def save(self, messages: Sequence[Message]) -> bool:
        """Serialize the whole session; an empty session removes the key."""
        if not messages:
            return self.clear()
        try:
            payload = json.dumps([m.dict() for m in messages], ensure_ascii=False)
            self.store.set(self.key, payload)
        except (OSError, ValueError, TypeError):
            logger.exception("Failed to save chat history")
            return False
        return True

    def clear(self) -> bool:
        try:
            self.store.remove(self.key)
        except (OSError, ValueError):
            logger.exception("Failed to clear chat history")
            return False
        return True
