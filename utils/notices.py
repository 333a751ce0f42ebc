"""Collects user-visible notices (toasts) raised by the chat session."""
import logging
import threading
from typing import List

from models.domain import Notice

logger = logging.getLogger("chatbot.notices")


class NoticeBoard:
    """Queue of notices waiting to be shown to the user."""

    def __init__(self):
        self._notices: List[Notice] = []
        self._lock = threading.Lock()

    def notify(self, title: str, description: str = "", variant: str = "default") -> Notice:
        notice = Notice(title=title, description=description, variant=variant)
        level = logging.WARNING if variant == "destructive" else logging.INFO
        logger.log(level, "%s: %s", title, description)
        with self._lock:
            self._notices.append(notice)
        return notice

    def drain(self) -> List[Notice]:
        """Return pending notices and forget them."""
        with self._lock:
            notices, self._notices = self._notices, []
        return notices

    def __len__(self) -> int:
        return len(self._notices)
