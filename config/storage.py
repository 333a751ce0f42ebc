"""Client-scoped key-value storage for the persisted chat session."""
import json
import logging
import os
import tempfile
import threading
from typing import Dict, Optional, Tuple

from .env import CHAT_HISTORY_PATH

logger = logging.getLogger("chatbot.storage")


class KeyValueStore:
    """String key-value capability (the local equivalent of browser storage)."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, mostly useful in tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore(KeyValueStore):
    """Key-value store persisted as a single JSON object on disk.

    Every write rewrites the whole file through a temporary file and
    ``os.replace`` so readers never observe a half-written document.
    """

    def __init__(self, path: str):
        self.path = os.path.abspath(path)
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            raw = f.read()
        if not raw.strip():
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self.path} does not contain a JSON object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(self.path)
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".kv-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read_all().get(key)
        return value if value is None else str(value)

    def _read_for_write(self) -> Tuple[Dict[str, str], bool]:
        """Current contents, or an empty object when the file cannot be parsed.

        The second value is True when the unreadable file must be overwritten.
        """
        try:
            return self._read_all(), False
        except ValueError:
            logger.warning("Storage file %s is unreadable; overwriting it", self.path)
            return {}, True

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data, _ = self._read_for_write()
            data[key] = value
            self._write_all(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data, corrupt = self._read_for_write()
            if key not in data and not corrupt:
                return
            data.pop(key, None)
            self._write_all(data)


def get_store(path: str = None) -> KeyValueStore:
    """Return the file-backed store configured by CHAT_HISTORY_PATH."""
    store_path = path or CHAT_HISTORY_PATH
    logger.info("Using chat history file %s", store_path)
    return JsonFileKeyValueStore(store_path)
