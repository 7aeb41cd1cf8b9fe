"""In-memory key-value store for the Twilio mock server.

Everything the mock remembers between requests (channels, message lists,
the autopilot schema, the chatbot record) lives under flat string keys in
one process-wide store. Nothing is persisted across restarts.
"""

from __future__ import annotations

import copy
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional


class _Missing:
    """Marker returned by ``read`` for keys that were never written."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class InMemoryStore:
    """Flat mapping of string keys to JSON-compatible values."""

    def __init__(self) -> None:
        self._data: Dict[str, Any] = {}
        self._lock = threading.RLock()

    # --- Basic operations ---

    def write(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def read(self, key: str) -> Any:
        """Return the stored value, or ``MISSING`` if ``key`` was never written."""
        with self._lock:
            return self._data.get(key, MISSING)

    def get(self, key: str, default: Any = None) -> Any:
        value = self.read(key)
        return default if value is MISSING else value

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._data)

    # --- Atomic read-modify-write ---

    @contextmanager
    def locked(self) -> Iterator["InMemoryStore"]:
        """Hold the store lock for a multi-step read-modify-write."""
        with self._lock:
            yield self

    def update(
        self,
        key: str,
        fn: Callable[[Any], Any],
        default: Any = MISSING,
    ) -> Any:
        """Replace the value at ``key`` with ``fn(current)`` and return it.

        ``current`` is ``default`` when the key is absent.
        """
        with self._lock:
            current = self._data.get(key, default)
            new_value = fn(current)
            self._data[key] = new_value
            return new_value

    # --- Maintenance ---

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


# --- Singleton ---

_store: Optional[InMemoryStore] = None


def get_store() -> InMemoryStore:
    global _store
    if _store is None:
        _store = InMemoryStore()
    return _store


def reset_store() -> InMemoryStore:
    """Reset the store (useful for testing)."""
    global _store
    _store = None
    return get_store()


# --- Key scheme ---

SCHEMA_KEY = "schema"
CHATBOT_KEY = "chatbot"
ASSISTANT_ID_KEY = "assistant_id"
CUSTOMER_ID_KEY = "customer_id"


def channel_key(channel_name: str) -> str:
    return f"channel_{channel_name}"


def messages_key(channel_name: str) -> str:
    return f"channel_{channel_name}_messages"
