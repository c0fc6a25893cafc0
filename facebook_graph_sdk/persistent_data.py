"""
Persistent data — Where RedirectLoginHelper keeps the CSRF state between the
login redirect and the callback.

Web applications should pass a handler backed by their own session store;
the in-memory handler only works when both steps run in the same process.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class PersistentDataInterface(ABC):
    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the stored value, or None."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        ...


class MemoryPersistentDataHandler(PersistentDataInterface):
    def __init__(self):
        self._session_data: Dict[str, Any] = {}

    def get(self, key: str) -> Any:
        return self._session_data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._session_data[key] = value


def create_persistent_data_handler(handler: Any = None) -> PersistentDataInterface:
    """Resolve the "persistent_data_handler" config value.

    Raises:
        ValueError: If the handler is not a supported value.
    """
    if handler is None or handler == "memory":
        return MemoryPersistentDataHandler()

    if isinstance(handler, PersistentDataInterface):
        return handler

    raise ValueError(
        'The persistent data handler must be set to "memory" or be an instance of '
        "PersistentDataInterface"
    )
