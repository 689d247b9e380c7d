"""Connection state for the submission store."""

import enum
import logging
import threading

from django.db import connections

logger = logging.getLogger(__name__)


class ConnectionState(enum.StrEnum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class StoreConnectionManager:
    """
    Owns the "is the store reachable" state.

    ``ensure_connected`` is the only routine that establishes the connection.
    It is invoked lazily on incoming requests, is a no-op once connected and
    is retried on later requests while the store stays unreachable.
    """

    def __init__(self, alias: str = "default") -> None:
        self.alias = alias
        self._state = ConnectionState.DISCONNECTED
        self._lock = threading.Lock()

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    def ensure_connected(self) -> bool:
        """Connect to the store if not already connected. Never raises."""
        if self.is_connected:
            return True

        with self._lock:
            if self.is_connected:
                return True
            try:
                connections[self.alias].ensure_connection()
            except Exception:
                logger.exception("Submission store connection failed (%s)", self.alias)
                return False
            self._state = ConnectionState.CONNECTED
            logger.info("Connected to submission store (%s)", self.alias)
            return True

    def mark_disconnected(self) -> None:
        """Record that a store operation failed on connectivity."""
        if self.is_connected:
            logger.warning("Submission store (%s) marked as disconnected", self.alias)
        self._state = ConnectionState.DISCONNECTED

    def reset(self) -> None:
        self._state = ConnectionState.DISCONNECTED


connection_manager = StoreConnectionManager()
