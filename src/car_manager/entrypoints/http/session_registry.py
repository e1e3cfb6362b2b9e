from __future__ import annotations

import logging
import time
from collections.abc import Callable
from uuid import uuid4

from car_manager.domain.errors import NotFoundError
from car_manager.use_cases.car_edit_session import CarEditSession

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 1800.0
DEFAULT_MAX_SESSIONS = 1000


class EditSessionRegistry:
    """
    Open edit sessions keyed by an opaque id.

    Lives for the application lifetime. All access happens on the event loop,
    so no locking is needed.

    Sessions that are not touched for ``ttl_seconds`` are evicted, and once
    ``max_sessions`` are open the least recently touched one makes room for a
    new one. An evicted session behaves like a closed one.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            ttl_seconds: Idle time after which a session is dropped
            max_sessions: Upper bound on open sessions
            clock: Monotonic time source in seconds
        """
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")

        self._ttl_seconds = ttl_seconds
        self._max_sessions = max_sessions
        self._clock = clock
        # Insertion order is touch order: oldest first.
        self._sessions: dict[str, tuple[CarEditSession, float]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def open(self, session: CarEditSession) -> str:
        now = self._clock()
        self._evict_expired(now)

        while len(self._sessions) >= self._max_sessions:
            oldest_id = next(iter(self._sessions))
            del self._sessions[oldest_id]
            logger.info(
                "Edit session evicted",
                extra={"session_id": oldest_id, "reason": "capacity"},
            )

        session_id = uuid4().hex
        self._sessions[session_id] = (session, now)
        return session_id

    def get(self, session_id: str) -> CarEditSession:
        """
        Return an open session and mark it as recently used.

        Raises:
            NotFoundError: If no open session has this id
        """
        now = self._clock()
        self._evict_expired(now)

        entry = self._sessions.pop(session_id, None)
        if entry is None:
            raise NotFoundError(resource="EditSession", identifier=session_id)

        session, _ = entry
        self._sessions[session_id] = (session, now)
        return session

    def close(self, session_id: str) -> None:
        """
        Discard a session and its unsaved changes.

        Raises:
            NotFoundError: If no open session has this id
        """
        if self._sessions.pop(session_id, None) is None:
            raise NotFoundError(resource="EditSession", identifier=session_id)

    def _evict_expired(self, now: float) -> None:
        deadline = now - self._ttl_seconds
        expired = [
            session_id
            for session_id, (_, touched_at) in self._sessions.items()
            if touched_at <= deadline
        ]
        for session_id in expired:
            del self._sessions[session_id]
            logger.info(
                "Edit session evicted",
                extra={"session_id": session_id, "reason": "idle"},
            )
