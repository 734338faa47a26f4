"""Session bookkeeping for the stateful transport (single process, in memory)."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Protocol, Tuple

from appleui_mcp.config import DEFAULT_SESSION_TTL
from appleui_mcp.mcp import ServerConnection
from appleui_mcp.metrics import default_metrics

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(slots=True)
class Session:
    id: str
    connection: ServerConnection
    created_at: float = field(default_factory=time.monotonic)
    last_seen: float = field(default_factory=time.monotonic)

    def close(self) -> None:
        self.connection.close()
        self.connection.server.close()


class SessionStore(Protocol):
    def get(self, session_id: str) -> Optional[Session]:
        ...

    def put(self, session: Session) -> None:
        ...

    def delete(self, session_id: str) -> Optional[Session]:
        ...

    def items(self) -> List[Tuple[str, Session]]:
        ...


class InMemorySessionStore:
    """
    Dict-backed session store with idle expiry.

    Sessions idle for longer than ``ttl`` seconds are evicted and closed the
    next time the store is touched. All methods are synchronous so callers
    on the event loop never interleave a lookup and a write.
    """

    def __init__(self, ttl: float = DEFAULT_SESSION_TTL, clock: Clock = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._sessions: Dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._sessions))

    def get(self, session_id: str) -> Optional[Session]:
        self.evict_expired()
        session = self._sessions.get(session_id)
        if session is not None:
            session.last_seen = self._clock()
        return session

    def put(self, session: Session) -> None:
        self.evict_expired()
        now = self._clock()
        session.created_at = now
        session.last_seen = now
        self._sessions[session.id] = session
        default_metrics.incr_session_opened()

    def delete(self, session_id: str) -> Optional[Session]:
        self.evict_expired()
        return self._remove(session_id)

    def _remove(self, session_id: str) -> Optional[Session]:
        session = self._sessions.pop(session_id, None)
        if session is not None:
            session.close()
            default_metrics.incr_session_closed()
        return session

    def items(self) -> List[Tuple[str, Session]]:
        self.evict_expired()
        return list(self._sessions.items())

    def evict_expired(self) -> int:
        if self.ttl <= 0:
            return 0
        cutoff = self._clock() - self.ttl
        expired = [session_id for session_id, session in self._sessions.items() if session.last_seen < cutoff]
        for session_id in expired:
            logger.info("mcp session expired session_id=%s", session_id, extra={"session_id": session_id})
            self._remove(session_id)
        return len(expired)

    def clear(self) -> None:
        for session_id in list(self._sessions):
            self._remove(session_id)
