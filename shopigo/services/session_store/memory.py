import logging
import threading
from typing import Dict, List, Optional

from shopigo.core.errors import SessionStoreError
from shopigo.schemas.session import Session

from .base import SessionStore

logger = logging.getLogger(__name__)


class InMemorySessionStore(SessionStore):
    """Process-local session store, safe for concurrent threads and tasks."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    async def store_session(self, session: Session) -> None:
        if not isinstance(session, Session):
            raise SessionStoreError(f"Cannot store {type(session).__name__}, expected Session")
        with self._lock:
            self._sessions[session.id] = session
        logger.debug(f"Stored session {session.id} for {session.shop}")

    async def load_session(self, session_id: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(session_id)

    async def delete_session(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.debug(f"Deleted session {session_id}")
        return removed is not None

    async def find_sessions_by_shop(self, shop: str) -> List[Session]:
        with self._lock:
            return [s for s in self._sessions.values() if s.shop == shop]

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
