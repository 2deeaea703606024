from abc import ABC, abstractmethod
from typing import List, Optional

from shopigo.schemas.session import Session


class SessionStore(ABC):
    """
    Abstract base class for session persistence.

    Implementations own their concurrency safety. Absence of a session is
    reported as ``None``; a failing backend raises ``SessionStoreError``.
    """

    @abstractmethod
    async def store_session(self, session: Session) -> None:
        """Persist a session, replacing any session with the same id."""
        pass

    @abstractmethod
    async def load_session(self, session_id: str) -> Optional[Session]:
        """
        Retrieve a session by id.

        Returns:
            The stored Session, or None when no session exists for the id

        Raises:
            SessionStoreError if the backend could not be read
        """
        pass

    @abstractmethod
    async def delete_session(self, session_id: str) -> bool:
        """Remove a session. Returns whether a session was removed."""
        pass

    @abstractmethod
    async def find_sessions_by_shop(self, shop: str) -> List[Session]:
        """Return all sessions belonging to a shop."""
        pass
