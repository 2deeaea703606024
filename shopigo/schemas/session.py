from datetime import datetime, timezone
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict


def offline_session_id(shop: str) -> str:
    return f"offline_{shop}"


def online_session_id(shop: str, user_id: str) -> str:
    return f"{shop}_{user_id}"


class Session(BaseModel):
    """Authentication state for one shop, or one user of a shop."""

    id: str
    shop: str
    state: str = ""
    scope: Optional[str] = None
    access_token: Optional[str] = None
    expires: Optional[datetime] = None
    is_online: bool = False
    user_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires is None:
            return False
        now = now or datetime.now(timezone.utc)
        expires = self.expires
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        return expires <= now

    def is_active(self, scopes: Iterable[str]) -> bool:
        """
        A session is active when it holds a token, has not expired and
        was granted every requested scope.
        """
        if not self.access_token or self.is_expired():
            return False
        granted = set(s.strip() for s in (self.scope or "").split(",") if s.strip())
        return set(scopes) <= granted
