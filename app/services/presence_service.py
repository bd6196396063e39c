"""Online/offline tracking for users."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app.core.presence import OfflineSince, Online, Presence
from app.exceptions import NotFound
from app.infra.logging_config import get_logger
from app.models.user import User
from app.utils.timeutils import utc_now

logger = get_logger("presence")


class PresenceService:
    """
    Flips a user between online and offline.

    Going online clears last_seen; going offline stamps it with the current
    time. There is no heartbeat: presence only changes on explicit signals
    (session start, connection teardown, logout).
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def set_presence(self, user_id: int, is_online: bool) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound(f"User with id {user_id} not found")
        now = utc_now()
        user.presence = Online() if is_online else OfflineSince(now)
        user.updated_at = now
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        logger.info("User %s is now %s", user_id, "online" if is_online else "offline")
        return user

    def get_presence(self, user_id: int) -> Optional[Presence]:
        user = self.db.get(User, user_id)
        return user.presence if user is not None else None
