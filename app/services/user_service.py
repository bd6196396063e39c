"""Registration, authentication and the public user directory."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.passwords import hash_password, verify_password
from app.exceptions import DuplicateEmail, DuplicateUsername, InvalidCredentials
from app.infra.logging_config import get_logger
from app.models.user import User
from app.schemas.user import PublicUser, UserRegister
from app.services.presence_service import PresenceService

logger = get_logger("users")

# Verified against when the email is unknown so both failure paths do the same work.
_DUMMY_HASH: Optional[str] = None


def _dummy_hash() -> str:
    global _DUMMY_HASH
    if _DUMMY_HASH is None:
        _DUMMY_HASH = hash_password("not-a-real-password")
    return _DUMMY_HASH


class UserService:
    """Owns user rows. Users are never deleted."""

    def __init__(
        self,
        db: Session,
        presence_service: Optional[PresenceService] = None,
    ) -> None:
        self.db = db
        self._presence = presence_service or PresenceService(db)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def register(self, data: UserRegister) -> User:
        """
        Create a user. Username is checked before email, so a request clashing
        on both reports DuplicateUsername.
        """
        self._ensure_unique(data.username, data.email)
        user = User(
            username=data.username,
            email=data.email,
            password_hash=hash_password(data.password),
            full_name=data.full_name,
            is_online=False,
            last_seen=None,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # lost a registration race; report it the same way as the pre-check
            self.db.rollback()
            self._ensure_unique(data.username, data.email)
            raise
        self.db.refresh(user)
        logger.info("Registered user %s (%s)", user.id, user.username)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Check credentials and mark the user online. One error for both factors."""
        user = self.get_user_by_email(email)
        if user is None:
            verify_password(password, _dummy_hash())
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash):
            raise InvalidCredentials()
        return self._presence.set_presence(user.id, True)

    def list_public(self) -> List[PublicUser]:
        users = self.db.query(User).order_by(User.username).all()
        return [PublicUser.model_validate(u) for u in users]

    def _ensure_unique(self, username: str, email: str) -> None:
        if self.get_user_by_username(username) is not None:
            raise DuplicateUsername()
        if self.get_user_by_email(email) is not None:
            raise DuplicateEmail()
