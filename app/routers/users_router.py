"""Users API: register, login, directory, presence."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.schemas.user import (
    PresenceUpdate,
    PublicUser,
    UserLogin,
    UserRead,
    UserRegister,
)
from app.services.chat_manager import ChatManager

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=UserRead, status_code=201)
def register_user(
    data: UserRegister,
    db: Session = Depends(get_db),
) -> UserRead:
    """Create an account. 409 when the username or email is taken."""
    user = ChatManager(db).register(
        data.username, data.email, data.password, data.full_name
    )
    return UserRead.model_validate(user)


@router.post("/login", response_model=UserRead)
def login_user(
    data: UserLogin,
    db: Session = Depends(get_db),
) -> UserRead:
    """Check credentials and mark the user online."""
    user = ChatManager(db).authenticate(data.email, data.password)
    return UserRead.model_validate(user)


@router.get("", response_model=List[PublicUser])
def list_users(db: Session = Depends(get_db)) -> List[PublicUser]:
    return ChatManager(db).list_users()


@router.put("/{user_id}/presence", response_model=UserRead)
def update_presence(
    user_id: int,
    data: PresenceUpdate,
    db: Session = Depends(get_db),
) -> UserRead:
    user = ChatManager(db).set_presence(user_id, data.is_online)
    return UserRead.model_validate(user)


@router.post("/{user_id}/logout", response_model=UserRead)
def logout_user(user_id: int, db: Session = Depends(get_db)) -> UserRead:
    user = ChatManager(db).logout(user_id)
    return UserRead.model_validate(user)
