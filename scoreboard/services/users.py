# scoreboard/services/users.py
import uuid
from typing import List

from fastapi import HTTPException
from sqlalchemy.orm import Session

from scoreboard.logging_config import app_logger
from scoreboard.models.account import Admin, UserAccount
from scoreboard.schema.account import AdminProfile, Theme, UserCreate, UserUpdate
from scoreboard.services.auth import sign_up


def _get_profile(user_id: uuid.UUID, db: Session) -> Admin:
    profile = db.get(Admin, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="User not found")
    return profile


def list_users(db: Session) -> List[AdminProfile]:
    profiles = db.query(Admin).order_by(Admin.created_at.desc()).all()
    return [AdminProfile.model_validate(profile) for profile in profiles]


def create_user(request: UserCreate, db: Session) -> AdminProfile:
    _, profile = sign_up(request, db, role=request.role)
    return AdminProfile.model_validate(profile)


def update_user(user_id: uuid.UUID, request: UserUpdate, db: Session) -> AdminProfile:
    profile = _get_profile(user_id, db)

    if request.name is not None:
        name = request.name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Please enter a name")
        profile.name = name
    if request.role is not None:
        profile.role = request.role.value

    db.commit()
    db.refresh(profile)
    app_logger.info(f"Updated user {user_id} ({profile.role})")
    return AdminProfile.model_validate(profile)


def delete_user(user_id: uuid.UUID, current_user_id: uuid.UUID, db: Session) -> None:
    """Remove a profile and the identity behind it."""
    if user_id == current_user_id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")

    profile = _get_profile(user_id, db)
    account = db.get(UserAccount, user_id)

    db.delete(profile)
    if account:
        db.delete(account)
    db.commit()
    app_logger.info(f"Deleted user {user_id}")


def set_theme(user_id: uuid.UUID, theme: Theme, db: Session) -> AdminProfile:
    profile = _get_profile(user_id, db)
    profile.theme = theme.value
    db.commit()
    db.refresh(profile)
    return AdminProfile.model_validate(profile)
