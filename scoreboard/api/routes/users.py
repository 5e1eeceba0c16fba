# scoreboard/api/routes/users.py
import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from scoreboard.api.dependencies.auth import can_manage_users
from scoreboard.database import get_db
from scoreboard.schema.account import AdminProfile, CurrentUser, UserCreate, UserUpdate
from scoreboard.schema.base import BaseResponse
from scoreboard.services import users as users_handler

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=BaseResponse[List[AdminProfile]])
async def list_users(
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_manage_users),
):
    return BaseResponse(data=users_handler.list_users(db))


@router.post("/", response_model=BaseResponse[AdminProfile], status_code=201)
async def create_user(
    request: UserCreate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_manage_users),
):
    return BaseResponse(data=users_handler.create_user(request, db), message="User created")


@router.patch("/{user_id}", response_model=BaseResponse[AdminProfile])
async def update_user(
    user_id: uuid.UUID,
    request: UserUpdate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_manage_users),
):
    return BaseResponse(data=users_handler.update_user(user_id, request, db), message="User updated")


@router.delete("/{user_id}", response_model=BaseResponse[None])
async def delete_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(can_manage_users),
):
    users_handler.delete_user(user_id, user.id, db)
    return BaseResponse(message="User deleted")
