# scoreboard/api/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from scoreboard.api.dependencies.auth import get_current_user
from scoreboard.database import get_db
from scoreboard.schema.account import (
    AdminProfile,
    Credentials,
    CurrentUser,
    SignupRequest,
    ThemeUpdate,
    Token,
)
from scoreboard.schema.base import BaseResponse
from scoreboard.services import auth as auth_handler
from scoreboard.services import users as users_handler

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=BaseResponse[AdminProfile], status_code=201)
async def signup(request: SignupRequest, db: Session = Depends(get_db)):
    _, profile = auth_handler.sign_up(request, db)
    return BaseResponse(data=AdminProfile.model_validate(profile), message="Account created")


@router.post("/login", response_model=BaseResponse[Token])
async def login(request: Credentials, db: Session = Depends(get_db)):
    return BaseResponse(data=auth_handler.sign_in(request, db))


@router.post("/logout", response_model=BaseResponse[None])
async def logout(user: CurrentUser = Depends(get_current_user)):
    # Tokens are stateless; the client drops its copy
    return BaseResponse(message="Signed out")


@router.get("/me", response_model=BaseResponse[CurrentUser])
async def me(user: CurrentUser = Depends(get_current_user)):
    return BaseResponse(data=user)


@router.get("/me/theme", response_model=BaseResponse[ThemeUpdate])
async def get_theme(user: CurrentUser = Depends(get_current_user)):
    if not user.profile:
        raise HTTPException(status_code=404, detail="No admin profile for this account")
    return BaseResponse(data=ThemeUpdate(theme=user.profile.theme))


@router.put("/me/theme", response_model=BaseResponse[ThemeUpdate])
async def set_theme(
    request: ThemeUpdate,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    profile = users_handler.set_theme(user.id, request.theme, db)
    return BaseResponse(data=ThemeUpdate(theme=profile.theme))
