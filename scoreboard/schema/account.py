# scoreboard/schema/account.py
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator


class Role(str, Enum):
    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class Permissions(BaseModel):
    """Permission flags derived from a profile role"""
    role: Optional[Role] = None
    is_admin: bool = False
    is_editor: bool = False
    is_viewer: bool = False
    can_create: bool = False
    can_edit: bool = False
    can_delete: bool = False
    can_manage_users: bool = False


class Credentials(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, email: str) -> str:
        email = email.strip().lower()
        if "@" not in email:
            raise ValueError("Please enter a valid email")
        return email


class SignupRequest(Credentials):
    name: str

    @field_validator("name")
    @classmethod
    def name_required(cls, name: str) -> str:
        name = name.strip()
        if not name:
            raise ValueError("Please enter your name")
        return name


class UserCreate(SignupRequest):
    role: Role = Role.VIEWER


class UserUpdate(BaseModel):
    name: Optional[str] = None
    role: Optional[Role] = None


class ThemeUpdate(BaseModel):
    theme: Theme


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime


class AdminProfile(BaseModel):
    id: UUID
    email: str
    name: str
    role: Role
    theme: Theme = Theme.LIGHT
    created_at: datetime

    model_config = {"from_attributes": True}


class CurrentUser(BaseModel):
    """The signed-in identity with its profile, if one exists"""
    id: UUID
    email: str
    profile: Optional[AdminProfile] = None
    permissions: Permissions


class SetupResult(BaseModel):
    email: str
    success: bool
    error: Optional[str] = None
