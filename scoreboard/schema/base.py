# scoreboard/schema/base.py
from datetime import datetime
from typing import Generic, TypeVar, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

# Generic type for the data field
T = TypeVar("T")


class BaseResponse(BaseModel, Generic[T]):
    status: bool = True  # Indicates success (True) or failure (False)
    message: str = "Success"  # Human-readable message
    data: Optional[T] = None  # The actual payload (can be any type)
    error: Optional[dict] = None  # Error details (if any)

    class Config:
        from_attributes = True  # Enable ORM mode if needed


class TimeStampedModel(BaseModel):
    created_at: datetime
    updated_at: datetime


class DBModelBase(TimeStampedModel):
    id: UUID

    class Config:
        from_attributes = True


class ContainerIn(BaseModel):
    """Fields collected when creating a leaderboard, board or batch"""
    name: str
    description: str = ""

    @field_validator("name")
    @classmethod
    def name_required(cls, name: str) -> str:
        name = name.strip()
        if not name:
            raise ValueError("Please enter a name")
        return name

    @field_validator("description")
    @classmethod
    def strip_description(cls, description: str) -> str:
        return description.strip()


class ContainerData(DBModelBase):
    name: str
    description: str = ""
    public_id: str
    created_by: Optional[UUID] = None


class ShareLink(BaseModel):
    url: str
